"""Tick-based MIDI timing constants.

Exported MIDI files use **480 ticks per quarter note** (PPQ = 480), the common
resolution most DAWs import without rounding.

All duration constants represent the number of ticks for each note value:
- `MIDI_QUARTER_NOTE = 480` - one beat (the base unit)
- `MIDI_THIRTYSECOND_NOTE = 60` - the shortest value the duration policy produces
- `MIDI_WHOLE_NOTE = 1920` - four beats
"""

# MIDI Standards - number of ticks in each

MIDI_THIRTYSECOND_NOTE = 60
MIDI_SIXTEENTH_NOTE = 120
MIDI_EIGHTH_NOTE = 240
MIDI_QUARTER_NOTE = 480
MIDI_HALF_NOTE = 960
MIDI_WHOLE_NOTE = 1920
