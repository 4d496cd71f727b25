"""Velocity constants.

Events carry a normalised velocity in the range 0.0-1.0. The sound engine and
the MIDI file encoder scale it to the MIDI attack strength (0-127).
"""

# Case dynamics: uppercase letters are accented, lowercase letters are soft
ACCENT_VELOCITY = 1.0
SOFT_VELOCITY = 0.5

# Used when case dynamics are disabled
DEFAULT_VELOCITY = 0.8

# MIDI standard range
MIN_MIDI_VELOCITY = 1           # 0 would read as note_off
MAX_MIDI_VELOCITY = 127
