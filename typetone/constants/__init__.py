"""Constants for typetone.

This package contains the fixed tables the compiler and its consumers share:

- ``typetone.constants.durations`` - Beat-based durations for each duration class
- ``typetone.constants.pulses`` - Tick-based MIDI timing at 480 PPQ (file export)
- ``typetone.constants.velocity`` - Normalised velocity levels and the MIDI range
- ``typetone.constants.keyboard`` - The QWERTY keyboard-to-note table
"""

# Ticks per quarter note used by the MIDI file encoder.
# These match the values in typetone.constants.pulses.

TICKS_PER_BEAT = 480
