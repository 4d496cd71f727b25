"""Beat-based duration constants.

All values are in **beats**, where 1.0 = one quarter note. The playback
scheduler converts beats to seconds with ``beats * 60 / bpm``::

    import typetone.constants.durations as dur

    # A whole note at 120 BPM lasts 2 seconds
    seconds = dur.WHOLE * 60 / 120
"""

THIRTYSECOND = 0.125
SIXTEENTH = 0.25
EIGHTH = 0.5
QUARTER = 1.0
HALF = 2.0
WHOLE = 4.0
