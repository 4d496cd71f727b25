"""
typetone - turn typed text into melodies.

Every letter on a QWERTY keyboard is a note: the home row is the octave around
Middle C, the row above is an octave higher and the row below an octave lower.
Words set the rhythm, punctuation makes rests, and parentheses stack words
into chords. The compiled melody can be played live on a MIDI output or
written to a standard MIDI file, and both read the same compiled events.

Notation:

- **Words.** ``cat`` is three notes. A word's letters share one duration: one
  letter is a whole note, two are halves, three are quarters, and so on down
  to thirty-seconds for words of six letters or more.
- **Accidentals.** A trailing ``'`` raises the letter before it by a
  semitone, a trailing ``,`` lowers it.
- **Dynamics.** Uppercase letters are played louder than lowercase ones.
- **Rests.** ``-`` is a half rest, ``.`` a quarter, ``&`` an eighth, ``?`` a
  sixteenth and ``!`` a thirty-second. An extended table adds more symbols.
- **Chords.** ``(cat dog)`` plays two chords; each member word is one chord
  and they share a duration set by the number of members.

Minimal example:

    ```python
    import typetone

    melody = typetone.Melody("(qet adg) cat. Dog!", bpm=100)
    melody.save("melody.mid")
    melody.play()
    ```

Package-level exports: ``Melody``, ``NotationCompiler``, ``Grammar``,
``compile``, ``InvalidTempo``.
"""

import typetone.melody
import typetone.notation
import typetone.timebase


Melody = typetone.melody.Melody
NotationCompiler = typetone.notation.NotationCompiler
Grammar = typetone.notation.Grammar
compile = typetone.notation.compile
InvalidTempo = typetone.timebase.InvalidTempo
