"""Pitch resolution from single keyboard characters.

A `Pitch` is a spelled note: letter class, accidental offset and octave. The
`PitchResolver` looks a character up in the keyboard table and returns the
natural pitch it names, or ``None`` for characters outside the table.
Accidentals are applied afterwards with `Pitch.shifted()`, because the
compiler only knows about a trailing marker once it has looked ahead.

Module-level helpers:
- `parse_note_name(name)`: ``"C#4"`` / ``"Bb3"`` / ``"E5"`` → `Pitch`.
- `resolve(char)`: Resolve against the default keyboard table.
"""

import dataclasses
import re
import typing

import typetone.constants.keyboard


NATURAL_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"D": 2,
	"E": 4,
	"F": 5,
	"G": 7,
	"A": 9,
	"B": 11,
}

ACCIDENTAL_SYMBOLS: typing.Dict[int, str] = {
	-2: "bb",
	-1: "b",
	0: "",
	1: "#",
	2: "##",
}

_NOTE_NAME_RE = re.compile(r"^([A-Ga-g])(#{1,2}|b{1,2})?(-?\d+)$")


@dataclasses.dataclass (frozen=True)
class Pitch:

	"""
	A spelled pitch. MIDI numbering uses C4 = 60.
	"""

	letter: str
	accidental: int
	octave: int

	def __post_init__ (self) -> None:

		if self.letter not in NATURAL_TO_PC:
			raise ValueError(f"Unknown pitch letter: {self.letter!r}")

	@property
	def midi (self) -> int:

		"""MIDI note number (C4 = 60)."""

		return 12 * (self.octave + 1) + NATURAL_TO_PC[self.letter] + self.accidental

	@property
	def name (self) -> str:

		"""Scientific pitch name, e.g. ``"F#4"``."""

		symbol = ACCIDENTAL_SYMBOLS.get(self.accidental)

		if symbol is None:
			symbol = f"{self.accidental:+d}"

		return f"{self.letter}{symbol}{self.octave}"

	def shifted (self, semitones: int) -> "Pitch":

		"""Return the same letter with its accidental moved by ``semitones``."""

		return dataclasses.replace(self, accidental=self.accidental + semitones)

	def __str__ (self) -> str:

		return self.name


def parse_note_name (name: str) -> Pitch:

	"""Parse a scientific pitch name.

	Example:
		```python
		parse_note_name("C4")    # → Pitch("C", 0, 4)
		parse_note_name("Bb3")   # → Pitch("B", -1, 3)
		```
	"""

	match = _NOTE_NAME_RE.match(name.strip())

	if match is None:
		raise ValueError(f"Unknown note name: {name!r}. Expected e.g. 'C4', 'F#5', 'Bb3'.")

	letter, symbol, octave = match.groups()
	symbol = symbol or ""
	accidental = symbol.count("#") - symbol.count("b")

	return Pitch(letter=letter.upper(), accidental=accidental, octave=int(octave))


class PitchResolver:

	"""
	Maps single characters to pitches through a fixed keyboard table.

	Lookup is case-insensitive. Characters outside the table resolve to
	``None`` and are skipped by the compiler.
	"""

	def __init__ (self, note_map: typing.Optional[typing.Dict[str, str]] = None) -> None:

		"""Build the lookup from a ``{character: note name}`` table.

		Parameters:
			note_map: Defaults to the QWERTY keyboard table in
				``typetone.constants.keyboard``.
		"""

		if note_map is None:
			note_map = typetone.constants.keyboard.KEYBOARD_NOTE_MAP

		self._table: typing.Dict[str, Pitch] = {}

		for char, note_name in note_map.items():

			if len(char) != 1:
				raise ValueError(f"Keyboard table keys must be single characters, got {char!r}")

			self._table[char.lower()] = parse_note_name(note_name)

	def resolve (self, char: str) -> typing.Optional[Pitch]:

		"""Return the pitch for ``char``, or ``None`` if it is not in the table."""

		return self._table.get(char.lower())

	def __contains__ (self, char: str) -> bool:

		return char.lower() in self._table


_DEFAULT_RESOLVER = PitchResolver()


def resolve (char: str) -> typing.Optional[Pitch]:

	"""Resolve a character against the default keyboard table."""

	return _DEFAULT_RESOLVER.resolve(char)
