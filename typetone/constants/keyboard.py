"""QWERTY keyboard-to-note table.

Each of the 26 letters names a natural note and octave. The three letter rows
of the keyboard map to three registers (C4 = 60, Middle C):

- Upper row ``q``-``p``: C5 up to E6
- Home row ``a``-``l``: C4 up to D5
- Lower row ``z``-``m``: C3 up to B3

Lookups are made with the lowercase letter; case is reserved for dynamics.
"""

import typing


UPPER_ROW: typing.Dict[str, str] = {
	"q": "C5",
	"w": "D5",
	"e": "E5",
	"r": "F5",
	"t": "G5",
	"y": "A5",
	"u": "B5",
	"i": "C6",
	"o": "D6",
	"p": "E6",
}

HOME_ROW: typing.Dict[str, str] = {
	"a": "C4",
	"s": "D4",
	"d": "E4",
	"f": "F4",
	"g": "G4",
	"h": "A4",
	"j": "B4",
	"k": "C5",
	"l": "D5",
}

LOWER_ROW: typing.Dict[str, str] = {
	"z": "C3",
	"x": "D3",
	"c": "E3",
	"v": "F3",
	"b": "G3",
	"n": "A3",
	"m": "B3",
}

KEYBOARD_NOTE_MAP: typing.Dict[str, str] = {**UPPER_ROW, **HOME_ROW, **LOWER_ROW}
