"""Duration and rest policies.

Both policies are plain lookup tables handed to the compiler, so alternative
grammars are a matter of configuration rather than code.

**Duration policy.** A lexical unit (the letters of a word, or the members of a
chord group) gets one duration for all of its notes. Longer units pack more
notes into the same slot, so each note is shorter::

    length:   1      2     3        4       5          6+
    duration: WHOLE  HALF  QUARTER  EIGHTH  SIXTEENTH  THIRTY_SECOND

**Rest policy.** Designated punctuation characters are rests of a fixed length,
ordered from the dash (longest) to the exclamation mark (shortest).
"""

import typing

from typetone.timebase import Duration


DEFAULT_DURATION_STEPS: typing.List[Duration] = [
	Duration.WHOLE,
	Duration.HALF,
	Duration.QUARTER,
	Duration.EIGHTH,
	Duration.SIXTEENTH,
	Duration.THIRTY_SECOND,
]

STANDARD_RESTS: typing.Dict[str, Duration] = {
	"-": Duration.HALF,
	"–": Duration.HALF,			# en dash
	"—": Duration.HALF,			# em dash
	".": Duration.QUARTER,
	"&": Duration.EIGHTH,
	"?": Duration.SIXTEENTH,
	"!": Duration.THIRTY_SECOND,
}

EXTENDED_RESTS: typing.Dict[str, Duration] = {
	**STANDARD_RESTS,
	"/": Duration.HALF,
	'"': Duration.QUARTER,
	"%": Duration.QUARTER,
	"$": Duration.EIGHTH,
	"#": Duration.EIGHTH,
	"*": Duration.SIXTEENTH,
	"=": Duration.SIXTEENTH,
	"+": Duration.SIXTEENTH,
	"^": Duration.THIRTY_SECOND,
}

REST_TABLES: typing.Dict[str, typing.Dict[str, Duration]] = {
	"standard": STANDARD_RESTS,
	"extended": EXTENDED_RESTS,
}


class DurationPolicy:

	"""
	Monotonic step function from unit length to duration class.

	``steps[0]`` is the duration for a unit of length 1, ``steps[1]`` for
	length 2, and so on. Lengths past the end of the table clamp to the last
	(shortest) entry.
	"""

	def __init__ (self, steps: typing.Optional[typing.Sequence[Duration]] = None) -> None:

		if steps is None:
			steps = DEFAULT_DURATION_STEPS

		if not steps:
			raise ValueError("Duration policy needs at least one step")

		beats = [step.beats for step in steps]

		if any(later > earlier for earlier, later in zip(beats, beats[1:])):
			raise ValueError("Duration policy steps must not get longer as the unit grows")

		self.steps: typing.Tuple[Duration, ...] = tuple(steps)

	@property
	def ceiling (self) -> int:

		"""Unit length at which the shortest duration is reached."""

		return len(self.steps)

	def duration_for (self, unit_length: int) -> Duration:

		"""Return the duration class for a word or chord group of ``unit_length``."""

		if unit_length < 1:
			raise ValueError(f"Unit length must be at least 1, got {unit_length}")

		return self.steps[min(unit_length, self.ceiling) - 1]

	def durations (self) -> typing.FrozenSet[Duration]:

		"""Every duration class this policy can produce."""

		return frozenset(self.steps)


class RestPolicy:

	"""
	Fixed table of punctuation characters that stand for rests.
	"""

	def __init__ (self, table: typing.Optional[typing.Dict[str, Duration]] = None) -> None:

		if table is None:
			table = STANDARD_RESTS

		for char in table:
			if len(char) != 1:
				raise ValueError(f"Rest table keys must be single characters, got {char!r}")

		self.table: typing.Dict[str, Duration] = dict(table)

	@classmethod
	def named (cls, name: str) -> "RestPolicy":

		"""Build a policy from one of the named tables (``"standard"``, ``"extended"``)."""

		if name not in REST_TABLES:
			raise ValueError(f"Unknown rest table: {name!r}. Expected one of {sorted(REST_TABLES)}.")

		return cls(REST_TABLES[name])

	@classmethod
	def extended (cls) -> "RestPolicy":

		return cls(EXTENDED_RESTS)

	def rest_for (self, char: str) -> typing.Optional[Duration]:

		"""Return the rest duration for ``char``, or ``None`` if it is not a rest."""

		return self.table.get(char)

	def __contains__ (self, char: str) -> bool:

		return char in self.table

	def durations (self) -> typing.FrozenSet[Duration]:

		"""Every duration class this policy can produce."""

		return frozenset(self.table.values())
