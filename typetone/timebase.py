"""Shared time base for playback and export.

Every event carries a symbolic `Duration`. The playback scheduler turns it into
seconds and the export adapter turns it into an encoder duration code; both
conversions go through the tables in this module so that what is heard and
what is written agree.

Module-level helpers:
- `validate_tempo(bpm)`: Reject anything that is not a finite, positive number.
- `seconds_per_beat(bpm)`: Length of one quarter note in seconds.
- `to_seconds(duration, bpm)`: Absolute length of a duration at a tempo.
"""

import enum
import logging
import math
import typing

import typetone.constants.durations
import typetone.constants.pulses


logger = logging.getLogger(__name__)


class InvalidTempo (ValueError):

	"""Raised when a tempo is not a finite number of beats per minute above zero."""

	pass


class Duration (enum.Enum):

	"""
	The closed set of note-length classes the compiler can emit.

	The enum value is the encoder duration code (the note-value denominator:
	``"4"`` is a quarter note).
	"""

	WHOLE = "1"
	HALF = "2"
	QUARTER = "4"
	EIGHTH = "8"
	SIXTEENTH = "16"
	THIRTY_SECOND = "32"

	@property
	def beats (self) -> float:

		"""Length in quarter-note units."""

		return DURATION_BEATS[self]

	@property
	def ticks (self) -> int:

		"""Length in MIDI ticks at 480 PPQ."""

		return DURATION_TICKS[self]

	@property
	def code (self) -> str:

		"""Encoder duration code."""

		return self.value

	def seconds (self, bpm: float) -> float:

		"""Absolute length at the given tempo."""

		return to_seconds(self, bpm)

	@classmethod
	def from_code (cls, code: str) -> "Duration":

		"""Look up a duration by encoder code.

		Unknown codes fall back to a quarter note rather than failing, so a
		single bad value cannot abort an export.
		"""

		try:
			return cls(code)
		except ValueError:
			logger.warning(f"Unexpected duration code {code!r}, using a quarter note")
			return cls.QUARTER


DURATION_BEATS: typing.Dict[Duration, float] = {
	Duration.WHOLE: typetone.constants.durations.WHOLE,
	Duration.HALF: typetone.constants.durations.HALF,
	Duration.QUARTER: typetone.constants.durations.QUARTER,
	Duration.EIGHTH: typetone.constants.durations.EIGHTH,
	Duration.SIXTEENTH: typetone.constants.durations.SIXTEENTH,
	Duration.THIRTY_SECOND: typetone.constants.durations.THIRTYSECOND,
}

DURATION_TICKS: typing.Dict[Duration, int] = {
	Duration.WHOLE: typetone.constants.pulses.MIDI_WHOLE_NOTE,
	Duration.HALF: typetone.constants.pulses.MIDI_HALF_NOTE,
	Duration.QUARTER: typetone.constants.pulses.MIDI_QUARTER_NOTE,
	Duration.EIGHTH: typetone.constants.pulses.MIDI_EIGHTH_NOTE,
	Duration.SIXTEENTH: typetone.constants.pulses.MIDI_SIXTEENTH_NOTE,
	Duration.THIRTY_SECOND: typetone.constants.pulses.MIDI_THIRTYSECOND_NOTE,
}


def validate_tempo (bpm: typing.Any) -> float:

	"""Check a tempo and return it as a float.

	Parameters:
		bpm: Beats per minute. Must be an int or float, finite, and above zero.

	Returns:
		The tempo as a float.

	Raises:
		InvalidTempo: For booleans, non-numbers, NaN, infinities, zero and
			negative values.

	Example:
		```python
		validate_tempo(120)   # → 120.0
		validate_tempo(0)     # raises InvalidTempo
		```
	"""

	if isinstance(bpm, bool) or not isinstance(bpm, (int, float)):
		raise InvalidTempo(f"Tempo must be a number of beats per minute, got {bpm!r}")

	if not math.isfinite(bpm) or bpm <= 0:
		raise InvalidTempo(f"Tempo must be positive and finite, got {bpm!r}")

	return float(bpm)


def seconds_per_beat (bpm: float) -> float:

	"""Length of one quarter note in seconds."""

	return 60.0 / validate_tempo(bpm)


def to_seconds (duration: Duration, bpm: float) -> float:

	"""Convert a duration class to seconds: ``beats * (60 / bpm)``."""

	return duration.beats * seconds_per_beat(bpm)
