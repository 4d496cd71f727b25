"""The event model shared by the compiler, the playback scheduler and the exporter.

An `EventSequence` is an immutable tuple of `Rest`, `Note` and `Chord` events in
performance order. It is built fresh by every compile pass and never written
back to by its consumers.
"""

import dataclasses
import typing

import typetone.pitch
import typetone.timebase


@dataclasses.dataclass (frozen=True)
class Rest:

	"""
	Silence for the given duration.
	"""

	duration: typetone.timebase.Duration


@dataclasses.dataclass (frozen=True)
class Note:

	"""
	A single pitch. Velocity is normalised to 0.0-1.0.
	"""

	pitch: typetone.pitch.Pitch
	duration: typetone.timebase.Duration
	velocity: float

	@property
	def pitches (self) -> typing.Tuple[typetone.pitch.Pitch, ...]:

		return (self.pitch,)


@dataclasses.dataclass (frozen=True)
class Chord:

	"""
	Several pitches sounding together, in the order they were typed.

	Each MIDI note appears at most once.
	"""

	pitches: typing.Tuple[typetone.pitch.Pitch, ...]
	duration: typetone.timebase.Duration
	velocity: float

	def __post_init__ (self) -> None:

		if not self.pitches:
			raise ValueError("A chord needs at least one pitch")

		if len({pitch.midi for pitch in self.pitches}) != len(self.pitches):
			raise ValueError(f"A chord cannot strike the same note twice: {' '.join(pitch.name for pitch in self.pitches)}")


Event = typing.Union[Rest, Note, Chord]
EventSequence = typing.Tuple[Event, ...]


def total_beats (events: EventSequence) -> float:

	"""Length of the whole sequence in quarter-note units."""

	return sum(event.duration.beats for event in events)


def describe (event: Event) -> str:

	"""One-line human-readable form, used by the ``show`` command and in logs."""

	if isinstance(event, Rest):
		return f"rest   {event.duration.name.lower()}"

	names = " ".join(pitch.name for pitch in event.pitches)
	kind = "note " if isinstance(event, Note) else "chord"

	return f"{kind}  {event.duration.name.lower():<13} v={event.velocity:.2f}  {names}"
