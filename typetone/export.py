"""MIDI export of compiled event sequences.

MIDI has no rest event: silence is the wait before the next note. The adapter
therefore collects rest durations as it walks the sequence and hands them to
the encoder as the lead-in of the next note or chord. Rests after the last
sounding event have nothing to attach to and are dropped.

Example:
	```python
	import typetone.export
	import typetone.notation

	events = typetone.notation.compile("cat. dog")
	data = typetone.export.export_to_bytes(events, bpm=120)
	```
"""

import logging
import typing

import typetone.events
import typetone.midi_file
import typetone.timebase


logger = logging.getLogger(__name__)


@typing.runtime_checkable
class NoteEncoder (typing.Protocol):

	"""
	What the adapter needs from a MIDI byte encoder.
	"""

	def add_note (self, pitches: typing.Sequence[int], duration: str, wait: typing.Sequence[str] = (), velocity: float = ...) -> None:

		...

	def to_bytes (self) -> bytes:

		...


EncoderFactory = typing.Callable[[float], NoteEncoder]


class ExportAdapter:

	"""
	Feeds an event sequence to an encoder and returns the encoded bytes.

	The adapter has no file-system side effects; saving is left to the caller.
	"""

	def __init__ (self, encoder_factory: typing.Optional[EncoderFactory] = None, track_name: typing.Optional[str] = None) -> None:

		"""
		Parameters:
			encoder_factory: Called with the tempo to create a fresh encoder for
				each export. Defaults to `MidiFileEncoder`.
			track_name: Track name written by the default encoder.
		"""

		def midi_file_encoder (bpm: float) -> NoteEncoder:
			return typetone.midi_file.MidiFileEncoder(bpm=bpm, track_name=track_name)

		self.encoder_factory: EncoderFactory = encoder_factory or midi_file_encoder


	def export (self, events: typetone.events.EventSequence, bpm: float) -> bytes:

		"""
		Encode ``events`` at ``bpm`` and return the file contents.

		Raises:
			InvalidTempo: If ``bpm`` is not a positive, finite number.
		"""

		return self.encode(events, bpm).to_bytes()


	def encode (self, events: typetone.events.EventSequence, bpm: float) -> NoteEncoder:

		"""
		Feed ``events`` to a fresh encoder and return it, ready to serialise.

		Raises:
			InvalidTempo: If ``bpm`` is not a positive, finite number.
		"""

		bpm = typetone.timebase.validate_tempo(bpm)
		encoder = self.encoder_factory(bpm)

		accumulated_rest: typing.List[str] = []
		notes = 0

		for event in events:

			if isinstance(event, typetone.events.Rest):
				accumulated_rest.append(event.duration.code)
				continue

			encoder.add_note(
				pitches = [pitch.midi for pitch in event.pitches],
				duration = event.duration.code,
				wait = accumulated_rest,
				velocity = event.velocity
			)

			accumulated_rest = []
			notes += 1

		if accumulated_rest:
			logger.debug(f"Dropping {len(accumulated_rest)} trailing rests with no following note")

		logger.info(f"Exported {notes} notes and chords at {bpm} BPM")

		return encoder


def export_to_bytes (events: typetone.events.EventSequence, bpm: float, track_name: typing.Optional[str] = None) -> bytes:

	"""Export with the default MIDI file encoder."""

	return ExportAdapter(track_name=track_name).export(events, bpm)
