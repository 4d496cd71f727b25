import io
import logging
import typing

import mido

import typetone.constants
import typetone.constants.velocity
import typetone.midi_utils
import typetone.timebase


logger = logging.getLogger(__name__)


class MidiFileEncoder:

	"""
	Builds a single-track standard MIDI file from timed note events.

	Each call to `add_note()` places one note or chord after the previous one,
	preceded by an optional list of rest durations to wait first. Durations are
	encoder codes (``"4"`` = quarter note); unknown codes are read as a
	quarter note.
	"""

	def __init__ (
		self,
		bpm: float,
		ticks_per_beat: int = typetone.constants.TICKS_PER_BEAT,
		channel: int = 0,
		track_name: typing.Optional[str] = None
	) -> None:

		"""Start an empty file at a fixed tempo.

		Raises:
			InvalidTempo: If ``bpm`` is not a positive, finite number.
		"""

		if ticks_per_beat <= 0:
			raise ValueError("Ticks per beat must be positive")

		if not 0 <= channel <= 15:
			raise ValueError(f"MIDI channel must be 0-15, got {channel}")

		self.bpm = typetone.timebase.validate_tempo(bpm)
		self.ticks_per_beat = ticks_per_beat
		self.channel = channel
		self.track_name = track_name

		# (absolute tick, note_off before note_on, insertion order, message)
		self._messages: typing.List[typing.Tuple[int, int, int, mido.Message]] = []
		self._cursor = 0


	def _ticks (self, code: str) -> int:

		duration = typetone.timebase.Duration.from_code(code)

		return int(duration.ticks * self.ticks_per_beat / typetone.constants.TICKS_PER_BEAT)


	def add_note (
		self,
		pitches: typing.Sequence[int],
		duration: str,
		wait: typing.Sequence[str] = (),
		velocity: float = typetone.constants.velocity.DEFAULT_VELOCITY
	) -> None:

		"""
		Add a note (one pitch) or chord (several) after waiting for ``wait``.

		Parameters:
			pitches: MIDI note numbers, all struck together.
			duration: Encoder duration code for the note length.
			wait: Encoder duration codes of the rests before the note.
			velocity: Normalised velocity, 0.0-1.0.
		"""

		if not pitches:
			raise ValueError("A note needs at least one pitch")

		for pitch in pitches:
			if not typetone.midi_utils.is_midi_note(pitch):
				raise ValueError(f"MIDI note out of range: {pitch}")

		start = self._cursor + sum(self._ticks(code) for code in wait)
		end = start + self._ticks(duration)
		midi_velocity = typetone.midi_utils.to_midi_velocity(velocity)

		for pitch in pitches:
			order = len(self._messages)
			self._messages.append((start, 1, order, mido.Message('note_on', channel=self.channel, note=pitch, velocity=midi_velocity)))
			self._messages.append((end, 0, order + 1, mido.Message('note_off', channel=self.channel, note=pitch, velocity=0)))

		self._cursor = end


	@property
	def length_ticks (self) -> int:

		"""Absolute tick at which the last note ends."""

		return self._cursor


	def to_midi_file (self) -> mido.MidiFile:

		"""Assemble the tempo, note and end-of-track messages into a MIDI file."""

		mid = mido.MidiFile(type=1, ticks_per_beat=self.ticks_per_beat)
		track = mido.MidiTrack()
		mid.tracks.append(track)

		if self.track_name:
			track.append(mido.MetaMessage('track_name', name=self.track_name, time=0))

		track.append(mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(self.bpm), time=0))

		last_tick = 0

		for tick, _, _, message in sorted(self._messages, key=lambda item: item[:3]):
			track.append(message.copy(time=tick - last_tick))
			last_tick = tick

		track.append(mido.MetaMessage('end_of_track', time=0))

		return mid


	def to_bytes (self) -> bytes:

		"""Serialise the file into standard MIDI bytes."""

		buffer = io.BytesIO()
		self.to_midi_file().save(file=buffer)

		return buffer.getvalue()


	def save (self, filename: str) -> None:

		"""Write the file to disk."""

		logger.info(f"Saving MIDI file ({len(self._messages)} messages) to {filename}...")
		self.to_midi_file().save(filename)
		logger.info(f"Saved {filename}")
