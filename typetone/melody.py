import asyncio
import logging
import signal
import typing

import typetone.engine
import typetone.events
import typetone.export
import typetone.midi_file
import typetone.notation
import typetone.playback
import typetone.timebase


logger = logging.getLogger(__name__)


class Melody:

	"""
	A notation string compiled once, ready to play or export.

	Playing and exporting read the same event sequence, so what is heard is
	exactly what is written to the MIDI file.

	Example:
		```python
		import typetone

		melody = typetone.Melody("(qet adg) cat. Dog!", bpm=100)

		melody.save("melody.mid")
		melody.play()
		```
	"""

	def __init__ (
		self,
		text: str,
		bpm: float,
		compiler: typing.Optional[typetone.notation.NotationCompiler] = None,
		track_name: typing.Optional[str] = None
	) -> None:

		"""Compile ``text`` and keep the result.

		Raises:
			InvalidTempo: If ``bpm`` is not a positive, finite number.
		"""

		self.text = text
		self.bpm = typetone.timebase.validate_tempo(bpm)
		self.track_name = track_name
		self.events: typetone.events.EventSequence = typetone.notation.compile(text, compiler)

		self._scheduler: typing.Optional[typetone.playback.PlaybackScheduler] = None


	def timeline (self) -> typing.List[typetone.playback.ScheduledNote]:

		"""Every note with its absolute start time and length in seconds."""

		return typetone.playback.build_timeline(self.events, self.bpm)


	def duration_seconds (self) -> float:

		"""Length of the whole melody, trailing rests included."""

		return typetone.events.total_beats(self.events) * typetone.timebase.seconds_per_beat(self.bpm)


	def to_midi_bytes (self) -> bytes:

		"""Encode the melody as a standard MIDI file."""

		return typetone.export.export_to_bytes(self.events, self.bpm, track_name=self.track_name)


	def save (self, filename: str = "melody.mid") -> None:

		"""Write the melody to a MIDI file."""

		encoder = typetone.midi_file.MidiFileEncoder(bpm=self.bpm, track_name=self.track_name)
		typetone.export.ExportAdapter(encoder_factory=lambda bpm: encoder).encode(self.events, self.bpm)

		encoder.save(filename)


	async def play_async (self, engine: typetone.engine.SoundEngine) -> None:

		"""
		Start playing on ``engine`` and return once the notes are scheduled.

		Any melody already playing through this object is cancelled first.
		"""

		if self._scheduler is None or self._scheduler.engine is not engine:
			self._scheduler = typetone.playback.PlaybackScheduler(engine)

		await self._scheduler.play(self.events, self.bpm)


	async def stop (self) -> None:

		"""Cancel playback started with `play_async()`."""

		if self._scheduler is not None:
			await self._scheduler.stop()


	def play (self, device_name: typing.Optional[str] = None, channel: int = 0, spin_wait: bool = True) -> None:

		"""
		Play the melody on a MIDI output and block until it ends.

		Ctrl+C stops playback and silences the instrument.
		"""

		try:
			asyncio.run(self._run(device_name, channel, spin_wait))

		except KeyboardInterrupt:
			pass


	async def _run (self, device_name: typing.Optional[str], channel: int, spin_wait: bool) -> None:

		engine = typetone.engine.MidiSoundEngine(output_device_name=device_name, channel=channel, spin_wait=spin_wait)

		stop_event = asyncio.Event()
		loop = asyncio.get_running_loop()

		def _request_stop () -> None:

			"""
			Signal handler to request a clean shutdown.
			"""

			stop_event.set()

		for sig in (signal.SIGINT, signal.SIGTERM):
			loop.add_signal_handler(sig, _request_stop)

		try:
			await self.play_async(engine)

			await asyncio.wait(
				[asyncio.create_task(stop_event.wait()), asyncio.create_task(engine.wait())],
				return_when = asyncio.FIRST_COMPLETED
			)

		finally:
			await self.stop()
			await engine.close()
