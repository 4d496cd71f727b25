import asyncio
import dataclasses
import heapq
import itertools
import logging
import time
import typing

import mido

import typetone.midi_utils
import typetone.pitch


logger = logging.getLogger(__name__)


@typing.runtime_checkable
class SoundEngine (typing.Protocol):

	"""
	The handle the playback scheduler drives.

	Times are seconds from the engine's clock origin. Scheduling is a
	non-blocking registration; nothing sounds until ``start()``.
	"""

	def schedule_note (self, pitch: typetone.pitch.Pitch, start: float, duration: float, velocity: float) -> None:

		"""
		Register one note at ``start`` seconds, lasting ``duration`` seconds.
		"""

		...

	async def reset (self) -> None:

		"""
		Cancel everything still scheduled and move the clock back to zero.
		"""

		...

	async def start (self) -> None:

		"""
		Start the clock so that scheduled notes begin to fire.
		"""

		...


@dataclasses.dataclass (order=True)
class MidiEvent:

	"""
	A MIDI message scheduled at a time offset in seconds.

	At equal times note_off (priority 0) goes out before note_on (priority 1),
	so a repeated pitch is released before it is struck again.
	"""

	time: float
	priority: int
	sequence: int
	message_type: str = dataclasses.field(compare=False)
	note: int = dataclasses.field(compare=False, default=0)
	velocity: int = dataclasses.field(compare=False, default=0)


class MidiSoundEngine:

	"""
	A sound engine that plays notes on a MIDI output port.

	Notes are kept in a time-ordered heap and sent by an asyncio task running
	against ``time.perf_counter()``. There is one task at most: ``reset()``
	cancels it before anything new is scheduled.
	"""

	def __init__ (
		self,
		output_device_name: typing.Optional[str] = None,
		channel: int = 0,
		spin_wait: bool = True,
		interactive: bool = True
	) -> None:

		"""Open the MIDI output and prepare an empty schedule.

		Parameters:
			output_device_name: MIDI output device name. When omitted, uses the
				only available device, or asks if several are available.
			channel: MIDI channel (0-15) for every note.
			spin_wait: When True, sleep to within a millisecond of each event and
				busy-wait the rest, for tighter timing at a small CPU cost.
			interactive: Allow a console prompt when several devices exist.
		"""

		if not 0 <= channel <= 15:
			raise ValueError(f"MIDI channel must be 0-15, got {channel}")

		self.output_device_name = output_device_name
		self.channel = channel

		self.event_queue: typing.List[MidiEvent] = []
		self.task: typing.Optional[asyncio.Task] = None
		self.start_time = 0.0
		self.running = False
		self.active_notes: typing.Set[int] = set()
		self._counter = itertools.count()

		self._spin_wait = spin_wait
		self._spin_threshold = 0.001

		self.midi_out: typing.Optional[typing.Any] = None
		self._init_midi_output(interactive)


	def _init_midi_output (self, interactive: bool) -> None:

		device_name, midi_out = typetone.midi_utils.select_output_device(self.output_device_name, interactive=interactive)

		if device_name:
			self.output_device_name = device_name
			self.midi_out = midi_out
		else:
			logger.error("No MIDI output opened - playback will run silently")


	def schedule_note (self, pitch: typetone.pitch.Pitch, start: float, duration: float, velocity: float) -> None:

		"""
		Queue a note_on at ``start`` and the matching note_off ``duration`` later.
		"""

		if start < 0:
			raise ValueError("Note start cannot be negative")

		if duration <= 0:
			raise ValueError("Note duration must be positive")

		note = pitch.midi

		if not typetone.midi_utils.is_midi_note(note):
			logger.warning(f"Pitch {pitch} is outside the MIDI range, not scheduled")
			return

		heapq.heappush(self.event_queue, MidiEvent(
			time = start,
			priority = 1,
			sequence = next(self._counter),
			message_type = 'note_on',
			note = note,
			velocity = typetone.midi_utils.to_midi_velocity(velocity)
		))

		heapq.heappush(self.event_queue, MidiEvent(
			time = start + duration,
			priority = 0,
			sequence = next(self._counter),
			message_type = 'note_off',
			note = note,
			velocity = 0
		))

		logger.debug(f"Scheduled {pitch} at {start:.3f}s for {duration:.3f}s")


	async def start (self) -> None:

		"""Start the clock and the playback task.

		A playback task that is still live is cancelled first; its pending
		events stay in the queue and are played by the new task.
		"""

		await self._cancel_task()

		self.running = True
		self.start_time = time.perf_counter()
		self.task = asyncio.create_task(self._run_loop())

		logger.info(f"Playback started ({len(self.event_queue) // 2} notes scheduled)")


	async def reset (self) -> None:

		"""
		Cancel pending notes, silence sounding ones and zero the clock.

		Safe to call when nothing is scheduled.
		"""

		await self._cancel_task()

		self.running = False
		self.event_queue = []
		self._counter = itertools.count()
		self.start_time = 0.0

		self._silence()


	async def _cancel_task (self) -> None:

		"""Cancel and await the playback task until none is left."""

		# Another caller can start a task while this one is being awaited.
		while self.task is not None:

			task = self.task
			self.task = None

			if task.done():
				continue

			task.cancel()

			try:
				await task
			except asyncio.CancelledError:
				pass


	async def wait (self) -> None:

		"""Wait until every scheduled note has been sent, or playback is reset."""

		if self.task is None:
			return

		try:
			await self.task
		except asyncio.CancelledError:
			pass


	async def close (self) -> None:

		"""Reset and release the MIDI port."""

		await self.reset()

		if self.midi_out is not None:
			self.midi_out.close()
			self.midi_out = None

		logger.info("Sound engine closed")


	@property
	def elapsed (self) -> float:

		"""Seconds since the clock started, or 0.0 when stopped."""

		if not self.running:
			return 0.0

		return time.perf_counter() - self.start_time


	async def _run_loop (self) -> None:

		"""Send each queued message when its time comes, then stop."""

		while self.event_queue:

			target = self.start_time + self.event_queue[0].time
			sleep_time = target - time.perf_counter()

			if sleep_time > 0:
				if self._spin_wait and sleep_time > self._spin_threshold:
					await asyncio.sleep(sleep_time - self._spin_threshold)
					while time.perf_counter() < target:
						pass
				else:
					await asyncio.sleep(sleep_time)

			now = time.perf_counter()

			# Late events are sent immediately.
			while self.event_queue and self.start_time + self.event_queue[0].time <= now:
				self._send_midi(heapq.heappop(self.event_queue))

		self.running = False
		logger.info("Playback complete (no more scheduled notes)")


	def _send_midi (self, event: MidiEvent) -> None:

		if event.message_type == 'note_on':
			self.active_notes.add(event.note)
		else:
			self.active_notes.discard(event.note)

		if self.midi_out is None:
			return

		try:
			self.midi_out.send(mido.Message(
				event.message_type,
				channel = self.channel,
				note = event.note,
				velocity = event.velocity
			))
		except Exception:
			logger.exception("MIDI send failed (device may be disconnected)")


	def _silence (self) -> None:

		"""
		Release every sounding note, then send All Notes Off on our channel.
		"""

		active = sorted(self.active_notes)
		self.active_notes.clear()

		if self.midi_out is None:
			return

		try:
			for note in active:
				self.midi_out.send(mido.Message('note_off', channel=self.channel, note=note, velocity=0))

			self.midi_out.send(mido.Message('control_change', channel=self.channel, control=123, value=0))

		except Exception:
			logger.exception("MIDI panic failed (device may be disconnected)")
