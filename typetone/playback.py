import asyncio
import dataclasses
import logging
import typing
import weakref

import typetone.engine
import typetone.events
import typetone.pitch
import typetone.timebase


logger = logging.getLogger(__name__)


@dataclasses.dataclass (frozen=True)
class ScheduledNote:

	"""
	One sound-engine call: a pitch at an absolute time, in seconds.
	"""

	pitch: typetone.pitch.Pitch
	start: float
	duration: float
	velocity: float


def build_timeline (events: typetone.events.EventSequence, bpm: float) -> typing.List[ScheduledNote]:

	"""
	Lay an event sequence out on the clock.

	A cursor starts at zero. Rests only move it forward; notes and chords add
	one `ScheduledNote` per pitch at the cursor and then move it forward by
	``beats * 60 / bpm`` seconds.

	Raises:
		InvalidTempo: If ``bpm`` is not a positive, finite number.
	"""

	bpm = typetone.timebase.validate_tempo(bpm)

	timeline: typing.List[ScheduledNote] = []
	current_time = 0.0

	for event in events:

		seconds = event.duration.seconds(bpm)

		if isinstance(event, (typetone.events.Note, typetone.events.Chord)):
			for pitch in event.pitches:
				timeline.append(ScheduledNote(pitch, current_time, seconds, event.velocity))

		current_time += seconds

	return timeline


# One lock per engine, shared by every scheduler that drives it.
_session_locks: "weakref.WeakKeyDictionary[typing.Any, asyncio.Lock]" = weakref.WeakKeyDictionary()


def _session_lock (engine: typetone.engine.SoundEngine) -> asyncio.Lock:

	"""
	Return the lock that serialises sessions on ``engine``.

	Created on first use, from inside the running event loop.
	"""

	lock = _session_locks.get(engine)

	if lock is None:
		lock = asyncio.Lock()
		_session_locks[engine] = lock

	return lock


class PlaybackScheduler:

	"""
	Plays event sequences on a sound engine, one session at a time.

	Starting a new session always cancels the previous one first, so two
	sessions never share the instrument. This holds across schedulers: every
	scheduler driving the same engine waits on the same session lock.
	"""

	def __init__ (self, engine: typetone.engine.SoundEngine) -> None:

		self.engine = engine


	async def play (self, events: typetone.events.EventSequence, bpm: float) -> None:

		"""
		Cancel any previous session, schedule every note and start the clock.

		The tempo is checked before the engine is touched, so a rejected tempo
		leaves a running session alone.

		Raises:
			InvalidTempo: If ``bpm`` is not a positive, finite number.
		"""

		timeline = build_timeline(events, bpm)

		async with _session_lock(self.engine):

			await self.engine.reset()

			for scheduled in timeline:
				self.engine.schedule_note(scheduled.pitch, scheduled.start, scheduled.duration, scheduled.velocity)

			await self.engine.start()

		logger.info(f"Playing {len(events)} events ({len(timeline)} notes) at {bpm} BPM")


	async def stop (self) -> None:

		"""
		Cancel everything still pending and reset the clock. A no-op when idle.
		"""

		async with _session_lock(self.engine):
			await self.engine.reset()
