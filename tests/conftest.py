import asyncio
import typing

import mido
import pytest

import typetone.pitch


class FakeMidiOut:

	"""MIDI output stub that remembers what was sent."""

	def __init__ (self) -> None:

		self.sent: typing.List[mido.Message] = []
		self.closed = False

	def send (self, message: mido.Message) -> None:

		"""Record an outgoing MIDI message."""

		self.sent.append(message)

	def close (self) -> None:

		"""Mark the fake device as closed."""

		self.closed = True


class FakeSoundEngine:

	"""Sound engine stand-in that logs every call in order."""

	def __init__ (self) -> None:

		self.calls: typing.List[typing.Tuple[typing.Any, ...]] = []
		self.scheduled: typing.List[typing.Tuple[typetone.pitch.Pitch, float, float, float]] = []
		self.running = False

	def schedule_note (self, pitch: typetone.pitch.Pitch, start: float, duration: float, velocity: float) -> None:

		self.calls.append(("schedule", pitch, start, duration, velocity))
		self.scheduled.append((pitch, start, duration, velocity))

	async def reset (self) -> None:

		self.calls.append(("reset",))
		self.scheduled = []
		self.running = False

		# Yield like a real engine awaiting its task, so sessions can interleave.
		await asyncio.sleep(0)

	async def start (self) -> None:

		self.calls.append(("start",))
		self.running = True


# Module-level reference so tests can inspect the most recently opened port.
_current_fake_output: typing.Optional[FakeMidiOut] = None


def _fake_get_output_names () -> typing.List[str]:

	"""Return a fixed list of MIDI output names for tests."""

	return ["Dummy MIDI"]


def _fake_open_output (name: str) -> FakeMidiOut:

	"""Return a fresh fake MIDI output regardless of the name."""

	global _current_fake_output
	_current_fake_output = FakeMidiOut()
	return _current_fake_output


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> None:

	"""Patch mido to use a fake MIDI output for tests that open one."""

	monkeypatch.setattr(mido, "get_output_names", _fake_get_output_names)
	monkeypatch.setattr(mido, "open_output", _fake_open_output)


@pytest.fixture
def fake_output (patch_midi: None) -> typing.Callable[[], typing.Optional[FakeMidiOut]]:

	"""Return a getter for the fake port opened during the test."""

	return lambda: _current_fake_output


@pytest.fixture
def fake_engine () -> FakeSoundEngine:

	"""A fresh recording sound engine."""

	return FakeSoundEngine()
