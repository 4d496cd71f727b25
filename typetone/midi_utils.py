import logging
import typing

import mido

import typetone.constants.velocity


logger = logging.getLogger(__name__)


def to_midi_velocity (velocity: float) -> int:

	"""Scale a normalised 0.0-1.0 velocity to a MIDI note_on velocity (1-127)."""

	scaled = int(round(velocity * typetone.constants.velocity.MAX_MIDI_VELOCITY))

	return max(typetone.constants.velocity.MIN_MIDI_VELOCITY, min(typetone.constants.velocity.MAX_MIDI_VELOCITY, scaled))


def is_midi_note (note: int) -> bool:

	"""True when ``note`` fits in a MIDI note byte."""

	return 0 <= note <= 127


def select_output_device (device_name: typing.Optional[str] = None, interactive: bool = True) -> typing.Tuple[typing.Optional[str], typing.Optional[typing.Any]]:

	"""
	Select and open a MIDI output port for playback.

	If `device_name` is provided, opens that port or fails.
	If `device_name` is None, auto-discovers available ports:
	- If exactly one port exists, it is opened.
	- If several exist and `interactive` is True, asks on the console.
	- Otherwise, logs an error and returns None.

	Returns:
		A tuple of (device_name, midi_out_object) or (None, None) on failure.
	"""

	try:
		outputs = mido.get_output_names()
		logger.info(f"Available MIDI outputs: {outputs}")

		if not outputs:
			logger.error("No MIDI output devices found.")
			return None, None

		if device_name is not None:

			if device_name not in outputs:
				logger.error(f"MIDI output device '{device_name}' not found. Available devices: {outputs}")
				return None, None

			selected_name = device_name

		elif len(outputs) == 1:
			selected_name = outputs[0]
			logger.info(f"One MIDI output found - using '{selected_name}'")

		elif interactive:
			selected_name = _prompt_for_device(outputs)

		else:
			logger.error(f"Several MIDI outputs found and no device name given: {outputs}")
			return None, None

		midi_out = mido.open_output(selected_name)
		logger.info(f"Opened MIDI output: {selected_name}")

		return selected_name, midi_out

	except Exception as e:
		logger.error(f"Failed to open MIDI output: {e}")
		return None, None


def _prompt_for_device (outputs: typing.List[str]) -> str:

	"""Ask the user to pick one of several MIDI outputs."""

	print("\nAvailable MIDI output devices:\n")

	for i, name in enumerate(outputs, 1):
		print(f"  {i}. {name}")

	print()

	while True:
		try:
			choice = int(input(f"Select a device (1-{len(outputs)}): "))
			if 1 <= choice <= len(outputs):
				break
		except ValueError:
			pass
		print(f"Enter a number between 1 and {len(outputs)}.")

	selected_name = outputs[choice - 1]

	print(f"\nTip: To skip this prompt, pass the device name directly:\n")
	print(f"  python -m typetone play \"...\" --device \"{selected_name}\"\n")

	return selected_name
