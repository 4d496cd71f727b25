"""Command-line interface.

Usage::

    python -m typetone play "(qet adg) cat. Dog!" --bpm 100
    python -m typetone export "cat dog" --bpm 120 -o melody.mid
    python -m typetone show "a.b" --bpm 120
"""

import argparse
import logging
import sys
import typing

import yaml

import typetone.config
import typetone.events
import typetone.melody
import typetone.timebase


logger = logging.getLogger(__name__)


def _build_parser () -> argparse.ArgumentParser:

	parser = argparse.ArgumentParser(prog="typetone", description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument("--config",  type=str, default=typetone.config.DEFAULT_CONFIG_PATH, help="YAML config file (default: typetone.yaml)")
	parser.add_argument("--verbose", action="store_true",                                   help="Log every event")

	commands = parser.add_subparsers(dest="command", required=True)

	for name, help_text in (("play", "Play on a MIDI output"), ("export", "Write a MIDI file"), ("show", "Print the compiled events")):
		command = commands.add_parser(name, help=help_text)
		command.add_argument("text",  type=str,                help="Notation string")
		command.add_argument("--bpm", type=float, default=None, help="Tempo in BPM (default: tempo.bpm from the config file)")

		if name == "play":
			command.add_argument("--device", type=str, default=None, help="MIDI output device name")

		if name == "export":
			command.add_argument("-o", "--output", type=str, default=None, help="Output filename (default: export.filename from the config file)")

	return parser


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the typetone command.
	"""

	args = _build_parser().parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	try:
		settings = typetone.config.Settings.load(args.config)
		compiler = settings.compiler()
	except (ValueError, yaml.YAMLError) as e:
		logger.error(f"Invalid config {args.config}: {e}")
		return 2

	bpm = args.bpm if args.bpm is not None else settings.bpm

	if bpm is None:
		logger.error("No tempo given: pass --bpm or set tempo.bpm in the config file")
		return 2

	try:
		melody = typetone.melody.Melody(args.text, bpm, compiler=compiler, track_name=settings.track_name)
	except typetone.timebase.InvalidTempo as e:
		logger.error(str(e))
		return 2

	if args.command == "show":
		for event in melody.events:
			print(typetone.events.describe(event))
		print(f"\n{len(melody.events)} events, {melody.duration_seconds():.2f} seconds at {melody.bpm:g} BPM")

	elif args.command == "export":
		melody.save(args.output or settings.filename)

	else:
		logger.info("Playing melody. Press Ctrl+C to stop.")
		melody.play(device_name=args.device or settings.device_name, channel=settings.channel, spin_wait=settings.spin_wait)

	return 0


if __name__ == "__main__":
	sys.exit(main())
