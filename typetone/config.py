"""YAML configuration.

All keys are optional::

    midi:
      device_name: null       # null = auto-discover
      channel: 0
      spin_wait: true
    tempo:
      bpm: 120
    notation:
      rests: standard         # standard | extended
      raise_marker: "'"
      lower_marker: ","
      case_dynamics: true
    export:
      filename: melody.mid
      track_name: typetone
"""

import dataclasses
import logging
import os
import typing

import yaml

import typetone.notation
import typetone.policy


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "typetone.yaml"


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> typing.Dict[str, typing.Any]:

	"""
	Load configuration from a YAML file, or return an empty dict if it is missing.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		data = yaml.safe_load(f)

	if data is None:
		return {}

	if not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping at the top level")

	return data


@dataclasses.dataclass
class Settings:

	"""Typed view of the configuration file."""

	device_name: typing.Optional[str] = None
	channel: int = 0
	spin_wait: bool = True
	bpm: typing.Optional[float] = None
	rests: str = "standard"
	raise_marker: str = "'"
	lower_marker: str = ","
	case_dynamics: bool = True
	filename: str = "melody.mid"
	track_name: typing.Optional[str] = "typetone"

	@classmethod
	def from_dict (cls, config: typing.Dict[str, typing.Any]) -> "Settings":

		midi = config.get('midi') or {}
		tempo = config.get('tempo') or {}
		notation = config.get('notation') or {}
		export = config.get('export') or {}

		defaults = cls()

		return cls(
			device_name = midi.get('device_name', defaults.device_name),
			channel = int(midi.get('channel', defaults.channel)),
			spin_wait = bool(midi.get('spin_wait', defaults.spin_wait)),
			bpm = tempo.get('bpm', defaults.bpm),
			rests = notation.get('rests', defaults.rests),
			raise_marker = notation.get('raise_marker', defaults.raise_marker),
			lower_marker = notation.get('lower_marker', defaults.lower_marker),
			case_dynamics = bool(notation.get('case_dynamics', defaults.case_dynamics)),
			filename = export.get('filename', defaults.filename),
			track_name = export.get('track_name', defaults.track_name)
		)

	@classmethod
	def load (cls, config_path: str = DEFAULT_CONFIG_PATH) -> "Settings":

		return cls.from_dict(load_config(config_path))

	def grammar (self) -> typetone.notation.Grammar:

		return typetone.notation.Grammar(
			raise_marker = self.raise_marker,
			lower_marker = self.lower_marker,
			case_dynamics = self.case_dynamics
		)

	def compiler (self) -> typetone.notation.NotationCompiler:

		"""Build the notation compiler these settings describe."""

		return typetone.notation.NotationCompiler(
			grammar = self.grammar(),
			rest_policy = typetone.policy.RestPolicy.named(self.rests)
		)
