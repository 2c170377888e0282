"""YAML configuration for Markov chains.

A config file keeps its chain settings under a ``markov`` section:

	```yaml
	markov:
	  seed: 42
	  start: "<s>"
	  end: "</s>"
	  max_length: 50
	```

Every key is optional.
"""

import dataclasses
import logging
import os
import typing

import yaml


logger = logging.getLogger(__name__)


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


@dataclasses.dataclass
class ChainConfig:

	"""
	Settings used to build a :class:`~markovgraph.markov_chain.MarkovChain`.

	Attributes:
		seed: Seed for the chain's random generator (None for an unseeded one).
		start: Payload of the start marker.
		end: Payload of the end marker.
		max_length: Default cap on generated sequence length (None for no cap).
	"""

	seed: typing.Optional[int] = None
	start: str = "$"
	end: str = "\n"
	max_length: typing.Optional[int] = None


	def __post_init__ (self) -> None:

		if self.max_length is not None and self.max_length <= 0:
			raise ValueError(f"max_length must be positive, got {self.max_length}")


	@classmethod
	def from_dict (cls, data: typing.Dict[str, typing.Any]) -> "ChainConfig":

		"""Build a config from the ``markov`` section of a loaded config dict, ignoring unknown keys."""

		section = data.get('markov') or {}

		if not isinstance(section, dict):
			raise ValueError(f"The markov section must be a mapping, got {type(section).__name__}")

		known = {field.name for field in dataclasses.fields(cls)}

		return cls(**{key: value for key, value in section.items() if key in known})


	@classmethod
	def from_file (cls, config_path: str = 'config.yaml') -> "ChainConfig":

		"""Load a YAML file and build a config from it (defaults if the file is missing)."""

		return cls.from_dict(load_config(config_path))
