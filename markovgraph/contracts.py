"""Capability protocols shared by samplers and anything that wants to stand in for one.

:class:`~markovgraph.weighted_sampler.WeightedSampler` satisfies all three
structurally, so code that only needs to draw can ask for a ``Sampleable``
rather than a concrete sampler.
"""

import typing


KeyType = typing.TypeVar("KeyType")


@typing.runtime_checkable
class WeightedContainer (typing.Protocol[KeyType]):

	"""
	Protocol for containers mapping keys to non-negative integer weights.
	"""

	@property
	def total_weight (self) -> int:

		"""
		Sum of every stored weight.
		"""

		...


	def set_weight (self, key: KeyType, weight: int) -> typing.Optional[int]:
		...


	def get_weight (self, key: KeyType) -> typing.Optional[int]:
		...


	def remove_key (self, key: KeyType) -> typing.Optional[int]:
		...


	def increment (self, key: KeyType) -> int:
		...


@typing.runtime_checkable
class Sampleable (typing.Protocol[KeyType]):

	"""
	Protocol for objects that can return a key chosen at random by weight.
	"""

	def draw (self) -> KeyType:
		...


@typing.runtime_checkable
class SequenceProducer (typing.Protocol[KeyType]):

	"""
	Protocol for objects that produce keys one at a time and can drop the last one produced.
	"""

	def draw_next (self) -> KeyType:
		...


	def remove_last (self) -> typing.Optional[int]:
		...
