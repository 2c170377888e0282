"""A trainable Markov chain with start and end markers.

:class:`MarkovChain` owns the node set that :meth:`MarkovNode.train_step
<markovgraph.markov_node.MarkovNode.train_step>` grows, and two sentinel
nodes: every training sequence begins at the start node and finishes with an
edge into the end node, so generation knows where a sequence begins and
where it may stop.
"""

import logging
import random
import typing

import markovgraph.config
import markovgraph.errors
import markovgraph.markov_node


logger = logging.getLogger(__name__)

StateType = typing.TypeVar("StateType")

START = "$"
END = "\n"


def _check_max_length (max_length: typing.Optional[int]) -> None:

	if max_length is not None and max_length <= 0:
		raise ValueError(f"max_length must be positive, got {max_length}")


class MarkovChain (typing.Generic[StateType]):

	"""
	A first-order Markov chain trained from example sequences.
	"""

	def __init__ (
		self,
		start: typing.Any = START,
		end: typing.Any = END,
		rng: typing.Optional[random.Random] = None,
		seed: typing.Optional[int] = None,
		max_length: typing.Optional[int] = None
	) -> None:

		"""Create an untrained chain.

		Parameters:
			start: Payload of the start marker. Must not appear in training data.
			end: Payload of the end marker. Must not appear in training data.
			rng: Random generator shared by every node of the chain.
			seed: Seed for a private generator, used when ``rng`` is not given.
			max_length: Default cap on the length of :meth:`generate` output.
		"""

		if start == end:
			raise ValueError(f"Start and end markers must differ, both are {start!r}")

		_check_max_length(max_length)

		self.rng = rng or random.Random(seed)
		self.max_length = max_length

		self.start_node: markovgraph.markov_node.MarkovNode = markovgraph.markov_node.MarkovNode(start, rng=self.rng)
		self.end_node: markovgraph.markov_node.MarkovNode = markovgraph.markov_node.MarkovNode(end, rng=self.rng)

		self.nodes: typing.Set[markovgraph.markov_node.MarkovNode] = {self.start_node, self.end_node}


	@classmethod
	def from_config (cls, config: markovgraph.config.ChainConfig, rng: typing.Optional[random.Random] = None) -> "MarkovChain":

		"""Create a chain from a :class:`~markovgraph.config.ChainConfig`."""

		return cls(
			start = config.start,
			end = config.end,
			rng = rng,
			seed = config.seed,
			max_length = config.max_length
		)


	def node (self, payload: StateType) -> typing.Optional[markovgraph.markov_node.MarkovNode[StateType]]:

		"""Return the node holding ``payload``, or None if it was never seen."""

		return markovgraph.markov_node.find_node(self.nodes, payload)


	def train (self, payloads: typing.Iterable[StateType]) -> None:

		"""Train on one example sequence.

		The sequence is walked from the start node and closed with a transition
		into the end node. An empty sequence records start straight to end.

		Raises:
			ValueError: If the sequence contains a start or end marker payload.
			TypeError: If a payload is unhashable.
		"""

		payloads = list(payloads)

		for payload in payloads:
			# Unhashable payloads fail here, before any edge is recorded.
			hash(payload)

			if payload == self.start_node.payload or payload == self.end_node.payload:
				raise ValueError(f"Training data cannot contain a marker payload: {payload!r}")

		last = self.start_node.train(self.nodes, payloads)
		last.increment(self.end_node)

		logger.debug(f"Trained on {len(payloads)} payloads ({len(self.nodes)} nodes)")


	def train_many (self, sequences: typing.Iterable[typing.Iterable[StateType]]) -> None:

		"""Train on several example sequences, all sharing the same nodes."""

		count = 0

		for sequence in sequences:
			self.train(sequence)
			count += 1

		logger.debug(f"Trained on {count} sequences")


	def walk (self) -> markovgraph.markov_node.MarkovWalk:

		"""Return a random walk from the start node (markers included)."""

		return self.start_node.walk()


	def generate (self, max_length: typing.Optional[int] = None) -> typing.List[StateType]:

		"""Generate one sequence by walking from the start node.

		Generation stops before the end marker, at a node with no outgoing
		edges, or once ``max_length`` payloads have been produced.

		Parameters:
			max_length: Cap on the result length. Defaults to the chain's
				``max_length``; None means no cap.

		Raises:
			EmptySamplerError: If the chain has not been trained.
			ValueError: If ``max_length`` is not positive.
		"""

		if max_length is None:
			max_length = self.max_length

		_check_max_length(max_length)

		if not self.start_node.can_draw:
			raise markovgraph.errors.EmptySamplerError("Chain has not been trained")

		result: typing.List[StateType] = []
		walk = self.walk()

		for payload in walk:

			if walk.current is self.end_node:
				break

			result.append(payload)

			if max_length is not None and len(result) >= max_length:
				break

		return result


	def __len__ (self) -> int:

		return len(self.nodes)


	def __contains__ (self, payload: object) -> bool:

		return self.node(payload) is not None
