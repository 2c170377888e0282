"""Markov chain states as nodes of a weighted directed graph.

A :class:`MarkovNode` is a :class:`~markovgraph.weighted_sampler.WeightedSampler`
whose keys are other nodes: the weight of an edge is the number of times the
transition was observed. Training grows the graph one observation at a time
with :meth:`MarkovNode.train_step`; generation walks it with
:class:`MarkovWalk`, drawing each successor by weight.

Nodes compare and hash by payload alone. Edges are never looked at, which
is what lets a node sit in a ``set`` while the graph contains cycles and
self-loops.

Example:
	```python
	nodes = set()
	start = markovgraph.MarkovNode("$", seed=1)
	nodes.add(start)

	current = start
	for word in "the cat saw the dog".split():
		current = current.train_step(nodes, word)

	list(itertools.islice(start.walk(), 5))
	```
"""

import logging
import random
import typing

import markovgraph.weighted_sampler


logger = logging.getLogger(__name__)

PayloadType = typing.TypeVar("PayloadType")


class _PayloadKey:

	"""Stands in for a node in set membership tests without building one."""

	def __init__ (self, payload: typing.Any) -> None:

		self.payload = payload


	def __eq__ (self, other: object) -> bool:

		if not isinstance(other, MarkovNode):
			return NotImplemented

		return bool(self.payload == other.payload)


	def __hash__ (self) -> int:

		return hash(self.payload)


def find_node (
	nodes: typing.AbstractSet["MarkovNode[PayloadType]"],
	payload: PayloadType
) -> typing.Optional["MarkovNode[PayloadType]"]:

	"""Return the node in ``nodes`` holding ``payload``, or None.

	Misses are answered by a hash lookup. A hit scans for the stored
	instance, since sets do not hand back their members.
	"""

	if _PayloadKey(payload) not in nodes:
		return None

	for node in nodes:
		if node.payload == payload:
			return node

	return None


class MarkovNode (markovgraph.weighted_sampler.WeightedSampler["MarkovNode[PayloadType]"], typing.Generic[PayloadType]):

	"""
	A state in a Markov chain, holding a payload and weighted edges to successor states.

	Iterating a node yields its successor nodes, like any mapping. To walk the
	chain use :meth:`walk`.
	"""

	def __init__ (
		self,
		payload: typing.Optional[PayloadType] = None,
		edges: typing.Optional[typing.Mapping["MarkovNode[PayloadType]", int]] = None,
		seed: typing.Optional[int] = None,
		rng: typing.Optional[random.Random] = None
	) -> None:

		"""Create a node for ``payload`` with an optional copy of ``edges``.

		Parameters:
			payload: The value this state represents. Must be hashable. Fixed
				for the node's lifetime.
			edges: Initial successor to transition count mapping (copied).
			seed: Seed for the node's private random generator.
			rng: Shared random generator. Nodes created by :meth:`train_step`
				share their parent's generator.
		"""

		self._payload = payload

		super().__init__(weights=edges, seed=seed, rng=rng)


	@classmethod
	def copy_of (cls, other: "MarkovNode[PayloadType]") -> "MarkovNode[PayloadType]":

		"""Return a new node with the payload of ``other`` and a copy of its edges."""

		return cls(other.payload, edges=other, rng=other.rng)


	@property
	def payload (self) -> typing.Optional[PayloadType]:

		"""Return the value this node represents."""

		return self._payload


	def train_step (self, nodes: typing.MutableSet["MarkovNode[PayloadType]"], payload: PayloadType) -> "MarkovNode[PayloadType]":

		"""Record one observed transition from this node to ``payload`` and return the successor.

		The successor is looked up in ``nodes`` by payload. If no node holds
		``payload`` yet, one is created and added to ``nodes``. The edge from
		this node to the successor is then incremented.

		Feed the returned node back in as the current node for the next
		observation to train on a whole sequence.

		Parameters:
			nodes: Every node of the chain. Shared by all training sequences.
			payload: The value observed after this node's payload.

		Returns:
			The successor node.
		"""

		child = find_node(nodes, payload)

		if child is None:
			child = MarkovNode(payload, rng=self.rng)
			nodes.add(child)
			logger.debug(f"New node {payload!r} ({len(nodes)} nodes)")

		self.increment(child)

		return child


	def train (self, nodes: typing.MutableSet["MarkovNode[PayloadType]"], payloads: typing.Iterable[PayloadType]) -> "MarkovNode[PayloadType]":

		"""Train on a sequence of payloads starting from this node and return the last node reached."""

		current = self

		for payload in payloads:
			current = current.train_step(nodes, payload)

		return current


	def step (self) -> "MarkovNode[PayloadType]":

		"""Return a successor chosen by edge weight.

		Raises:
			EmptySamplerError: If this node has no outgoing weight.
		"""

		return self.draw()


	def walk (self, include_start: bool = False) -> "MarkovWalk[PayloadType]":

		"""Return a random walk starting at this node.

		Parameters:
			include_start: Emit this node's own payload before the first
				successor. Off by default, so a walk continues the chain from
				here.
		"""

		return MarkovWalk(self, include_start=include_start)


	def __eq__ (self, other: object) -> bool:

		# Payload only. Comparing edges would recurse forever through cycles.
		if self is other:
			return True

		if not isinstance(other, MarkovNode):
			return NotImplemented

		return bool(self._payload == other._payload)


	def __hash__ (self) -> int:

		return hash(self._payload)


	def __repr__ (self) -> str:

		edges = {node.payload: weight for node, weight in self.items()}

		return f"{type(self).__name__}({self._payload!r}, {edges!r})"


class MarkovWalk (typing.Iterator[typing.Optional[PayloadType]]):

	"""
	An iterator over the payloads of a random walk through Markov nodes.

	The walk is infinite unless it reaches a node with no outgoing weight, in
	which case iteration stops. Cycles are followed freely, so callers decide
	when to stop (``itertools.islice``, a terminator payload, ...).
	"""

	def __init__ (self, node: MarkovNode[PayloadType], include_start: bool = False) -> None:

		"""Start a walk at ``node``, optionally emitting its payload first."""

		self._current = node
		self._pending_start = include_start


	@property
	def current (self) -> MarkovNode[PayloadType]:

		"""Return the node whose payload was emitted last (or the start node)."""

		return self._current


	def has_next (self) -> bool:

		"""Return True if another payload can be produced."""

		return self._pending_start or self._current.can_draw


	def step (self) -> typing.Optional[PayloadType]:

		"""Move to the next node and return its payload.

		Raises:
			EmptySamplerError: If the current node has no outgoing weight.
		"""

		if self._pending_start:
			self._pending_start = False
			return self._current.payload

		self._current = self._current.step()

		return self._current.payload


	def __next__ (self) -> typing.Optional[PayloadType]:

		if not self.has_next():
			raise StopIteration

		return self.step()
