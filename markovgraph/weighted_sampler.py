"""Weighted random selection over a mutable key-to-weight mapping.

:class:`WeightedSampler` behaves like a ``dict`` whose values are
non-negative integer weights, and can return a random key with probability
proportional to its weight. It keeps a running total of the weights so a draw
costs one pass over the keys and nothing more.

Weights are also counts: :meth:`WeightedSampler.increment` adds one to a key,
which makes a sampler a frequency counter that can immediately be sampled
from. The Markov graph in :mod:`markovgraph.markov_node` is built on exactly
that.

Example:
	```python
	sampler = markovgraph.WeightedSampler({"a": 1, "b": 2, "c": 3}, seed=7)
	sampler.draw()          # "c" half of the time
	sampler.increment("a")  # now {"a": 2, "b": 2, "c": 3}
	```
"""

import random
import typing

import markovgraph.errors


KeyType = typing.TypeVar("KeyType")

# Marks "nothing drawn yet", since None is a legitimate key.
_NOTHING_DRAWN: typing.Any = object()


class WeightedSampler (typing.MutableMapping[KeyType, int]):

	"""
	A mapping from keys to integer weights that supports weighted random draws.

	All mutation (``sampler[key] = w``, ``del sampler[key]``, ``update()``,
	``pop()``, ``clear()``) goes through :meth:`set_weight` and
	:meth:`remove_key`, so the cached total always equals the sum of the
	stored weights.

	Not thread-safe. Each instance owns its random source; two samplers built
	with the same seed and given the same operations draw the same keys.
	"""

	def __init__ (
		self,
		weights: typing.Optional[typing.Mapping[KeyType, int]] = None,
		seed: typing.Optional[int] = None,
		rng: typing.Optional[random.Random] = None
	) -> None:

		"""Create a sampler, optionally copying an initial mapping of weights.

		Parameters:
			weights: Initial key to weight mapping. Entries are copied, the
				mapping itself is not kept.
			seed: Seed for a private ``random.Random``. Ignored when ``rng``
				is given.
			rng: Random number generator to draw with. Several samplers may
				share one to produce a single reproducible stream.

		Raises:
			InvalidWeightError: If an initial weight is negative or not an int.
		"""

		self._weights: typing.Dict[KeyType, int] = {}
		self._total_weight = 0
		self._rng = rng or random.Random(seed)
		self._last_drawn: typing.Any = _NOTHING_DRAWN

		if weights is not None:
			self.set_weights(weights)


	@property
	def total_weight (self) -> int:

		"""Return the sum of all stored weights."""

		return self._total_weight


	@property
	def can_draw (self) -> bool:

		"""Return True if a draw would succeed (total weight is positive)."""

		return self._total_weight > 0


	@property
	def rng (self) -> random.Random:

		"""Return the random number generator used for draws."""

		return self._rng


	def set_weight (self, key: KeyType, weight: int) -> typing.Optional[int]:

		"""Store ``weight`` for ``key`` and return the previous weight, if any.

		The sampler is left untouched when the weight is rejected.

		Raises:
			InvalidWeightError: If ``weight`` is negative or not an int.
		"""

		# bool is an int subclass but True/False are not weights.
		if isinstance(weight, bool) or not isinstance(weight, int):
			raise markovgraph.errors.InvalidWeightError(f"Weight must be an int, got {type(weight).__name__}")

		if weight < 0:
			raise markovgraph.errors.InvalidWeightError(f"Weight cannot be negative: {weight}")

		previous = self._weights.get(key)

		self._weights[key] = weight
		self._total_weight += weight - (previous or 0)

		return previous


	def get_weight (self, key: KeyType) -> typing.Optional[int]:

		"""Return the weight stored for ``key``, or None if absent."""

		return self._weights.get(key)


	def remove_key (self, key: KeyType) -> typing.Optional[int]:

		"""Remove ``key`` and return its former weight, or None if it was absent."""

		previous = self._weights.pop(key, None)

		if previous is not None:
			self._total_weight -= previous

		return previous


	def set_weights (self, weights: typing.Mapping[KeyType, int]) -> None:

		"""Apply :meth:`set_weight` to every entry of ``weights``.

		Not atomic: if an entry is rejected, the entries before it stay
		applied. Validate first if that matters.
		"""

		for key, weight in weights.items():
			self.set_weight(key, weight)


	def increment (self, key: KeyType) -> int:

		"""Add one to the weight of ``key`` (absent keys start at 0) and return the new weight."""

		weight = self._weights.get(key, 0) + 1
		self.set_weight(key, weight)

		return weight


	def clear (self) -> None:

		"""Remove every key and reset the total weight to zero."""

		self._weights.clear()
		self._total_weight = 0
		self._last_drawn = _NOTHING_DRAWN


	def draw (self) -> KeyType:

		"""Return a key chosen at random with probability proportional to its weight.

		Each key owns a slice of ``[0, total_weight)`` as wide as its weight;
		a uniform roll picks the slice. Keys with weight 0 own no slice and are
		never returned.

		Raises:
			EmptySamplerError: If the total weight is zero.
			BrokenInvariantError: If the cached total disagrees with the stored
				weights.
		"""

		if self._total_weight <= 0:
			raise markovgraph.errors.EmptySamplerError("Cannot draw from a sampler with zero total weight")

		roll = self._rng.randrange(self._total_weight)

		for key, weight in self._weights.items():
			if weight > roll:
				return key
			roll -= weight

		raise markovgraph.errors.BrokenInvariantError(
			f"No key selected with total weight {self._total_weight} (stored sum {sum(self._weights.values())})"
		)


	def draw_next (self) -> KeyType:

		"""Draw a key and remember it so :meth:`remove_last` can remove it."""

		self._last_drawn = _NOTHING_DRAWN
		self._last_drawn = self.draw()

		return self._last_drawn


	def remove_last (self) -> typing.Optional[int]:

		"""Remove the key returned by the most recent :meth:`draw_next`.

		Keys returned by plain :meth:`draw` are not remembered.

		Raises:
			EmptySamplerError: If there is no remembered key.
		"""

		if self._last_drawn is _NOTHING_DRAWN:
			raise markovgraph.errors.EmptySamplerError("No key has been drawn with draw_next()")

		key = self._last_drawn
		self._last_drawn = _NOTHING_DRAWN

		return self.remove_key(key)


	def probability (self, key: KeyType) -> float:

		"""Return the chance of ``key`` being drawn (0.0 if absent or the sampler is empty)."""

		if self._total_weight <= 0:
			return 0.0

		return self._weights.get(key, 0) / self._total_weight


	def __getitem__ (self, key: KeyType) -> int:

		return self._weights[key]


	def __setitem__ (self, key: KeyType, weight: int) -> None:

		self.set_weight(key, weight)


	def __delitem__ (self, key: KeyType) -> None:

		if key not in self._weights:
			raise KeyError(key)

		self.remove_key(key)


	def __contains__ (self, key: object) -> bool:

		return key in self._weights


	def __iter__ (self) -> typing.Iterator[KeyType]:

		return iter(self._weights)


	def __len__ (self) -> int:

		return len(self._weights)


	def __repr__ (self) -> str:

		return f"{type(self).__name__}({self._weights!r})"
