import random

import pytest

import markovgraph.contracts
import markovgraph.errors
import markovgraph.weighted_sampler


def _assert_consistent (sampler: markovgraph.weighted_sampler.WeightedSampler) -> None:

	"""The cached total must match the stored weights."""

	assert sampler.total_weight == sum(sampler.values())


def test_empty_sampler_has_zero_total () -> None:

	"""A new sampler holds nothing and cannot draw."""

	sampler = markovgraph.weighted_sampler.WeightedSampler()

	assert len(sampler) == 0
	assert sampler.total_weight == 0
	assert not sampler.can_draw


def test_draw_on_empty_raises () -> None:

	"""Drawing with zero total weight raises EmptySamplerError (a LookupError)."""

	sampler = markovgraph.weighted_sampler.WeightedSampler()

	with pytest.raises(markovgraph.errors.EmptySamplerError):
		sampler.draw()

	with pytest.raises(LookupError):
		sampler.draw()


def test_all_zero_weights_cannot_draw () -> None:

	"""Keys present with weight 0 still leave nothing to draw."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 0, "b": 0})

	assert len(sampler) == 2

	with pytest.raises(markovgraph.errors.EmptySamplerError):
		sampler.draw()


def test_set_weight_returns_previous_and_updates_total () -> None:

	"""set_weight returns the old weight and moves the total by the difference."""

	sampler = markovgraph.weighted_sampler.WeightedSampler()

	assert sampler.set_weight("a", 3) is None
	assert sampler.total_weight == 3

	assert sampler.set_weight("a", 1) == 3
	assert sampler.total_weight == 1

	sampler["b"] = 4
	assert sampler.total_weight == 5
	assert sampler["b"] == 4


def test_negative_weight_rejected_without_change () -> None:

	"""A negative weight raises InvalidWeightError and leaves the sampler as it was."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 2})

	with pytest.raises(markovgraph.errors.InvalidWeightError):
		sampler.set_weight("a", -1)

	with pytest.raises(ValueError):
		sampler["b"] = -5

	assert dict(sampler) == {"a": 2}
	assert sampler.total_weight == 2


@pytest.mark.parametrize("weight", [1.5, "2", None, True])
def test_non_integer_weight_rejected (weight: object) -> None:

	"""Only ints are weights."""

	sampler = markovgraph.weighted_sampler.WeightedSampler()

	with pytest.raises(markovgraph.errors.InvalidWeightError):
		sampler.set_weight("a", weight)  # type: ignore[arg-type]

	assert "a" not in sampler


def test_get_weight_has_no_side_effect () -> None:

	"""get_weight returns None for absent keys without adding them."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1})

	assert sampler.get_weight("a") == 1
	assert sampler.get_weight("z") is None
	assert "z" not in sampler

	with pytest.raises(KeyError):
		sampler["z"]


def test_remove_key () -> None:

	"""remove_key returns the old weight and subtracts it from the total."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1, "b": 2})

	assert sampler.remove_key("b") == 2
	assert sampler.total_weight == 1
	assert sampler.remove_key("b") is None
	assert sampler.total_weight == 1

	del sampler["a"]
	assert sampler.total_weight == 0

	with pytest.raises(KeyError):
		del sampler["a"]


def test_initial_weights_are_copied () -> None:

	"""Changing the source mapping after construction does not affect the sampler."""

	source = {"a": 1, "b": 2}
	sampler = markovgraph.weighted_sampler.WeightedSampler(source)

	source["c"] = 10
	source["a"] = 5

	assert dict(sampler) == {"a": 1, "b": 2}
	assert sampler.total_weight == 3


def test_set_weights_is_not_atomic () -> None:

	"""Entries before a rejected weight stay applied, entries after it are skipped."""

	sampler = markovgraph.weighted_sampler.WeightedSampler()

	with pytest.raises(markovgraph.errors.InvalidWeightError):
		sampler.set_weights({"a": 1, "b": -1, "c": 2})

	assert dict(sampler) == {"a": 1}
	_assert_consistent(sampler)


def test_clear_resets_total () -> None:

	"""clear empties the mapping and the total."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1, "b": 2})
	sampler.clear()

	assert len(sampler) == 0
	assert sampler.total_weight == 0


def test_increment_absent_key_matches_set_weight_one () -> None:

	"""Incrementing a missing key behaves like setting it to 1."""

	incremented = markovgraph.weighted_sampler.WeightedSampler()
	assigned = markovgraph.weighted_sampler.WeightedSampler()

	assert incremented.increment("k") == 1
	assigned.set_weight("k", 1)

	assert incremented == assigned
	assert incremented.total_weight == assigned.total_weight


def test_repeated_increment_counts () -> None:

	"""N increments give weight N."""

	sampler = markovgraph.weighted_sampler.WeightedSampler()

	for _ in range(25):
		sampler.increment("k")

	assert sampler.get_weight("k") == 25
	assert sampler.total_weight == 25


def test_total_matches_sum_after_every_operation () -> None:

	"""A random mix of mutations never lets the cached total drift."""

	ops = random.Random(99)
	sampler = markovgraph.weighted_sampler.WeightedSampler(seed=1)
	keys = list("abcdefgh")

	for _ in range(2000):

		key = ops.choice(keys)
		action = ops.randrange(7)

		if action == 0:
			sampler.set_weight(key, ops.randrange(10))
		elif action == 1:
			sampler.remove_key(key)
		elif action == 2:
			sampler.increment(key)
		elif action == 3:
			sampler.pop(key, None)
		elif action == 4:
			sampler.update({key: ops.randrange(5)})
		elif action == 5:
			try:
				sampler.set_weight(key, -ops.randrange(1, 5))
			except markovgraph.errors.InvalidWeightError:
				pass
		elif ops.random() < 0.05:
			sampler.clear()

		_assert_consistent(sampler)


def test_draw_frequencies_follow_weights () -> None:

	"""Over a million draws, {a:1, b:2, c:3} comes out close to 1:2:3."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1, "b": 2, "c": 3}, seed=2020)
	counter = markovgraph.weighted_sampler.WeightedSampler()
	n = 1_000_000

	for _ in range(n):
		counter.increment(sampler.draw())

	assert counter.total_weight == n

	for key, weight in sampler.items():
		expected = n * weight / sampler.total_weight
		assert abs(counter[key] - expected) / expected < 0.05


def test_zero_weight_key_is_never_drawn () -> None:

	"""Weight 0 owns no slice of the draw interval."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"never": 0, "always": 1}, seed=3)

	assert {sampler.draw() for _ in range(200)} == {"always"}


def test_same_seed_same_draws () -> None:

	"""Two samplers with the same seed and operations draw identically."""

	def run () -> list:
		sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1, "b": 5, "c": 2}, seed=77)
		draws = [sampler.draw() for _ in range(50)]
		sampler.increment("d")
		sampler.remove_key("b")
		draws.extend(sampler.draw() for _ in range(50))
		return draws

	assert run() == run()


def test_shared_rng_is_used () -> None:

	"""A supplied generator replaces the seed."""

	rng = random.Random(5)
	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1}, seed=999, rng=rng)

	assert sampler.rng is rng


def test_draw_next_and_remove_last () -> None:

	"""remove_last removes exactly the key returned by draw_next."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1, "b": 2, "c": 3}, seed=11)

	key = sampler.draw_next()
	weight = sampler.get_weight(key)

	assert sampler.remove_last() == weight
	assert key not in sampler
	_assert_consistent(sampler)

	with pytest.raises(markovgraph.errors.EmptySamplerError):
		sampler.remove_last()


def test_remove_last_before_any_draw_raises () -> None:

	"""Nothing is remembered until draw_next is called."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1}, seed=1)
	sampler.draw()

	with pytest.raises(markovgraph.errors.EmptySamplerError):
		sampler.remove_last()


def test_draw_next_can_empty_the_sampler () -> None:

	"""Drawing and removing repeatedly consumes every key exactly once."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1, "b": 2, "c": 3}, seed=8)
	seen = []

	while sampler.can_draw:
		seen.append(sampler.draw_next())
		sampler.remove_last()

	assert sorted(seen) == ["a", "b", "c"]
	assert sampler.total_weight == 0


def test_broken_total_raises () -> None:

	"""A total that disagrees with the stored weights is reported, not hidden."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 0}, seed=1)
	sampler._total_weight = 5

	with pytest.raises(markovgraph.errors.BrokenInvariantError):
		sampler.draw()


def test_probability () -> None:

	"""probability is weight over total, 0.0 when not drawable."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1, "b": 3})

	assert sampler.probability("a") == pytest.approx(0.25)
	assert sampler.probability("b") == pytest.approx(0.75)
	assert sampler.probability("z") == 0.0
	assert markovgraph.weighted_sampler.WeightedSampler().probability("a") == 0.0


def test_mapping_equality_and_repr () -> None:

	"""Samplers compare as mappings and show their weights."""

	sampler = markovgraph.weighted_sampler.WeightedSampler({"a": 1})

	assert sampler == {"a": 1}
	assert sampler != {"a": 2}
	assert repr(sampler) == "WeightedSampler({'a': 1})"


def test_satisfies_capability_protocols () -> None:

	"""The sampler structurally satisfies every capability protocol."""

	sampler = markovgraph.weighted_sampler.WeightedSampler()

	assert isinstance(sampler, markovgraph.contracts.WeightedContainer)
	assert isinstance(sampler, markovgraph.contracts.Sampleable)
	assert isinstance(sampler, markovgraph.contracts.SequenceProducer)
	assert not isinstance(object(), markovgraph.contracts.Sampleable)
