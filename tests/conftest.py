import random

import pytest

import markovgraph.markov_chain
import markovgraph.markov_node


@pytest.fixture
def rng () -> random.Random:

	"""A deterministic random generator."""

	return random.Random(1234)


@pytest.fixture
def trained_graph (rng: random.Random) -> tuple:

	"""Start node S trained on a, b, a, c, plus the node set it grew."""

	start = markovgraph.markov_node.MarkovNode("S", rng=rng)
	nodes = {start}

	start.train(nodes, ["a", "b", "a", "c"])

	return start, nodes


@pytest.fixture
def word_chain () -> markovgraph.markov_chain.MarkovChain:

	"""A seeded chain trained on a few short sentences."""

	chain: markovgraph.markov_chain.MarkovChain = markovgraph.markov_chain.MarkovChain(seed=42)
	chain.train_many([
		"the cat sat on the mat".split(),
		"the dog sat on the cat".split(),
		"a dog ran".split(),
	])

	return chain
