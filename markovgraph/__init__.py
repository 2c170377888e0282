"""
markovgraph - weighted random sampling and Markov chains built on it.

Two pieces, one on top of the other:

- **Weighted sampling.** ``WeightedSampler`` is a mutable mapping from keys
  to non-negative integer weights that can draw a key at random with
  probability proportional to its weight. ``increment()`` turns it into a
  frequency counter you can sample from straight away.
- **Markov graphs.** ``MarkovNode`` is a sampler whose keys are other nodes.
  Each node carries a payload (a word, a chord, a token) and counts how often
  every successor followed it. ``train_step()`` grows the graph one
  observation at a time; ``walk()`` generates an endless random walk.
- **Chains with markers.** ``MarkovChain`` wraps a node set with start and
  end markers so whole example sequences can be trained and generated.

Minimal example:

    ```python
    import markovgraph

    chain = markovgraph.MarkovChain(seed=42)
    chain.train("the cat sat on the mat".split())
    chain.train("the dog sat on the cat".split())

    chain.generate()  # e.g. ['the', 'dog', 'sat', 'on', 'the', 'mat']
    ```

Every sampler owns its random generator, so seeding makes every draw
repeatable. Nothing here is thread-safe.

Package-level exports: ``WeightedSampler``, ``MarkovNode``, ``MarkovWalk``,
``MarkovChain``, ``ChainConfig``, ``load_config`` and the errors
``SamplerError``, ``InvalidWeightError``, ``EmptySamplerError``,
``BrokenInvariantError``.
"""

import markovgraph.config
import markovgraph.errors
import markovgraph.markov_chain
import markovgraph.markov_node
import markovgraph.weighted_sampler


WeightedSampler = markovgraph.weighted_sampler.WeightedSampler
MarkovNode = markovgraph.markov_node.MarkovNode
MarkovWalk = markovgraph.markov_node.MarkovWalk
MarkovChain = markovgraph.markov_chain.MarkovChain
ChainConfig = markovgraph.config.ChainConfig
load_config = markovgraph.config.load_config

SamplerError = markovgraph.errors.SamplerError
InvalidWeightError = markovgraph.errors.InvalidWeightError
EmptySamplerError = markovgraph.errors.EmptySamplerError
BrokenInvariantError = markovgraph.errors.BrokenInvariantError
