"""Exceptions raised by weighted samplers and Markov graphs.

Every error derives from :class:`SamplerError` and also from the builtin
exception a caller would naturally expect, so ``except ValueError`` around a
bad weight or ``except LookupError`` around a draw keep working.
"""


class SamplerError (Exception):

	"""Base class for all markovgraph errors."""


class InvalidWeightError (SamplerError, ValueError):

	"""A weight was negative or not an integer."""


class EmptySamplerError (SamplerError, LookupError):

	"""
	A draw was attempted on a sampler whose total weight is zero.

	During a walk this is the natural end of the sequence: the walk reached a
	node with no outgoing weight.
	"""


class BrokenInvariantError (SamplerError, ArithmeticError):

	"""
	The weighted scan selected nothing although the total weight is positive.

	The cached total no longer matches the stored weights. This is always a
	bug and should not be retried.
	"""
