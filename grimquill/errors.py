"""
Exception types raised by the Markov chain text generator.
"""


class MarkovError(Exception):
    """Base class for all errors raised by grimquill."""


class ValidationError(MarkovError, ValueError):
    """Invalid model configuration, generation request or seed."""


class EmptyModelError(MarkovError):
    """Generation was requested without a seed from a model with no contexts."""


class MalformedSnapshotError(MarkovError, ValueError):
    """A persisted model snapshot failed structural validation."""
