"""Exceptions raised by streamops."""


class StreamOpsError(Exception):
    """Base class for all streamops errors."""


class ConfigurationError(StreamOpsError, ValueError):
    """Invalid construction parameters (capacity, initial contents, snapshot)."""


class CombinationalLoopError(StreamOpsError, RuntimeError):
    """
    A feedback loop did not reach a same-tick fixed point.

    Raised by Loop when the wrapped transducer has no register on its feedback
    path, so the value fed back depends on itself within the same tick.
    """
