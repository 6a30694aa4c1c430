"""Per-tick signal values: handshake triple, one-tick register, pairing helpers."""

from typing import Any, NamedTuple, Tuple

import numpy as np

Valid = bool
Ready = bool


class Handshake(NamedTuple):
    """Valid / ready / data sampled on one tick."""

    valid: Valid
    ready: Ready
    data: Any


_UNSET = object()


class Register:
    """
    One-tick delay element.

    `value` is what was committed at the last tick boundary. During a tick the
    next value is staged with `set_next`; staging again overwrites it. `commit`
    makes it visible. A register with nothing staged keeps its value.
    """

    def __init__(self, initial: Any) -> None:
        self._initial = initial
        self.value = initial
        self._next: Any = _UNSET

    def set_next(self, value: Any) -> None:
        self._next = value

    def commit(self) -> None:
        if self._next is not _UNSET:
            self.value = self._next
        self._next = _UNSET

    def reset(self) -> None:
        """Back to the construction-time value, dropping anything staged."""
        self.value = self._initial
        self._next = _UNSET


def pack(left: Any, right: Any) -> Tuple[Any, Any]:
    """Combine two per-tick values into a pair."""
    return (left, right)


def unpack(pair: Any) -> Tuple[Any, Any]:
    """Split a paired per-tick value into its two halves."""
    left, right = pair
    return left, right


def same_value(a: Any, b: Any) -> bool:
    """
    Equality used by fixed-point resolution.

    Handles numpy arrays (element-wise comparison reduced to one bool) and
    nested tuples/lists containing them.
    """
    if a is b:
        return True
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(np.asarray(a), np.asarray(b)))
    if isinstance(a, (tuple, list)) and isinstance(b, (tuple, list)):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        return all(same_value(x, y) for x, y in zip(a, b))
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False
