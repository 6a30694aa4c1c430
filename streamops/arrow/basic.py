"""Combinational building blocks: identity and pure data mapping."""

from typing import Any, Callable, Tuple

from streamops.core.component import Transducer
from streamops.core.signals import Ready, Valid


class Identity(Transducer):
    """Passes valid, ready and data through unchanged."""

    def ready(self, ready_in: Ready) -> Ready:
        return ready_in

    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        return valid_in, data_in

    def __repr__(self) -> str:
        return "Identity()"


class Arr(Transducer):
    """
    Lifts a pure per-tick function onto the data path.

    Valid and ready pass through unchanged. `fn` is applied on every tick,
    including ticks where valid-in is False, so it must accept whatever the
    upstream drives on idle ticks.
    """

    def __init__(self, fn: Callable[[Any], Any]) -> None:
        self.fn = fn

    def ready(self, ready_in: Ready) -> Ready:
        return ready_in

    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        return valid_in, self.fn(data_in)

    def __repr__(self) -> str:
        return f"Arr({getattr(self.fn, '__name__', self.fn)!r})"


def identity() -> Identity:
    return Identity()


def arr(fn: Callable[[Any], Any]) -> Arr:
    return Arr(fn)
