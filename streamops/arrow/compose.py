"""
Transducer composition: sequential, first/second, parallel and fanout.

Allows building pipelines out of smaller transducers (FIFOs, pure maps,
user components) while keeping the valid/ready/data protocol of each part.
"""

from functools import reduce
from typing import Any, Dict, Tuple

from streamops.core.component import Transducer
from streamops.core.signals import Ready, Valid, pack, unpack


class _Unary(Transducer):
    """Wraps one transducer; forwards tick-boundary and snapshot calls."""

    def __init__(self, inner: Transducer) -> None:
        self.inner = inner

    def commit(self) -> None:
        self.inner.commit()

    def reset(self) -> None:
        self.inner.reset()

    @property
    def registered(self) -> bool:
        return self.inner.registered

    def state_dict(self) -> Dict[str, Any]:
        return {"inner": self.inner.state_dict()}


class _Binary(Transducer):
    """Wraps two transducers; forwards tick-boundary and snapshot calls."""

    def __init__(self, left: Transducer, right: Transducer) -> None:
        self.left = left
        self.right = right

    def commit(self) -> None:
        self.left.commit()
        self.right.commit()

    def reset(self) -> None:
        self.left.reset()
        self.right.reset()

    @property
    def registered(self) -> bool:
        return self.left.registered or self.right.registered

    def state_dict(self) -> Dict[str, Any]:
        return {
            "left": self.left.state_dict(),
            "right": self.right.state_dict(),
        }


class Compose(_Binary):
    """
    Sequential composition: `left` feeds `right`.

    valid/data go left -> right, ready goes right -> left:

        (v1, r1, d1) = left(valid_in, r2, data_in)
        (v2, r2, d2) = right(v1, ready_in, d1)
        outputs (v2, r1, d2)

    The apparent cycle between r2 and v1/d1 is broken because ready-out of
    every transducer depends only on its ready-in and registered state: r2 is
    computed first, then the forward pass runs left to right.
    """

    def ready(self, ready_in: Ready) -> Ready:
        return self.left.ready(self.right.ready(ready_in))

    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        r2 = self.right.ready(ready_in)
        v1, d1 = self.left.forward(valid_in, r2, data_in)
        return self.right.forward(v1, ready_in, d1)


class First(_Unary):
    """Runs `inner` on the left half of a pair; the right half passes unchanged."""

    def ready(self, ready_in: Ready) -> Ready:
        return self.inner.ready(ready_in)

    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        d_left, d_right = unpack(data_in)
        valid_out, d_out = self.inner.forward(valid_in, ready_in, d_left)
        return valid_out, pack(d_out, d_right)


class Second(_Unary):
    """Runs `inner` on the right half of a pair; the left half passes unchanged."""

    def ready(self, ready_in: Ready) -> Ready:
        return self.inner.ready(ready_in)

    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        d_left, d_right = unpack(data_in)
        valid_out, d_out = self.inner.forward(valid_in, ready_in, d_right)
        return valid_out, pack(d_left, d_out)


class Parallel(_Binary):
    """
    Parallel composition (`***`): left half of the pair through `left`,
    right half through `right`, both under the same valid-in/ready-in.

    valid-out and ready-out are the AND of both sides; data-out is the pair.
    """

    def ready(self, ready_in: Ready) -> Ready:
        return self.left.ready(ready_in) and self.right.ready(ready_in)

    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        d_left, d_right = unpack(data_in)
        v_left, out_left = self.left.forward(valid_in, ready_in, d_left)
        v_right, out_right = self.right.forward(valid_in, ready_in, d_right)
        return v_left and v_right, pack(out_left, out_right)


class Fanout(_Binary):
    """
    Fanout (`&&&`): the same data-in goes to `left` and `right`.

    valid-out and ready-out are the AND of both sides; data-out is the pair.
    """

    def ready(self, ready_in: Ready) -> Ready:
        return self.left.ready(ready_in) and self.right.ready(ready_in)

    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        v_left, out_left = self.left.forward(valid_in, ready_in, data_in)
        v_right, out_right = self.right.forward(valid_in, ready_in, data_in)
        return v_left and v_right, pack(out_left, out_right)


def compose(f: Transducer, g: Transducer) -> Compose:
    """`f` then `g`."""
    return Compose(f, g)


def chain(*stages: Transducer) -> Transducer:
    """Left-to-right sequential composition of one or more stages."""
    if not stages:
        raise ValueError("chain() needs at least one stage")
    return reduce(Compose, stages)


def first(f: Transducer) -> First:
    return First(f)


def second(f: Transducer) -> Second:
    return Second(f)


def parallel(f: Transducer, g: Transducer) -> Parallel:
    return Parallel(f, g)


def fanout(f: Transducer, g: Transducer) -> Fanout:
    return Fanout(f, g)
