"""
Elastic buffer (FIFO) with zero-latency bypass.

* Zero-delay: while the queue is empty, valid input is routed straight to the
  output, skipping the queue.
* Drop-newest: a valid input arriving while the queue is full and the output is
  not ready is forgotten (the stored elements are kept).
* Simultaneous transfer: a full queue whose output is ready admits the new
  element while delivering the oldest, occupancy unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from streamops.buffer.vector import FixedVector
from streamops.core.component import Transducer
from streamops.core.errors import ConfigurationError
from streamops.core.signals import Handshake, Ready, Register, Valid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FifoState:
    """Registered FIFO state: storage and number of stored elements."""

    queue: FixedVector
    count: int

    @property
    def capacity(self) -> int:
        return self.queue.capacity

    @property
    def empty(self) -> bool:
        return self.count == 0

    @property
    def full(self) -> bool:
        return self.count == self.queue.capacity

    @property
    def contents(self) -> Tuple[Any, ...]:
        """Stored elements, oldest first."""
        return self.queue.newest(self.count)

    def oldest(self) -> Any:
        return self.queue.from_newest(self.count - 1)


def _check_capacity(capacity: Any, n_initial: int) -> None:
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ConfigurationError(f"capacity must be an int, got {capacity!r}")
    if capacity <= 0:
        raise ConfigurationError(f"capacity must be > 0, got {capacity}")
    if n_initial > capacity:
        raise ConfigurationError(
            f"{n_initial} initial elements exceed capacity {capacity}"
        )


def initial_state(capacity: int, initial: Sequence[Any] = (), fill: Any = None) -> FifoState:
    """State before the first tick: `initial` stored oldest first, the rest `fill`."""
    initial = tuple(initial)
    _check_capacity(capacity, len(initial))
    return FifoState(FixedVector.filled(capacity, fill, initial), len(initial))


def fifo_ready(state: FifoState, ready_in: Ready) -> Ready:
    """Ready-out: room left, or the consumer takes an element this tick."""
    return (not state.full) or ready_in


def fifo_transition(
    state: FifoState,
    valid_in: Valid,
    ready_in: Ready,
    data_in: Any,
) -> Tuple[FifoState, Handshake]:
    """
    One tick of the FIFO.

    Args:
        state: committed state at the start of the tick
        valid_in: input is valid
        ready_in: consumer is ready to receive
        data_in: input value

    Returns:
        (next state, (valid_out, ready_out, data_out))
    """
    empty_q = state.count == 0
    non_empty_q = not empty_q
    non_full_q = state.count != state.capacity

    # Occupancy only moves when exactly one side transfers.
    do_enqueue_only = valid_in and non_full_q and not ready_in
    do_shift_only = (not valid_in) and non_empty_q and ready_in

    valid_out = non_empty_q or valid_in
    ready_out = non_full_q or ready_in
    data_out = data_in if empty_q else state.oldest()

    # On a full queue this also evicts the element delivered this tick.
    if ready_out and valid_in:
        queue = state.queue.shift_in(data_in)
    else:
        queue = state.queue

    if do_enqueue_only:
        count = state.count + 1
    elif do_shift_only:
        count = max(state.count - 1, 0)
    else:
        count = state.count

    return FifoState(queue, count), Handshake(valid_out, ready_out, data_out)


class Fifo(Transducer):
    """
    FIFO of `capacity` elements behind a one-tick register.

    Bypass while empty (count == 0), buffered otherwise; fullness only changes
    the admission rule. Each instance owns its state: use one instance per
    place in a graph.
    """

    def __init__(self, capacity: int, initial: Sequence[Any] = (), fill: Any = None) -> None:
        """
        Args:
            capacity: total number of slots, initial elements included.
            initial: elements stored before the first tick, oldest first.
            fill: value of the slots not covered by `initial`.
        """
        self.fill = fill
        self._state = Register(initial_state(capacity, initial, fill))

    @property
    def state(self) -> FifoState:
        return self._state.value

    @property
    def capacity(self) -> int:
        return self.state.capacity

    @property
    def count(self) -> int:
        return self.state.count

    @property
    def contents(self) -> Tuple[Any, ...]:
        return self.state.contents

    @property
    def empty(self) -> bool:
        return self.state.empty

    @property
    def full(self) -> bool:
        return self.state.full

    @property
    def registered(self) -> bool:
        return True

    def ready(self, ready_in: Ready) -> Ready:
        return fifo_ready(self.state, ready_in)

    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        next_state, out = fifo_transition(self.state, valid_in, ready_in, data_in)
        if valid_in and not out.ready:
            logger.debug("FIFO full (%d), dropping %r", self.capacity, data_in)
        self._state.set_next(next_state)
        return out.valid, out.data

    def commit(self) -> None:
        self._state.commit()

    def reset(self) -> None:
        self._state.reset()

    def state_dict(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "count": self.count,
            "queue": self.state.queue.to_list(),
        }

    def load_state_dict(self, state: Dict[str, Any]) -> None:
        """Restore a snapshot taken with `state_dict` on a FIFO of the same capacity."""
        queue = list(state.get("queue", []))
        count = state.get("count")
        if len(queue) != self.capacity:
            raise ConfigurationError(
                f"snapshot queue has {len(queue)} slots, FIFO capacity is {self.capacity}"
            )
        if isinstance(count, bool) or not isinstance(count, int) or not 0 <= count <= self.capacity:
            raise ConfigurationError(f"snapshot count {count!r} outside [0, {self.capacity}]")
        self._state.value = FifoState(FixedVector(queue), count)

    def __repr__(self) -> str:
        return f"Fifo(capacity={self.capacity}, count={self.count})"


@dataclass
class FifoConfig:
    """FIFO description as stored in configuration files."""

    capacity: int
    initial: List[Any] = field(default_factory=list)
    fill: Any = None

    def __post_init__(self) -> None:
        if isinstance(self.initial, tuple):
            self.initial = list(self.initial)
        _check_capacity(self.capacity, len(self.initial))

    def build(self) -> Fifo:
        return Fifo(self.capacity, self.initial, self.fill)

    def to_dict(self) -> Dict[str, Any]:
        return {"capacity": self.capacity, "initial": list(self.initial), "fill": self.fill}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FifoConfig":
        if "capacity" not in data:
            raise ConfigurationError("FIFO configuration needs a 'capacity'")
        unknown = set(data) - {"capacity", "initial", "fill"}
        if unknown:
            raise ConfigurationError(f"unknown FIFO configuration keys: {sorted(unknown)}")
        return cls(
            capacity=data["capacity"],
            initial=list(data.get("initial") or []),
            fill=data.get("fill"),
        )


def fifo(capacity: int, fill: Any = None) -> Fifo:
    """Empty zero-delay FIFO of `capacity` elements."""
    return fifo_ic(capacity, (), fill)


def fifo_ic(capacity: int, initial: Sequence[Any], fill: Any = None) -> Fifo:
    """Zero-delay FIFO of `capacity` elements, `initial` stored before the first tick."""
    return Fifo(capacity, initial, fill)
