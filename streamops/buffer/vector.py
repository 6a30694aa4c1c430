"""Fixed-capacity shift-register container used as FIFO storage."""

from typing import Any, Iterable, Iterator, List, Tuple


class FixedVector:
    """
    Immutable vector of `capacity` slots, filled from the right.

    `shift_in(x)` appends `x` as the newest slot and drops the slot furthest
    from it, so the length never changes. Slots are addressed relative to the
    newest one: `from_newest(0)` is the newest, `from_newest(count - 1)` is the
    oldest of the `count` most recent elements.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Any]) -> None:
        self._items: Tuple[Any, ...] = tuple(items)

    @classmethod
    def filled(cls, capacity: int, fill: Any = None, initial: Iterable[Any] = ()) -> "FixedVector":
        """`capacity - len(initial)` copies of `fill` followed by `initial` (oldest first)."""
        initial = tuple(initial)
        if len(initial) > capacity:
            raise ValueError(
                f"{len(initial)} initial elements do not fit in capacity {capacity}"
            )
        return cls((fill,) * (capacity - len(initial)) + initial)

    @property
    def capacity(self) -> int:
        return len(self._items)

    def shift_in(self, value: Any) -> "FixedVector":
        if not self._items:
            return self
        return FixedVector(self._items[1:] + (value,))

    def from_newest(self, index: int) -> Any:
        if not 0 <= index < len(self._items):
            raise IndexError(f"index {index} out of range for capacity {len(self._items)}")
        return self._items[-1 - index]

    def newest(self, count: int) -> Tuple[Any, ...]:
        """The `count` most recent elements, oldest first."""
        if count <= 0:
            return ()
        return self._items[-count:]

    def to_list(self) -> List[Any]:
        return list(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedVector):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"FixedVector({list(self._items)!r})"
