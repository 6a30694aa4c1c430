"""Per-tick stimulus for driving a transducer."""

from typing import Any, Iterable, Iterator, List, Sequence, Union

from streamops.core.signals import Handshake

_Column = Union[Any, Sequence[Any]]


def _as_column(values: _Column, length: int, name: str) -> List[Any]:
    if isinstance(values, (list, tuple)):
        if len(values) != length:
            raise ValueError(f"{name} has {len(values)} ticks, expected {length}")
        return list(values)
    return [values] * length


class StimulusStream:
    """
    Pre-loaded sequence of (valid_in, ready_in, data_in) for replay.

    Each argument is either a per-tick list/tuple or a scalar repeated on
    every tick. All list arguments must have the same length.
    """

    def __init__(self, valid: _Column, ready: _Column, data: _Column = None) -> None:
        """
        Args:
            valid: upstream valid per tick (or constant)
            ready: downstream ready per tick (or constant)
            data: upstream data per tick (or constant)
        """
        lengths = {len(c) for c in (valid, ready, data) if isinstance(c, (list, tuple))}
        if len(lengths) > 1:
            raise ValueError(f"valid, ready and data must have the same length, got {sorted(lengths)}")
        if not lengths:
            raise ValueError("at least one of valid, ready, data must be a per-tick sequence")
        n = lengths.pop()
        self._valid = [bool(v) for v in _as_column(valid, n, "valid")]
        self._ready = [bool(r) for r in _as_column(ready, n, "ready")]
        self._data = _as_column(data, n, "data")
        self._index = 0

    @classmethod
    def from_tokens(cls, tokens: Iterable[Any], ready: _Column = True) -> "StimulusStream":
        """Every token valid on consecutive ticks."""
        tokens = list(tokens)
        return cls(valid=[True] * len(tokens), ready=ready, data=tokens)

    def __iter__(self) -> Iterator[Handshake]:
        self._index = 0
        return self

    def __next__(self) -> Handshake:
        if self._index >= len(self._valid):
            raise StopIteration
        i = self._index
        self._index += 1
        return Handshake(self._valid[i], self._ready[i], self._data[i])

    def __len__(self) -> int:
        return len(self._valid)

    def reset(self) -> None:
        self._index = 0
