"""In-memory per-tick trace with numpy and CSV export."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np


class TraceHistory:
    """
    Buffer of per-tick records (inputs, outputs, occupancy, ...).
    Supports export to CSV and numpy.
    """

    def __init__(self, max_length: Optional[int] = None) -> None:
        """
        Args:
            max_length: maximum number of ticks to keep (None = unbounded).
        """
        self._max_length = max_length
        self._data: Dict[str, List[Any]] = {}
        self._tick_count = 0

    def append(self, **kwargs: Any) -> None:
        """Add one record for the current tick (key -> value)."""
        for key, value in kwargs.items():
            if key not in self._data:
                self._data[key] = []
            self._data[key].append(value)
        self._tick_count += 1
        if self._max_length is not None and self._tick_count > self._max_length:
            for key in self._data:
                self._data[key] = self._data[key][-self._max_length:]
            self._tick_count = self._max_length

    def clear(self) -> None:
        self._data.clear()
        self._tick_count = 0

    def column(self, key: str) -> List[Any]:
        """Series for a key as a plain list (values untouched)."""
        return list(self._data.get(key, []))

    def get(self, key: str) -> np.ndarray:
        """Series for a key as a numpy array."""
        if key not in self._data:
            return np.array([])
        values = self._data[key]
        if values and not all(isinstance(v, (bool, int, float, np.generic)) for v in values):
            # Element-wise so that tuple payloads stay one cell each.
            out = np.empty(len(values), dtype=object)
            for i, v in enumerate(values):
                out[i] = v
            return out
        return np.array(values)

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {k: self.get(k) for k in self._data}

    def to_numpy(self, keys: Optional[List[str]] = None) -> Dict[str, np.ndarray]:
        """Like to_dict, optionally filtered by keys."""
        keys = keys or list(self._data.keys())
        return {k: self.get(k) for k in keys if k in self._data}

    def transfers(
        self,
        valid_key: str = "valid_out",
        ready_key: str = "ready_in",
        data_key: str = "data_out",
    ) -> List[Any]:
        """Data handed downstream (valid and ready on the same tick), in order."""
        return [
            d
            for v, r, d in zip(self._data.get(valid_key, []), self._data.get(ready_key, []), self._data.get(data_key, []))
            if v and r
        ]

    def to_csv(
        self,
        path: Union[str, Path],
        keys: Optional[List[str]] = None,
        delimiter: str = ",",
    ) -> None:
        """
        Export to CSV. Keys become columns; one row per tick.
        """
        path = Path(path)
        keys = keys or list(self._data.keys())
        if not keys:
            path.write_text("")
            return
        columns = [self._data.get(k, []) for k in keys]
        n = max(len(c) for c in columns)
        rows = []
        for i in range(n):
            row = []
            for c in columns:
                if i < len(c):
                    v = c[i]
                    row.append("" if v is None else str(v).replace(delimiter, " "))
                else:
                    row.append("")
            rows.append(delimiter.join(row))
        header = delimiter.join(keys)
        path.write_text(header + "\n" + "\n".join(rows), encoding="utf-8")

    def __len__(self) -> int:
        return self._tick_count
