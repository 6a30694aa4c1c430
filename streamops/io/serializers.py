"""Save and load configurations and simulation snapshots."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from streamops.buffer.fifo import FifoConfig
from streamops.core.errors import ConfigurationError


def _to_builtin(d: Any) -> Any:
    """Convert numpy values (possibly nested) to plain Python for JSON."""
    if isinstance(d, np.ndarray):
        return d.tolist()
    if isinstance(d, dict):
        return {k: _to_builtin(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_to_builtin(x) for x in d]
    if isinstance(d, np.bool_):
        return bool(d)
    if isinstance(d, (np.floating, np.integer)):
        return float(d) if isinstance(d, np.floating) else int(d)
    return d


def save_config(config: Dict[str, Any], path: Union[str, Path]) -> None:
    """
    Save a configuration (dict) to JSON.
    Numpy arrays are converted to lists.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_to_builtin(config), f, indent=2, ensure_ascii=False)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration from JSON."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_fifo_config(path: Union[str, Path]) -> FifoConfig:
    """
    Load a FIFO description, either at the top level of the file or under
    a "fifo" key.
    """
    data = load_config(path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object")
    if "fifo" in data and isinstance(data["fifo"], dict):
        data = data["fifo"]
    return FifoConfig.from_dict(data)


def save_fifo_config(config: FifoConfig, path: Union[str, Path]) -> None:
    save_config(config.to_dict(), path)


_TUPLE_TAG = "__tuple__"


def _encode_snapshot(value: Any, where: str) -> Any:
    """
    Snapshot metadata to JSON-safe values. Tuples are tagged so that they come
    back as tuples; anything JSON cannot represent is rejected.
    """
    if isinstance(value, np.ndarray):
        if value.dtype == object:
            raise ConfigurationError(f"{where}: object arrays cannot be stored in a snapshot")
        return value.tolist()
    if isinstance(value, tuple):
        return {_TUPLE_TAG: [_encode_snapshot(v, f"{where}[{i}]") for i, v in enumerate(value)]}
    if isinstance(value, list):
        return [_encode_snapshot(v, f"{where}[{i}]") for i, v in enumerate(value)]
    if isinstance(value, dict):
        out = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise ConfigurationError(f"{where}: snapshot keys must be str, got {k!r}")
            if k == _TUPLE_TAG:
                raise ConfigurationError(f"{where}: key {_TUPLE_TAG!r} is reserved")
            out[k] = _encode_snapshot(v, f"{where}.{k}")
        return out
    if isinstance(value, np.bool_):
        return bool(value)
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    raise ConfigurationError(
        f"{where}: {type(value).__name__} values cannot be stored in a snapshot"
    )


def _decode_snapshot(value: Any) -> Any:
    if isinstance(value, list):
        return [_decode_snapshot(v) for v in value]
    if isinstance(value, dict):
        if set(value) == {_TUPLE_TAG}:
            return tuple(_decode_snapshot(v) for v in value[_TUPLE_TAG])
        return {k: _decode_snapshot(v) for k, v in value.items()}
    return value


def save_snapshot(state_dict: Dict[str, Any], path: Union[str, Path]) -> None:
    """
    Save a snapshot (state_dict): numpy arrays to .npz, the rest to .meta.json.

    Tuples inside the metadata are restored as tuples. Object arrays and values
    JSON cannot represent raise ConfigurationError before anything is written.
    """
    path = Path(path)
    np_arrays = {}
    meta = {}
    for k, v in state_dict.items():
        if isinstance(v, np.ndarray):
            if v.dtype == object:
                raise ConfigurationError(f"{k}: object arrays cannot be stored in a snapshot")
            np_arrays[k] = v
        else:
            meta[k] = _encode_snapshot(v, k)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez(path.with_suffix(".npz"), **np_arrays)
    with open(path.with_suffix(path.suffix + ".meta.json"), "w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2, ensure_ascii=False)


def load_snapshot(path: Union[str, Path]) -> Dict[str, Any]:
    """Load snapshot from .npz + .meta.json."""
    path = Path(path)
    with np.load(path.with_suffix(".npz"), allow_pickle=False) as arrays:
        data: Dict[str, Any] = {k: arrays[k] for k in arrays.files}
    meta_path = path.with_suffix(path.suffix + ".meta.json")
    if meta_path.exists():
        data.update(_decode_snapshot(load_config(meta_path)))
    return data
