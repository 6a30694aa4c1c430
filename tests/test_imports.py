"""Verify that main modules are importable."""

import pytest


def test_import_streamops() -> None:
    import streamops
    assert streamops.__version__ == "0.1.0"


def test_import_core() -> None:
    from streamops.core import StreamSimulator, Transducer, Handshake, TraceHistory
    assert StreamSimulator is not None
    assert Transducer is not None
    assert Handshake is not None
    assert TraceHistory is not None


def test_import_arrow() -> None:
    from streamops.arrow import identity, arr, compose, first, second, parallel, fanout, loop
    assert callable(identity)
    assert callable(arr)
    assert callable(compose)
    assert callable(first)
    assert callable(second)
    assert callable(parallel)
    assert callable(fanout)
    assert callable(loop)


def test_import_buffer() -> None:
    from streamops.buffer import Fifo, FifoConfig, fifo, fifo_ic, fifo_transition
    assert Fifo is not None
    assert FifoConfig is not None
    assert fifo is not None
    assert fifo_ic is not None
    assert fifo_transition is not None


def test_import_io() -> None:
    from streamops.io import StimulusStream, save_config, load_config, load_fifo_config
    assert StimulusStream is not None
    assert save_config is not None
    assert load_config is not None
    assert load_fifo_config is not None


def test_errors_hierarchy() -> None:
    from streamops.core.errors import CombinationalLoopError, ConfigurationError, StreamOpsError
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(CombinationalLoopError, RuntimeError)
    with pytest.raises(StreamOpsError):
        raise ConfigurationError("bad")


def test_documented_modules_importable() -> None:
    import importlib
    from pathlib import Path

    api = Path(__file__).resolve().parents[1] / "docs" / "api.rst"
    modules = [
        line.split("::", 1)[1].strip()
        for line in api.read_text(encoding="utf-8").splitlines()
        if line.startswith(".. automodule::")
    ]
    assert "streamops.arrow.loop" in modules
    for name in modules:
        assert importlib.import_module(name) is not None
