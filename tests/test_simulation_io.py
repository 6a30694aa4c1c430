"""Tests for the simulator, traces, stimulus streams and serializers."""

import logging

import numpy as np
import pytest

from streamops.buffer import FifoConfig, fifo, fifo_ic
from streamops.core import Handshake, StreamSimulator, TraceHistory
from streamops.core.errors import ConfigurationError
from streamops.io import (
    StimulusStream,
    load_config,
    load_fifo_config,
    load_snapshot,
    save_config,
    save_snapshot,
)
from streamops.io.serializers import save_fifo_config


def test_stimulus_broadcasts_scalars() -> None:
    stream = StimulusStream(valid=[1, 0, 1], ready=True, data="x")
    items = list(stream)
    assert len(stream) == 3
    assert items[1] == Handshake(False, True, "x")
    stream.reset()
    assert next(stream) == Handshake(True, True, "x")


def test_stimulus_length_mismatch() -> None:
    with pytest.raises(ValueError):
        StimulusStream(valid=[True, True], ready=[True], data=[1, 2])
    with pytest.raises(ValueError):
        StimulusStream(valid=True, ready=True, data=None)


def test_step_result_flags() -> None:
    sim = StreamSimulator(fifo_ic(1, ["old"]))
    result = sim.step(True, False, "new")
    assert not result.accepted
    assert not result.delivered
    result = sim.step(False, True)
    assert result.delivered
    assert result.data_out == "old"
    assert sim.tick == 2


def test_run_records_history(caplog) -> None:
    sim = StreamSimulator(fifo(2))
    stimulus = StimulusStream(
        valid=[True, True, True, False, False],
        ready=[False, False, False, True, True],
        data=["A", "B", "C", None, None],
    )
    with caplog.at_level(logging.INFO, logger="streamops.core.system"):
        history = sim.run(stimulus)
    assert len(history) == 5
    assert history.transfers() == ["A", "B"]
    assert history.get("ready_out").tolist() == [True, True, False, True, True]
    assert history.column("tick") == [0, 1, 2, 3, 4]
    assert "5 ticks" in caplog.text


def test_history_max_length_and_csv(tmp_path) -> None:
    h = TraceHistory(max_length=2)
    for i in range(4):
        h.append(tick=i, data=(i, i))
    assert len(h) == 2
    assert h.column("tick") == [2, 3]
    assert h.get("data").dtype == object

    path = tmp_path / "trace.csv"
    h.to_csv(path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "tick,data"
    assert lines[1] == "2,(2  2)"
    assert h.get("missing").size == 0


def test_simulator_state_dict() -> None:
    sim = StreamSimulator(fifo(1, fill=0), record=False)
    sim.step(True, False, 9)
    assert sim.state_dict() == {
        "tick": 1,
        "transducer": {"capacity": 1, "count": 1, "queue": [9]},
    }
    assert len(sim.history) == 0


def test_config_round_trip(tmp_path) -> None:
    path = tmp_path / "cfg" / "config.json"
    save_config({"gain": np.float64(2.5), "taps": np.arange(3)}, path)
    assert load_config(path) == {"gain": 2.5, "taps": [0, 1, 2]}


def test_fifo_config_file(tmp_path) -> None:
    path = tmp_path / "fifo.json"
    save_fifo_config(FifoConfig(capacity=3, initial=[1]), path)
    config = load_fifo_config(path)
    assert config == FifoConfig(capacity=3, initial=[1], fill=None)

    nested = tmp_path / "nested.json"
    save_config({"fifo": {"capacity": 2}}, nested)
    assert load_fifo_config(nested).build().capacity == 2

    bad = tmp_path / "bad.json"
    save_config({"capacity": 0}, bad)
    with pytest.raises(ConfigurationError):
        load_fifo_config(bad)


def test_snapshot_round_trip(tmp_path) -> None:
    sim = StreamSimulator(fifo(2, fill=0))
    sim.run(StimulusStream.from_tokens([4, 5], ready=False))
    state = sim.state_dict()
    state["occupancy"] = sim.history.get("valid_out").astype(int)

    path = tmp_path / "snap"
    save_snapshot(state, path)
    loaded = load_snapshot(path)
    np.testing.assert_array_equal(loaded["occupancy"], [1, 1])
    assert loaded["tick"] == 2

    restored = fifo(2, fill=0)
    restored.load_state_dict(loaded["transducer"])
    assert restored.contents == (4, 5)


def test_snapshot_keeps_tuple_payloads(tmp_path) -> None:
    q = fifo(2, fill=0)
    q.step(True, False, (1, 2))
    q.commit()

    path = tmp_path / "tuples"
    save_snapshot({"fifo": q.state_dict()}, path)
    loaded = load_snapshot(path)

    restored = fifo(2, fill=0)
    restored.load_state_dict(loaded["fifo"])
    assert restored.contents == ((1, 2),)


def test_snapshot_rejects_object_columns(tmp_path) -> None:
    sim = StreamSimulator(fifo(2))
    sim.run(StimulusStream.from_tokens([(1, 2), None]))
    column = sim.history.get("data_out")
    assert column.dtype == object

    path = tmp_path / "objects"
    with pytest.raises(ConfigurationError):
        save_snapshot({"data_out": column}, path)
    with pytest.raises(ConfigurationError):
        save_snapshot({"nested": {"data_out": column}}, path)
    assert not path.with_suffix(".npz").exists()


def test_snapshot_rejects_unserializable_values(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        save_snapshot({"fifo": {"queue": [object()]}}, tmp_path / "bad")
