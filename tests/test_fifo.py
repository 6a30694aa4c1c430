"""Tests for the registered FIFO transducer."""

import logging
import random

import pytest

from streamops.buffer import Fifo, FifoConfig, fifo, fifo_ic
from streamops.core import ConfigurationError, StreamSimulator


@pytest.mark.parametrize("capacity", [0, -1, True, 2.0, "3", None])
def test_invalid_capacity(capacity) -> None:
    with pytest.raises(ConfigurationError):
        fifo(capacity)


def test_too_many_initial_elements() -> None:
    with pytest.raises(ConfigurationError):
        fifo_ic(2, [1, 2, 3])


def test_initial_contents_count_toward_capacity() -> None:
    q = fifo_ic(3, ["a", "b"], fill=0)
    assert q.capacity == 3
    assert q.count == 2
    assert q.contents == ("a", "b")
    assert not q.empty and not q.full
    assert q.state.queue.to_list() == [0, "a", "b"]


def test_step_does_not_commit() -> None:
    q = fifo(2)
    first = q.step(True, False, "x")
    again = q.step(True, False, "x")
    assert first == again
    assert q.count == 0
    q.commit()
    assert q.count == 1
    assert q.contents == ("x",)


def test_last_forward_of_tick_wins() -> None:
    q = fifo(2)
    q.step(True, False, "discarded")
    q.step(False, False, None)
    q.commit()
    assert q.count == 0


def test_ready_ignores_same_tick_valid_and_data() -> None:
    q = fifo_ic(1, ["x"])
    assert q.ready(False) is False
    assert q.step(True, False, "y").ready is False
    assert q.step(False, False, None).ready is False
    assert q.ready(True) is True


def test_reset_restores_initial_contents() -> None:
    q = fifo_ic(2, [5])
    q.step(False, True, None)
    q.commit()
    assert q.count == 0
    q.reset()
    assert q.contents == (5,)


def test_registered() -> None:
    assert fifo(1).registered is True


def test_instances_do_not_share_state() -> None:
    a = fifo(2)
    b = fifo(2)
    a.step(True, False, 1)
    a.commit()
    assert a.count == 1
    assert b.count == 0


def test_order_preserved_under_backpressure() -> None:
    """A producer that honours ready-out loses nothing and sees FIFO order."""
    rng = random.Random(7)
    sim = StreamSimulator(fifo(4))
    next_token = 0
    for _ in range(2000):
        valid = rng.random() < 0.7
        ready = rng.random() < 0.5
        result = sim.step(valid, ready, next_token)
        if result.accepted:
            next_token += 1
        assert 0 <= sim.transducer.count <= 4

    delivered = sim.history.transfers()
    assert delivered == list(range(len(delivered)))
    assert next_token - len(delivered) == sim.transducer.count


def test_bypass_zero_latency() -> None:
    sim = StreamSimulator(fifo(3))
    for token in ["a", "b", "c"]:
        result = sim.step(True, True, token)
        assert result.delivered
        assert result.data_out == token
    assert sim.transducer.count == 0


def test_drop_on_full_is_logged(caplog) -> None:
    q = fifo_ic(1, ["kept"])
    with caplog.at_level(logging.DEBUG, logger="streamops.buffer.fifo"):
        q.step(True, False, "lost")
        q.commit()
    assert q.contents == ("kept",)
    assert "dropping" in caplog.text


def test_state_dict_round_trip() -> None:
    q = fifo(3, fill=0)
    for token in (1, 2):
        q.step(True, False, token)
        q.commit()
    snapshot = q.state_dict()
    assert snapshot == {"capacity": 3, "count": 2, "queue": [0, 1, 2]}

    other = fifo(3, fill=0)
    other.load_state_dict(snapshot)
    assert other.contents == (1, 2)


@pytest.mark.parametrize(
    "snapshot",
    [
        {"capacity": 3, "count": 1, "queue": [0, 1]},
        {"capacity": 3, "count": 4, "queue": [0, 1, 2]},
        {"capacity": 3, "count": -1, "queue": [0, 1, 2]},
    ],
)
def test_load_state_dict_rejects_bad_snapshot(snapshot) -> None:
    with pytest.raises(ConfigurationError):
        fifo(3).load_state_dict(snapshot)


def test_fifo_config_build() -> None:
    config = FifoConfig.from_dict({"capacity": 4, "initial": [1, 2]})
    q = config.build()
    assert isinstance(q, Fifo)
    assert q.capacity == 4
    assert q.contents == (1, 2)
    assert FifoConfig.from_dict(config.to_dict()) == config


def test_fifo_config_validation() -> None:
    with pytest.raises(ConfigurationError):
        FifoConfig.from_dict({"initial": [1]})
    with pytest.raises(ConfigurationError):
        FifoConfig.from_dict({"capacity": 2, "depth": 3})
    with pytest.raises(ConfigurationError):
        FifoConfig(capacity=1, initial=[1, 2])
