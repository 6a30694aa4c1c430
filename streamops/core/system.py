"""Tick driver: evaluates a transducer once per tick and commits its registers."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from streamops.core.component import Transducer
from streamops.core.history import TraceHistory
from streamops.core.signals import Handshake, Ready, Valid

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Inputs and outputs of one tick."""

    tick: int
    valid_in: Valid
    ready_in: Ready
    data_in: Any
    valid_out: Valid
    ready_out: Ready
    data_out: Any

    @property
    def accepted(self) -> bool:
        """The transducer took data_in this tick."""
        return bool(self.valid_in and self.ready_out)

    @property
    def delivered(self) -> bool:
        """Downstream took data_out this tick."""
        return bool(self.valid_out and self.ready_in)

    @property
    def outputs(self) -> Handshake:
        return Handshake(self.valid_out, self.ready_out, self.data_out)


class StreamSimulator:
    """
    Synchronous single-clock driver.
    Each tick: combinational evaluation of the whole transducer, then commit.
    """

    def __init__(
        self,
        transducer: Transducer,
        history: Optional[TraceHistory] = None,
        record: bool = True,
    ) -> None:
        """
        Args:
            transducer: top-level transducer (usually a composition)
            history: trace buffer (default: a new unbounded TraceHistory)
            record: append every tick to the history
        """
        self.transducer = transducer
        self.history = history if history is not None else TraceHistory()
        self.record = record
        self._tick = 0

    def reset(self) -> None:
        """Back to tick 0 with construction-time state and an empty history."""
        self.transducer.reset()
        self.history.clear()
        self._tick = 0

    def step(self, valid_in: Valid, ready_in: Ready, data_in: Any = None) -> StepResult:
        """
        Execute one tick.

        Args:
            valid_in: upstream valid
            ready_in: downstream ready
            data_in: upstream data

        Returns:
            StepResult with the tick's inputs and outputs.
        """
        out = self.transducer.step(valid_in, ready_in, data_in)
        self.transducer.commit()
        result = StepResult(
            tick=self._tick,
            valid_in=valid_in,
            ready_in=ready_in,
            data_in=data_in,
            valid_out=out.valid,
            ready_out=out.ready,
            data_out=out.data,
        )
        if self.record:
            self.history.append(
                tick=result.tick,
                valid_in=valid_in,
                ready_in=ready_in,
                data_in=data_in,
                valid_out=out.valid,
                ready_out=out.ready,
                data_out=out.data,
            )
        self._tick += 1
        return result

    def run(self, stimulus: Iterable[Handshake]) -> TraceHistory:
        """Drive one tick per (valid, ready, data) item of `stimulus`."""
        n_ticks = accepted = delivered = 0
        for valid_in, ready_in, data_in in stimulus:
            result = self.step(valid_in, ready_in, data_in)
            n_ticks += 1
            accepted += result.accepted
            delivered += result.delivered
        logger.info(
            "Simulated %d ticks: %d accepted, %d delivered", n_ticks, accepted, delivered
        )
        return self.history

    @property
    def tick(self) -> int:
        """Number of ticks simulated since construction or reset."""
        return self._tick

    def state_dict(self) -> Dict[str, Any]:
        return {
            "tick": self._tick,
            "transducer": self.transducer.state_dict(),
        }
