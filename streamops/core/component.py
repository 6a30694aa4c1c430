"""Base interface for handshake transducers."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from streamops.core.signals import Handshake, Ready, Valid


class Transducer(ABC):
    """
    Composable per-tick component with a valid/ready/data interface.

    Inputs on a tick: valid-in (upstream data is meaningful), ready-in
    (downstream accepts output), data-in. Outputs: valid-out, ready-out,
    data-out. Valid and data flow left to right, ready flows right to left.

    Evaluation is split in two phases so that chained components never form a
    same-tick cycle:

    * `ready` computes ready-out from ready-in and registered state only. It
      must not look at same-tick valid-in or data-in.
    * `forward` computes valid-out and data-out and may stage the next
      registered state; when called several times on one tick, the last call
      wins. Nothing becomes visible before `commit`.
    """

    @abstractmethod
    def ready(self, ready_in: Ready) -> Ready:
        """Ready-out for this tick."""
        pass

    @abstractmethod
    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        """
        Valid-out and data-out for this tick.

        Args:
            valid_in: upstream asserts data_in is meaningful
            ready_in: downstream accepts data-out
            data_in: input value

        Returns:
            (valid_out, data_out)
        """
        pass

    def step(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Handshake:
        """Evaluate both phases for one tick (does not commit)."""
        ready_out = self.ready(ready_in)
        valid_out, data_out = self.forward(valid_in, ready_in, data_in)
        return Handshake(valid_out, ready_out, data_out)

    def commit(self) -> None:
        """Tick boundary: registered state takes its staged value."""
        pass

    def reset(self) -> None:
        """Restore the construction-time state."""
        pass

    @property
    def registered(self) -> bool:
        """True if the transducer holds at least one register."""
        return False

    def state_dict(self) -> Dict[str, Any]:
        """
        Internal state for checkpoint/serialization.
        Override in stateful transducers.
        """
        return {}
