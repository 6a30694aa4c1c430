"""
Same-tick feedback loop.

`Loop(f)` turns a transducer over pairs `(b, d)` into a transducer over `b`:
the right half `d` of f's data-out is fed back as the right half of its
data-in on the same tick.

    valid = valid_in and f_valid
    ready = ready_in and f_ready
    (f_valid, f_ready, (c, d)) = f(valid, ready, (b, d))
    outputs (f_valid, f_ready, c)

The equations are solved as a least fixed point: ready and valid start from
False, the fed-back data starts from the value resolved on the previous tick
(`seed` on the first tick). This only terminates when the feedback path of `f`
goes through a register, e.g. a FIFO that already holds data, so that `d` does
not depend on itself within the tick.

When `f` is registered, `d` is taken to be independent of the same tick's `d`:
the loop settles once valid is stable over two passes, the second of which is
fed the `d` produced by the first. Fed-back values are never compared, so
payloads without `__eq__` or NaN are fine. `registered` only says that `f`
holds a register somewhere, not that it sits on the feedback half:
`loop(first(fifo(1)))` counts as registered although its feedback is purely
combinational. Keeping that precondition is up to the caller.

When `f` has no register the loop is malformed. It is reported with a warning
at construction, and iteration then also requires the fed-back value to repeat;
CombinationalLoopError is raised when it does not settle.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from streamops.core.component import Transducer
from streamops.core.errors import CombinationalLoopError
from streamops.core.signals import Ready, Valid, pack, same_value, unpack

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 32


class Loop(Transducer):
    """Feedback over the right half of `inner`'s paired data."""

    def __init__(
        self,
        inner: Transducer,
        seed: Any = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        """
        Args:
            inner: transducer over (outer, feedback) pairs.
            seed: feedback value assumed before the first tick is resolved.
            max_iterations: bound on fixed-point iterations per tick.
        """
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
        self.inner = inner
        self.seed = seed
        self.max_iterations = max_iterations
        self._feedback = seed
        self._pending_feedback: Optional[Any] = None
        self._has_pending = False
        if not inner.registered:
            logger.warning(
                "Loop around %r has no register on its feedback path; "
                "same-tick evaluation is undefined",
                inner,
            )

    def _resolve_ready(self, ready_in: Ready) -> Tuple[Ready, Ready]:
        """Returns (ready fed to inner, inner ready-out)."""
        ready = False
        for _ in range(self.max_iterations):
            f_ready = self.inner.ready(ready)
            resolved = ready_in and f_ready
            if resolved == ready:
                return ready, f_ready
            ready = resolved
        raise CombinationalLoopError(
            f"ready did not settle after {self.max_iterations} iterations"
        )

    def ready(self, ready_in: Ready) -> Ready:
        return self._resolve_ready(ready_in)[1]

    def forward(self, valid_in: Valid, ready_in: Ready, data_in: Any) -> Tuple[Valid, Any]:
        ready, _ = self._resolve_ready(ready_in)
        registered = self.inner.registered
        valid = False
        previous_valid: Optional[Valid] = None
        feedback = self._feedback
        for iteration in range(1, self.max_iterations + 1):
            f_valid, f_data = self.inner.forward(valid, ready, pack(data_in, feedback))
            out, fed_back = unpack(f_data)
            resolved = valid_in and f_valid
            if registered:
                # This pass was fed the d of a previous pass run with the same valid.
                settled = resolved == valid and previous_valid == valid
            else:
                settled = resolved == valid and same_value(fed_back, feedback)
            if settled:
                if iteration > 2:
                    logger.debug("Loop settled after %d iterations", iteration)
                self._pending_feedback = fed_back
                self._has_pending = True
                return f_valid, out
            previous_valid = valid
            valid, feedback = resolved, fed_back
        raise CombinationalLoopError(
            f"feedback did not settle after {self.max_iterations} iterations; "
            "the loop needs a register (e.g. a non-empty FIFO) on its feedback path"
        )

    def commit(self) -> None:
        if self._has_pending:
            self._feedback = self._pending_feedback
            self._has_pending = False
        self.inner.commit()

    def reset(self) -> None:
        self._feedback = self.seed
        self._pending_feedback = None
        self._has_pending = False
        self.inner.reset()

    @property
    def registered(self) -> bool:
        """True if `inner` holds a register anywhere (not necessarily on the feedback half)."""
        return self.inner.registered

    def state_dict(self) -> Dict[str, Any]:
        return {"feedback": self._feedback, "inner": self.inner.state_dict()}


def loop(f: Transducer, seed: Any = None, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> Loop:
    return Loop(f, seed=seed, max_iterations=max_iterations)
