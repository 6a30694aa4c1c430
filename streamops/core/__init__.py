"""Core: transducer interface, per-tick signals, simulator and traces."""

from streamops.core.component import Transducer
from streamops.core.errors import CombinationalLoopError, ConfigurationError, StreamOpsError
from streamops.core.history import TraceHistory
from streamops.core.signals import Handshake, Ready, Register, Valid, pack, unpack
from streamops.core.system import StepResult, StreamSimulator

__all__ = [
    "Transducer",
    "Handshake",
    "Valid",
    "Ready",
    "Register",
    "pack",
    "unpack",
    "StreamSimulator",
    "StepResult",
    "TraceHistory",
    "StreamOpsError",
    "ConfigurationError",
    "CombinationalLoopError",
]
