"""
StreamOps: valid/ready handshake transducers and elastic buffers, simulated tick by tick.
"""

__version__ = "0.1.0"

from streamops.core.component import Transducer
from streamops.core.signals import Handshake
from streamops.core.system import StreamSimulator
from streamops.arrow import arr, chain, compose, fanout, first, identity, loop, parallel, second
from streamops.buffer import Fifo, FifoConfig, fifo, fifo_ic

__all__ = [
    "__version__",
    "Transducer",
    "Handshake",
    "StreamSimulator",
    "identity",
    "arr",
    "compose",
    "chain",
    "first",
    "second",
    "parallel",
    "fanout",
    "loop",
    "Fifo",
    "FifoConfig",
    "fifo",
    "fifo_ic",
]
