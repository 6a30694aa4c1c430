"""Elastic buffers."""

from streamops.buffer.fifo import Fifo, FifoConfig, FifoState, fifo, fifo_ic, fifo_transition
from streamops.buffer.vector import FixedVector

__all__ = ["Fifo", "FifoConfig", "FifoState", "FixedVector", "fifo", "fifo_ic", "fifo_transition"]
