"""Stimulus, configuration files and snapshots."""

from streamops.io.streams import StimulusStream
from streamops.io.serializers import (
    load_config,
    load_fifo_config,
    load_snapshot,
    save_config,
    save_fifo_config,
    save_snapshot,
)

__all__ = [
    "StimulusStream",
    "save_config",
    "load_config",
    "load_fifo_config",
    "save_fifo_config",
    "save_snapshot",
    "load_snapshot",
]
