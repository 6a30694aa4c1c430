"""Handshake composition algebra: identity, arr, compose, first/second, ***, &&&, loop."""

from streamops.arrow.basic import Arr, Identity, arr, identity
from streamops.arrow.compose import (
    Compose,
    Fanout,
    First,
    Parallel,
    Second,
    chain,
    compose,
    fanout,
    first,
    parallel,
    second,
)
from streamops.arrow.loop import Loop, loop

__all__ = [
    "Identity",
    "Arr",
    "Compose",
    "First",
    "Second",
    "Parallel",
    "Fanout",
    "Loop",
    "identity",
    "arr",
    "compose",
    "chain",
    "first",
    "second",
    "parallel",
    "fanout",
    "loop",
]
