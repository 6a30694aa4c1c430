"""
Sequence and loop example.

    rec b     <- component1 -< (a, d')
        b'    <- fifo 3     -< b
        c     <- component2 -< b'
        c'    <- fifo 3     -< c
        (d,e) <- component3 -< c'
        d'    <- fifoIC 3 [1] -< d
    return e

The FIFO preloaded with 1 is the register that makes the feedback well defined.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add repository root to the path
ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from streamops.arrow import arr, chain, loop, second
from streamops.buffer import fifo, fifo_ic
from streamops.core import StreamSimulator
from streamops.io import StimulusStream


def build_network():
    component1 = arr(lambda p: p[0] + p[1])
    component2 = arr(lambda x: x * 2)
    component3 = arr(lambda x: (x % 7, x))
    swap = arr(lambda p: (p[1], p[0]))
    return loop(
        chain(component1, fifo(3), component2, fifo(3), component3, swap, second(fifo_ic(3, [1]))),
        seed=0,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Sequence + feedback loop network")
    parser.add_argument("--ticks", type=int, default=10)
    parser.add_argument("--stall-every", type=int, default=0, help="deassert ready every N ticks (0 = never)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    ready = [not (args.stall_every and (t + 1) % args.stall_every == 0) for t in range(args.ticks)]
    stimulus = StimulusStream(valid=True, ready=ready, data=list(range(1, args.ticks + 1)))

    sim = StreamSimulator(build_network())
    history = sim.run(stimulus)
    for tick, a, v, r, e in zip(
        history.column("tick"),
        history.column("data_in"),
        history.column("valid_out"),
        history.column("ready_in"),
        history.column("data_out"),
    ):
        print(f"tick {tick:3d}  a={a:3d}  e={e!s:>6}  {'delivered' if v and r else ''}")


if __name__ == "__main__":
    main()
