"""
Minimal example: a FIFO between a bursty producer and a stalling consumer.

The producer honours ready-out, so nothing is lost; the trace is exported to CSV.
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# Add repository root to the path
ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from streamops.arrow import arr, compose
from streamops.buffer import fifo
from streamops.core import StreamSimulator


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--capacity", type=int, default=4)
    parser.add_argument("--ticks", type=int, default=200)
    parser.add_argument("--p-valid", type=float, default=0.7)
    parser.add_argument("--p-ready", type=float, default=0.5)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--csv", type=Path, default=None, help="export the trace to this file")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    rng = np.random.default_rng(args.seed)
    buffer = fifo(args.capacity)
    sim = StreamSimulator(compose(buffer, arr(lambda x: x)))

    token = 0
    occupancy = []
    for _ in range(args.ticks):
        valid = bool(rng.random() < args.p_valid)
        ready = bool(rng.random() < args.p_ready)
        result = sim.step(valid, ready, token)
        if result.accepted:
            token += 1
        occupancy.append(buffer.count)

    delivered = sim.history.transfers()
    occ = np.array(occupancy)
    print(f"Accepted: {token}, delivered: {len(delivered)}, still buffered: {buffer.count}")
    print(f"Occupancy mean {occ.mean():.2f}, max {occ.max()} / {args.capacity}")
    print(f"In order: {delivered == list(range(len(delivered)))}")

    if args.csv is not None:
        sim.history.to_csv(args.csv)
        print(f"Trace written to {args.csv}")


if __name__ == "__main__":
    main()
