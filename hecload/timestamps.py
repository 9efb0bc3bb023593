#!/usr/bin/env python3
"""
Print sample timestamps from the trailing window so the distribution can
be eyeballed before a run.

Usage: python -m hecload.timestamps [count] [window_days]
"""

import random
import sys
import time

from hecload.synthesizer import WINDOW_DAYS, draw_instant, format_instant


def print_samples(count=10, window_days=WINDOW_DAYS, rng=None, now=None):
    rng = rng if rng is not None else random.Random()
    now = now if now is not None else time.time()

    for _ in range(count):
        days_ago, timestamp = draw_instant(rng, now, window_days)
        print(f"Days ago: {days_ago:.2f}, Timestamp: {timestamp}, Date: {format_instant(timestamp)}")

    print("\n--- Current time for reference ---")
    print(f"Now: {format_instant(int(now))}")
    print(f"Epoch: {int(now)}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        count = int(argv[0]) if len(argv) > 0 else 10
        window_days = float(argv[1]) if len(argv) > 1 else WINDOW_DAYS
    except ValueError:
        print("Usage: python -m hecload.timestamps [count] [window_days]")
        return 2
    print_samples(count, window_days)
    return 0


if __name__ == "__main__":
    sys.exit(main())
