# synthesizer.py

import random
import time
from datetime import datetime, timezone

from hecload.catalog import Draw

SECONDS_PER_DAY = 86400
WINDOW_DAYS = 7
BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def format_instant(seconds):
    """Render unix seconds as ISO-8601 with millisecond precision, e.g. 2023-11-11T10:13:20.000Z"""
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def draw_instant(rng, now, window_days=WINDOW_DAYS):
    """
    Pick an instant uniformly within the trailing window before `now`.
    Returns (days_ago, unix_seconds). Events older than a few days
    exercise the late-arrival path downstream.
    """
    days_ago = rng.random() * window_days
    return days_ago, int(now) - int(days_ago * SECONDS_PER_DAY)


class EventSynthesizer:
    """
    Builds one HEC envelope per call from a fixed catalog.

    Each instance owns its random source; give every concurrent user its
    own instance and no coordination is needed.
    """

    def __init__(self, catalog, rng=None, clock=None):
        self.catalog = catalog
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else time.time

    def synthesize(self):
        draw = Draw(self.rng, self.catalog)

        _, timestamp = draw_instant(self.rng, self.clock())
        tmpl = draw.pick(self.catalog.templates)

        event = tmpl.render(draw)
        event["timestamp"] = format_instant(timestamp)
        event["user_id"] = f"user-{draw.below(10000)}"
        event["request_id"] = "req-" + "".join(draw.pick(BASE36) for _ in range(6))

        return {
            "time": timestamp,
            "event": event,
            "source": self.catalog.source,
            "sourcetype": self.catalog.sourcetype,
            "index": self.catalog.index,
            "host": draw.pick(self.catalog.hosts),
        }
