"""In-process request performance aggregator backing the admin system monitor."""
import threading
import time
from datetime import datetime, timezone

MINUTE = 60
HOUR = 60 * MINUTE


def _empty_bucket():
    return {"requests": 0, "total_duration_ms": 0.0, "bytes_in": 0, "bytes_out": 0}


class PerformanceMetrics:
    """Minute-aligned request buckets over a trailing window.

    ``record`` is called from every request thread, so all access to the
    bucket dict happens under one lock.
    """

    def __init__(self, window_seconds=24 * HOUR, clock=time.time):
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._buckets = {}

    @staticmethod
    def _minute_start(ts):
        return int(ts // MINUTE) * MINUTE

    def record(self, duration_ms, bytes_in=0, bytes_out=0, finished_at=None):
        finished_at = self._clock() if finished_at is None else finished_at
        key = self._minute_start(finished_at)
        with self._lock:
            bucket = self._buckets.setdefault(key, _empty_bucket())
            bucket["requests"] += 1
            bucket["total_duration_ms"] += float(duration_ms or 0)
            bucket["bytes_in"] += int(bytes_in or 0)
            bucket["bytes_out"] += int(bytes_out or 0)
            self._prune_locked(finished_at)

    def _prune_locked(self, now):
        stale = [key for key in self._buckets if now - key > self.window_seconds]
        for key in stale:
            del self._buckets[key]

    def prune(self, now=None):
        now = self._clock() if now is None else now
        with self._lock:
            self._prune_locked(now)

    def _snapshot(self, now):
        with self._lock:
            self._prune_locked(now)
            return {key: dict(bucket) for key, bucket in self._buckets.items()}

    def hourly_points(self, now=None):
        """One point per hour from the start of the window up to ``now``."""
        now = self._clock() if now is None else now
        hours = {}
        for minute_start, bucket in self._snapshot(now).items():
            hour_start = int(minute_start // HOUR) * HOUR
            agg = hours.setdefault(hour_start, _empty_bucket())
            for name, value in bucket.items():
                agg[name] += value

        points = []
        hour_start = int((now - self.window_seconds) // HOUR) * HOUR
        while hour_start <= now:
            agg = hours.get(hour_start, _empty_bucket())
            avg_ms = agg["total_duration_ms"] / agg["requests"] if agg["requests"] else 0
            points.append({
                "time": datetime.fromtimestamp(hour_start, tz=timezone.utc).strftime("%H:%M"),
                "hourStart": datetime.fromtimestamp(hour_start, tz=timezone.utc).isoformat(),
                "requests": agg["requests"],
                "responseTime": int(avg_ms + 0.5),
            })
            hour_start += HOUR
        return points

    def bandwidth_bytes(self, now=None):
        now = self._clock() if now is None else now
        return sum(b["bytes_in"] + b["bytes_out"] for b in self._snapshot(now).values())

    def total_requests(self):
        with self._lock:
            return sum(b["requests"] for b in self._buckets.values())

    def reset(self):
        with self._lock:
            self._buckets.clear()
