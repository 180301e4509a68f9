"""
Forecast Cache — holds the latest published forecast snapshot.

    get()                     current snapshot (or None)
    set(result)               replace the whole snapshot
    refresh(key, compute)     recompute with single-flight per key

Concurrent refresh() calls for the same key share one computation. When a
newer refresh (any key) has been requested in the meantime, the older
result is returned to its caller but never published.
"""

import threading
from concurrent.futures import Future
from typing import Any, Callable, Hashable


def forecast_key(species: str, bounds=None, date=None) -> tuple:
    """(species, bounds tuple, ISO date) — identifies one forecast request."""
    if isinstance(bounds, dict):
        bounds = (bounds["min_lat"], bounds["max_lat"], bounds["min_lon"], bounds["max_lon"])
    elif bounds is not None and not isinstance(bounds, tuple):
        bounds = (bounds.min_lat, bounds.max_lat, bounds.min_lon, bounds.max_lon)
    return (species, bounds, date.date().isoformat() if date is not None else None)


class ForecastCache:
    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot: Any = None
        self._snapshot_key: Hashable | None = None
        self._inflight: dict[Hashable, Future] = {}
        self._generation = 0

    def get(self):
        with self._lock:
            return self._snapshot

    @property
    def key(self):
        with self._lock:
            return self._snapshot_key

    def set(self, result, key: Hashable | None = None) -> None:
        with self._lock:
            self._generation += 1
            self._snapshot = result
            self._snapshot_key = key

    def clear(self) -> None:
        with self._lock:
            self._snapshot = None
            self._snapshot_key = None

    def refresh(self, key: Hashable, compute: Callable[[], Any]):
        """
        Run ``compute`` unless a computation for ``key`` is already running,
        in which case wait for and return that one's result.
        """
        with self._lock:
            pending = self._inflight.get(key)
            if pending is None:
                self._generation += 1
                generation = self._generation
                pending = Future()
                self._inflight[key] = pending
                owner = True
            else:
                owner = False

        if not owner:
            return pending.result()

        try:
            result = compute()
        except BaseException as e:
            with self._lock:
                self._inflight.pop(key, None)
            pending.set_exception(e)
            raise

        with self._lock:
            self._inflight.pop(key, None)
            # a newer request supersedes this one
            if generation == self._generation:
                self._snapshot = result
                self._snapshot_key = key
        pending.set_result(result)
        return result

