"""ForecastCache tests — snapshot replacement, single-flight, supersession."""

import threading
import time
from datetime import datetime

import pytest

from analysis.forecast_cache import ForecastCache, forecast_key
from models.domain import Bounds


def test_forecast_key_normalises_bounds_and_date():
    as_dict = {"min_lat": 8, "max_lat": 22, "min_lon": 68, "max_lon": 88}
    when = datetime(2025, 10, 15, 13, 45)
    k1 = forecast_key("indian_mackerel", as_dict, when)
    k2 = forecast_key("indian_mackerel", Bounds(8, 22, 68, 88), datetime(2025, 10, 15, 6, 0))
    assert k1 == k2 == ("indian_mackerel", (8, 22, 68, 88), "2025-10-15")
    assert forecast_key("oil_sardine") == ("oil_sardine", None, None)


def test_set_replaces_whole_snapshot():
    cache = ForecastCache()
    assert cache.get() is None
    cache.set({"zones": 1}, key="a")
    cache.set({"zones": 2}, key="b")
    assert cache.get() == {"zones": 2}
    assert cache.key == "b"
    cache.clear()
    assert cache.get() is None and cache.key is None


def test_refresh_publishes_result():
    cache = ForecastCache()
    assert cache.refresh("k", lambda: "forecast") == "forecast"
    assert cache.get() == "forecast"
    assert cache.key == "k"


def test_concurrent_refresh_shares_one_computation():
    cache = ForecastCache()
    started = threading.Event()
    release = threading.Event()
    calls = []

    def compute():
        calls.append(1)
        started.set()
        release.wait(5)
        return "shared"

    results = []
    owner = threading.Thread(target=lambda: results.append(cache.refresh("k", compute)))
    owner.start()
    started.wait(5)

    waiters = [threading.Thread(target=lambda: results.append(cache.refresh("k", compute))) for _ in range(3)]
    for t in waiters:
        t.start()
    time.sleep(0.2)
    release.set()
    for t in [owner] + waiters:
        t.join(5)

    assert len(calls) == 1
    assert results == ["shared"] * 4
    assert cache.get() == "shared"


def test_superseded_refresh_is_not_published():
    cache = ForecastCache()

    def slow_old():
        # a newer request lands while this one is still computing
        cache.refresh("new", lambda: "new-forecast")
        return "old-forecast"

    assert cache.refresh("old", slow_old) == "old-forecast"
    assert cache.get() == "new-forecast"
    assert cache.key == "new"


def test_set_during_refresh_wins():
    cache = ForecastCache()

    def compute():
        cache.set("manual")
        return "computed"

    assert cache.refresh("k", compute) == "computed"
    assert cache.get() == "manual"


def test_failed_refresh_clears_inflight():
    cache = ForecastCache()

    def boom():
        raise RuntimeError("provider down")

    with pytest.raises(RuntimeError, match="provider down"):
        cache.refresh("k", boom)
    assert cache.get() is None
    assert cache.refresh("k", lambda: "ok") == "ok"
