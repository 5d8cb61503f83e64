"""Tests for cached reads, polling and mutation reporting."""

from __future__ import annotations

import threading
import time

import pytest

from console_client.errors import TRANSPORT, ApiError
from console_client.query_cache import QueryCache, run_mutation


class CountingFetcher:
    def __init__(self, *results) -> None:
        self.results = list(results)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


def test_fresh_data_is_served_from_cache() -> None:
    cache = QueryCache(stale_time=60)
    fetcher = CountingFetcher(["i-1"])

    assert cache.fetch("instances", fetcher) == ["i-1"]
    assert cache.fetch("instances") == ["i-1"]
    assert fetcher.calls == 1


def test_zero_stale_time_always_refetches() -> None:
    cache = QueryCache()
    fetcher = CountingFetcher(["a"], ["b"])

    cache.fetch("instances", fetcher)

    assert cache.fetch("instances") == ["b"]
    assert fetcher.calls == 2


def test_fetch_error_is_raised_and_kept_on_state() -> None:
    cache = QueryCache(stale_time=60)
    fetcher = CountingFetcher(["a"], ApiError(TRANSPORT, "Error fetching instances: boom"))

    cache.fetch("instances", fetcher)
    with pytest.raises(ApiError):
        cache.fetch("instances", force=True)

    state = cache.peek("instances")
    assert state.data == ["a"]
    assert state.to_dict()["error"] == "Error fetching instances: boom"


def test_unknown_key_without_fetcher_raises() -> None:
    with pytest.raises(KeyError):
        QueryCache().fetch("missing")


def test_concurrent_fetches_of_one_key_are_deduplicated() -> None:
    cache = QueryCache(stale_time=60)
    release = threading.Event()
    calls = []

    def slow():
        calls.append(1)
        release.wait(2)
        return "data"

    cache.register("overview", slow)
    results = []
    threads = [threading.Thread(target=lambda: results.append(cache.fetch("overview"))) for _ in range(4)]
    for t in threads:
        t.start()
    time.sleep(0.1)
    release.set()
    for t in threads:
        t.join(2)

    assert results == ["data"] * 4
    assert len(calls) == 1


def test_invalidate_refetches_registered_queries() -> None:
    cache = QueryCache(stale_time=60)
    fetcher = CountingFetcher(["old"], ["new"])
    cache.fetch("volumes", fetcher)

    cache.invalidate(["volumes", "unregistered"])

    assert cache.peek("volumes").data == ["new"]
    assert fetcher.calls == 2


def test_poller_refreshes_until_stopped() -> None:
    cache = QueryCache()
    fetcher = CountingFetcher("tick")

    poller = cache.poll("instances", fetcher, interval=0.01)
    deadline = time.time() + 2
    while fetcher.calls < 3 and time.time() < deadline:
        time.sleep(0.01)
    cache.stop_all()
    calls_at_stop = fetcher.calls
    time.sleep(0.05)

    assert calls_at_stop >= 3
    assert fetcher.calls == calls_at_stop
    assert not poller.running


def test_poller_survives_fetch_errors() -> None:
    cache = QueryCache()
    fetcher = CountingFetcher(ApiError(TRANSPORT, "Error fetching overview: boom"))

    poller = cache.poll("overview", fetcher, interval=0.01)
    deadline = time.time() + 2
    while fetcher.calls < 2 and time.time() < deadline:
        time.sleep(0.01)
    poller.stop()

    assert fetcher.calls >= 2
    assert cache.peek("overview").error is not None


def test_mutation_success_invalidates_before_returning() -> None:
    cache = QueryCache(stale_time=60)
    fetcher = CountingFetcher(["old"], ["new"])
    cache.fetch("volumes", fetcher)

    result = run_mutation(lambda: {"id": "v1"}, cache=cache, invalidate=["volumes"], success="Volume created")

    assert result.ok is True
    assert result.message == "Volume created"
    assert result.data == {"id": "v1"}
    assert cache.peek("volumes").data == ["new"]


def test_mutation_failure_reports_error_message() -> None:
    def fail():
        raise ApiError(TRANSPORT, "Error creating volume: boom")

    result = run_mutation(fail, success="Volume created")

    assert result.to_dict() == {"ok": False, "message": "Error creating volume: boom", "data": None}


def test_forget_drops_every_key_under_prefix() -> None:
    cache = QueryCache(stale_time=60)
    cache.fetch("aaa:instances", CountingFetcher(["a"]))
    cache.fetch("aaa:overview", CountingFetcher({"vms": 1}))
    cache.fetch("bbb:instances", CountingFetcher(["b"]))
    poller = cache.poll("aaa:volumes", CountingFetcher([]), interval=60)

    assert cache.forget("aaa:") == 3

    assert not poller.running
    assert cache.peek("aaa:instances").data is None
    assert cache.peek("bbb:instances").data == ["b"]
    with pytest.raises(KeyError):
        cache.fetch("aaa:instances")


def test_forgotten_key_is_not_restored_by_inflight_fetch() -> None:
    cache = QueryCache()
    started = threading.Event()
    release = threading.Event()

    def slow():
        started.set()
        release.wait(2)
        return "late"

    worker = threading.Thread(target=lambda: cache.fetch("aaa:overview", slow))
    worker.start()
    started.wait(2)
    cache.forget("aaa:")
    release.set()
    worker.join(2)

    assert cache.peek("aaa:overview").updated_at is None


def test_poll_replaces_running_poller_for_key() -> None:
    cache = QueryCache()
    first = cache.poll("instances", CountingFetcher([]), interval=60)
    second = cache.poll("instances", CountingFetcher([]), interval=60)

    assert not first.running
    assert second.running
    cache.stop_all()
    assert not second.running


def test_stop_all_racing_poll_leaves_no_untracked_pollers() -> None:
    cache = QueryCache()
    started = []

    def start_pollers(n):
        for i in range(20):
            started.append(cache.poll(f"k{n}-{i}", CountingFetcher([]), interval=60))

    threads = [threading.Thread(target=start_pollers, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    cache.stop_all()
    for t in threads:
        t.join(5)
    cache.stop_all()

    assert len(started) == 80
    assert not any(poller.running for poller in started)
    assert cache._pollers == {}
