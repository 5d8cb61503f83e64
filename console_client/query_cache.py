"""
Query cache for console reads.

Keyed in-memory cache with staleness windows, fixed-interval background
refresh and invalidate-then-refetch for mutations. Fetches of one key never
run concurrently; a caller arriving while a fetch is in flight waits for it
and gets its result.
"""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional

from console_client.errors import error_message

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Any]


@dataclass
class QueryState:
    data: Any = None
    error: Optional[BaseException] = None
    updated_at: Optional[float] = None
    stale: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": self.data,
            "error": error_message(self.error) if self.error is not None else None,
            "updated_at": (
                datetime.fromtimestamp(self.updated_at, tz=timezone.utc).isoformat()
                if self.updated_at is not None else None
            ),
        }


class QueryCache:
    def __init__(self, stale_time: float = 0.0):
        self.stale_time = stale_time
        self._lock = threading.Lock()
        self._states: Dict[str, QueryState] = {}
        self._fetchers: Dict[str, Fetcher] = {}
        self._stale_times: Dict[str, float] = {}
        self._key_locks: Dict[str, threading.Lock] = {}
        self._pollers: Dict[str, "Poller"] = {}

    def _key_lock(self, key: str) -> threading.Lock:
        with self._lock:
            return self._key_locks.setdefault(key, threading.Lock())

    def register(self, key: str, fetcher: Fetcher, stale_time: Optional[float] = None) -> None:
        with self._lock:
            self._fetchers[key] = fetcher
            if stale_time is not None:
                self._stale_times[key] = stale_time

    def peek(self, key: str) -> QueryState:
        with self._lock:
            return self._states.get(key, QueryState())

    def _is_fresh(self, key: str, state: QueryState) -> bool:
        if state.stale or state.updated_at is None or state.error is not None:
            return False
        stale_time = self._stale_times.get(key, self.stale_time)
        return (time.time() - state.updated_at) < stale_time

    def fetch(self, key: str, fetcher: Optional[Fetcher] = None, force: bool = False) -> Any:
        """
        Cached data for key, fetching when missing or stale.

        Raises whatever the fetcher raises; the error is also kept on the
        key's state so pollers and views can show it.
        """
        if fetcher is not None:
            self.register(key, fetcher)
        with self._lock:
            fetcher = self._fetchers.get(key)
        if fetcher is None:
            raise KeyError(f"No fetcher registered for query '{key}'")

        started = time.time()
        with self._key_lock(key):
            state = self.peek(key)
            # another caller finished a fetch while this one waited
            if state.updated_at is not None and state.updated_at >= started and not state.stale:
                return state.data
            if not force and self._is_fresh(key, state):
                return state.data

            try:
                data = fetcher()
            except Exception as exc:
                self._store(key, QueryState(data=state.data, error=exc, updated_at=time.time(), stale=True))
                raise
            self._store(key, QueryState(data=data, updated_at=time.time(), stale=False))
            return data

    def _store(self, key: str, state: QueryState) -> None:
        with self._lock:
            # a key forgotten while its fetch was in flight stays forgotten
            if key in self._fetchers:
                self._states[key] = state

    def invalidate(self, keys: Iterable[str], refetch: bool = True) -> None:
        """
        Mark keys stale and refetch the registered ones before returning.

        Refetch failures are logged and left on the key's state; the caller's
        mutation already succeeded.
        """
        for key in keys:
            with self._lock:
                state = self._states.get(key)
                if state is not None:
                    state.stale = True
                registered = key in self._fetchers
            if refetch and registered:
                try:
                    self.fetch(key, force=True)
                except Exception as exc:
                    logger.warning("Refetch of %s after mutation failed: %s", key, error_message(exc))

    def poll(self, key: str, fetcher: Fetcher, interval: float) -> "Poller":
        """Start refreshing key every `interval` seconds; replaces an existing poller."""
        self.register(key, fetcher)
        poller = Poller(self, key, interval)
        with self._lock:
            old = self._pollers.pop(key, None)
            self._pollers[key] = poller
            # started under the lock so stop_all never sees an unstarted poller
            poller.start()
        if old is not None:
            old.stop()
        return poller

    def stop_all(self) -> None:
        with self._lock:
            pollers = list(self._pollers.values())
            self._pollers.clear()
        for poller in pollers:
            poller.stop()

    def forget(self, prefix: str) -> int:
        """
        Drop every key starting with prefix: state, fetcher, lock and poller.

        Returns the number of keys dropped.
        """
        with self._lock:
            keys = {
                key
                for mapping in (self._states, self._fetchers, self._stale_times, self._key_locks, self._pollers)
                for key in mapping
                if key.startswith(prefix)
            }
            pollers = [self._pollers.pop(key) for key in keys if key in self._pollers]
            for key in keys:
                self._states.pop(key, None)
                self._fetchers.pop(key, None)
                self._stale_times.pop(key, None)
                self._key_locks.pop(key, None)
        for poller in pollers:
            poller.stop()
        if keys:
            logger.debug("Forgot %d cached queries under %s", len(keys), prefix)
        return len(keys)


class Poller:
    """Background refresh of one query key; stop() ends it."""

    def __init__(self, cache: QueryCache, key: str, interval: float):
        self.cache = cache
        self.key = key
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name=f"poll-{self.key}", daemon=True)
        self._thread.start()
        logger.info("Polling %s every %ss", self.key, self.interval)

    def stop(self):
        self._stop.set()
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=5)
        logger.info("Stopped polling %s", self.key)

    def _loop(self):
        while not self._stop.is_set():
            try:
                self.cache.fetch(self.key, force=True)
            except Exception as exc:
                logger.warning("Poll of %s failed: %s", self.key, error_message(exc))
            self._stop.wait(self.interval)


@dataclass
class MutationResult:
    ok: bool
    message: str
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "message": self.message, "data": self.data}


def run_mutation(
    fn: Callable[..., Any],
    *args,
    cache: Optional[QueryCache] = None,
    invalidate: Iterable[str] = (),
    success: str = "Done",
    **kwargs
) -> MutationResult:
    """
    Run a state-changing call the way the console reports it.

    On success the listed queries are invalidated and refetched before the
    result is returned, so a success is never shown next to stale lists. On
    failure the error's message becomes the notification text.
    """
    try:
        data = fn(*args, **kwargs)
    except Exception as exc:
        message = error_message(exc)
        logger.info("Mutation %s failed: %s", getattr(fn, "__name__", fn), message)
        return MutationResult(ok=False, message=message)

    if cache is not None:
        cache.invalidate(invalidate)
    return MutationResult(ok=True, message=success, data=data)
