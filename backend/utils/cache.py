"""Small in-memory cache helpers."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable, Generic, Hashable, TypeVar

from .request_cache import forget, request_cached

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCacheTTL:
    """LRU cache whose entries expire after `ttl_s` seconds (`None` or <= 0: never)."""

    def __init__(self, maxsize: int = 256, ttl_s: float | None = 120.0):
        self._maxsize = maxsize
        self._ttl_s = ttl_s if ttl_s and ttl_s > 0 else None
        self._data = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key):
        now = time.time()
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return None
            ts, value = item
            if self._ttl_s is not None and now - ts > self._ttl_s:
                del self._data[key]
                return None
            self._data.move_to_end(key)
            return value

    def set(self, key, value):
        now = time.time()
        with self._lock:
            self._data[key] = (now, value)
            self._data.move_to_end(key)
            if len(self._data) > self._maxsize:
                self._data.popitem(last=False)

    def pop(self, key):
        with self._lock:
            item = self._data.pop(key, None)
        return None if item is None else item[1]

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class ManifestCache(Generic[K, V]):
    """Load-or-get accessor guarded by a per-key cache policy.

    Keys whose policy says "cache" are kept in a process-wide `LRUCacheTTL`
    until invalidated (or until `ttl_s` elapses). Other keys are always fresh
    outside a request and loaded at most once per request inside one.
    Concurrent cold loads may both run the loader; the last store wins.
    """

    def __init__(
        self,
        loader: Callable[[K], V],
        *,
        cached: Callable[[K], bool],
        ttl_s: float | None = None,
        maxsize: int = 16,
    ):
        self._loader = loader
        self._cached = cached
        self._store = LRUCacheTTL(maxsize=maxsize, ttl_s=ttl_s)
        self._namespace = f"manifest-cache:{id(self)}"
        self._seen: set[K] = set()

    def _request_key(self, key: K) -> str:
        return f"{self._namespace}:{key}"

    def is_cached(self, key: K) -> bool:
        return bool(self._cached(key))

    def peek(self, key: K) -> V | None:
        """Return the process-cached value without loading."""
        return self._store.get(key)

    def get_or_load(self, key: K) -> V:
        caching = self.is_cached(key)
        if caching:
            value = self._store.get(key)
            if value is not None:
                return value

        self._seen.add(key)
        value = request_cached(self._request_key(key), lambda: self._loader(key))
        if caching:
            self._store.set(key, value)
        return value

    def invalidate(self, key: K | None = None) -> None:
        if key is None:
            keys = list(self._seen)
            self._store.clear()
        else:
            keys = [key]
            self._store.pop(key)
        for k in keys:
            forget(self._request_key(k))
