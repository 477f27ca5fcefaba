"""Per-request memoisation stored on `flask.g`.

Outside a request context nothing is memoised and the factory runs every time.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from flask import g, has_request_context

T = TypeVar("T")

_G_ATTR = "_request_cache"


def _store() -> dict[str, Any] | None:
    if not has_request_context():
        return None
    store = g.get(_G_ATTR)
    if store is None:
        store = {}
        setattr(g, _G_ATTR, store)
    return store


def request_cached(key: str, factory: Callable[[], T]) -> T:
    """Return the value cached under `key` for this request, computing it once."""
    store = _store()
    if store is None:
        return factory()
    if key in store:
        return store[key]
    value = factory()
    store[key] = value
    return value


def forget(key: str) -> None:
    store = _store()
    if store is not None:
        store.pop(key, None)
