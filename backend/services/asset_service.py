"""Asset lookups for request handlers, backed by the app's `RevManifest`."""

from __future__ import annotations

from typing import Any

from flask import current_app
from loguru import logger

from ..utils.manifest import RevManifest


def get_rev_manifest() -> RevManifest:
    """Resolver owned by the current app."""
    return current_app.extensions["rev_manifest"]


def resolve_asset(source: str) -> dict[str, Any]:
    """Known-ness and fingerprinted URL for `source` (url is None when absent)."""
    resolver = get_rev_manifest()
    url = resolver.url_for(source)
    known = resolver.include(source)
    if url is None:
        logger.debug(f"Asset not in manifest: {source}")
    return {"source": source, "known": known, "url": url}


def bundle_chunks(bundle: str) -> list[str] | None:
    resolver = get_rev_manifest()
    chunks = resolver.all_webpack_chunks_for(bundle)
    if chunks is None:
        return None
    return [f"/{resolver.webpack_dir}/{chunk}" for chunk in chunks]


def manifest_health() -> tuple[dict[str, Any], bool]:
    """Manifest status report and whether every pipeline loaded."""
    resolver = get_rev_manifest()
    report = resolver.status()
    healthy = all(info.get("ok") for info in report.values())
    return report, healthy
