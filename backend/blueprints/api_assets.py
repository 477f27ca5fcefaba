"""Asset resolution API routes."""

from __future__ import annotations

from flask import Blueprint, request

from ..services.api_helpers import api_error, api_success, normalize_name
from ..services.asset_service import bundle_chunks, resolve_asset

bp = Blueprint("assets", __name__, url_prefix="/api/assets")


@bp.route("/url", methods=["GET"])
def asset_url():
    """Resolve a logical asset path to its fingerprinted URL.

    Query: ?source=dist/webpack-production/main.js
    """
    source = normalize_name(request.args.get("source"))
    if not source:
        return api_error("source is required", 400)

    result = resolve_asset(source)
    if result["url"] is None:
        return api_error("Asset not found", 404, source=source, known=result["known"])
    return api_success(**result)


@bp.route("/chunks/<path:bundle>", methods=["GET"])
def webpack_chunks(bundle: str):
    """List the fingerprinted chunk URLs of a webpack bundle."""
    chunks = bundle_chunks(bundle)
    if chunks is None:
        return api_error("Bundle not found", 404, bundle=bundle)
    return api_success(bundle=bundle, chunks=chunks)
