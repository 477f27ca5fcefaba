"""Web page routes."""

from __future__ import annotations

from flask import Blueprint, jsonify

from ..services.asset_service import get_rev_manifest, manifest_health

bp = Blueprint("web", __name__)


@bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint that verifies both asset manifests load.

    Returns 503 when a manifest required by the current environment is missing,
    so a deploy that skipped the build step is caught by the load balancer.
    """
    report, healthy = manifest_health()
    resolver = get_rev_manifest()
    body = {
        "status": "ok" if healthy else "error",
        "environment": resolver.config.environment,
        "pipeline_mode": resolver.config.mode.value,
        "webpack_dir": resolver.webpack_dir,
        "manifests": report,
    }
    return jsonify(body), 200 if healthy else 503
