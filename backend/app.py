"""Flask application factory."""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Any

from flask import Flask, jsonify, request
from loguru import logger
from markupsafe import Markup

from config import settings

from .blueprints import api_assets, web
from .utils.manifest import ManifestConfigurationError, RevManifest

logger.remove()
logger.add(sys.stdout, level=settings.log_level.upper(), serialize=settings.log_format == "json")

if not settings.web.access_log:
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

# name-HASH.ext as written by both build pipelines
_FINGERPRINT_RE = re.compile(r"-[a-zA-Z0-9]{8,}\.(js|css|map|png|jpg|svg|woff2?)$")


def _load_secret_key(settings_obj: Any) -> str:
    sk = (settings_obj.web.secret_key or "").strip()
    if sk:
        return sk

    logger.warning("No secret key found (LMS_WEB_SECRET_KEY); generating a random key (sessions reset on restart)")
    import secrets

    return secrets.token_urlsafe(32)


def create_app(settings_obj: Any | None = None, *, rev_manifest: RevManifest | None = None) -> Flask:
    settings_obj = settings_obj or settings

    public_dir = str(settings_obj.public_dir)
    app = Flask(
        __name__,
        static_folder=public_dir,
        static_url_path="",
    )
    app.secret_key = _load_secret_key(settings_obj)

    # Optional Sentry error reporting (no-op unless configured).
    from config.sentry import initialize_sentry

    initialize_sentry(settings_obj=settings_obj)

    resolver = rev_manifest or RevManifest.from_settings(settings_obj)
    app.extensions["rev_manifest"] = resolver
    logger.info(
        f"Asset resolver ready: environment={settings_obj.environment} "
        f"webpack_dir={resolver.webpack_dir} public_dir={public_dir}"
    )

    # A skipped build step must fail the deploy, not the first page view.
    if settings_obj.is_production and settings_obj.web.warmup_manifests:
        resolver.warm()

    @app.errorhandler(ManifestConfigurationError)
    def _handle_manifest_error(err):
        logger.opt(exception=err).error(f"Asset manifest unavailable: {err}")
        return jsonify({"success": False, "error": "Asset manifest unavailable"}), 500

    @app.errorhandler(404)
    def _handle_404(_err):
        return jsonify({"success": False, "error": "Not Found"}), 404

    @app.after_request
    def add_cache_headers(resp):
        # Fingerprinted files can be cached forever; HTML must not be, so pages
        # never reference hashed URLs from a previous deploy.
        dist_prefix = f"/{settings_obj.assets.dist_dir}/"
        if request.path.startswith(dist_prefix) and resp.status_code == 200:
            if _FINGERPRINT_RE.search(request.path):
                max_age = settings_obj.web.immutable_max_age
                resp.headers["Cache-Control"] = f"public, max-age={max_age}, immutable"
            else:
                resp.headers["Cache-Control"] = "public, max-age=3600"
        elif resp.mimetype == "text/html":
            resp.headers.setdefault("Cache-Control", "no-store")
            resp.headers.setdefault("Pragma", "no-cache")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        return resp

    @app.context_processor
    def inject_asset_helpers():
        """Inject asset helpers for fingerprinted URLs."""

        def asset_url(source: str) -> str:
            """Fingerprinted URL for `source`, or its unrevved path when unknown."""
            resolved = resolver.url_for(source)
            if resolved:
                return resolved
            logger.warning(f"No fingerprinted asset for {source}, serving unrevved path")
            return f"/{source.lstrip('/')}"

        def js_bundle_tags(bundle: str) -> Markup:
            chunks = resolver.all_webpack_chunks_for(bundle) or []
            if not chunks:
                logger.warning(f"Webpack bundle {bundle} not in manifest")
            base = f"/{resolver.webpack_dir}"
            return Markup("\n").join(
                Markup('<script src="{}" defer></script>').format(f"{base}/{chunk}") for chunk in chunks
            )

        def asset_known(source: str) -> bool:
            return resolver.include(source)

        return {
            "asset_url": asset_url,
            "asset_known": asset_known,
            "js_bundle_tags": js_bundle_tags,
            "webpack_dir": resolver.webpack_dir,
        }

    app.register_blueprint(web.bp)
    app.register_blueprint(api_assets.bp)

    logger.debug(f"Registered blueprints: {sorted(app.blueprints)} (pid={os.getpid()})")
    return app
