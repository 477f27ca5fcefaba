"""Optional Sentry error reporting for the asset service.

Reports are tagged with the active webpack build so a missing-manifest error
points at the pipeline that was not built. Flask is not imported at module
import time; the CLI tools share this path with the web app.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

_SENTRY_INITIALIZED = False


def _text(obj: Any, name: str) -> str:
    return str(getattr(obj, name, "") or "").strip()


def _rate(obj: Any, name: str) -> float:
    return float(getattr(obj, name, 0.0) or 0.0)


def asset_tags(settings_obj: Any) -> dict[str, str]:
    """Scope tags describing which asset build this process serves."""
    assets = getattr(settings_obj, "assets", None)
    if assets is None:
        return {}
    optimized = bool(getattr(assets, "use_optimized_js", False))
    tags = {
        "pipeline_mode": "production" if optimized else "development",
        "asset_caching": "on" if getattr(assets, "perform_caching", False) else "off",
    }
    webpack_dir = _text(assets, "webpack_dir")
    if webpack_dir:
        tags["webpack_dir"] = webpack_dir
    return tags


def _init_kwargs(settings_obj: Any, dsn: str) -> dict[str, Any]:
    from sentry_sdk.integrations.logging import LoggingIntegration

    integrations: list[Any] = [LoggingIntegration(level=None, event_level="ERROR")]
    try:
        from sentry_sdk.integrations.flask import FlaskIntegration
    except ImportError:
        logger.debug("Sentry Flask integration unavailable")
    else:
        integrations.append(FlaskIntegration())

    sentry_cfg = settings_obj.sentry
    kwargs: dict[str, Any] = {
        "dsn": dsn,
        "integrations": integrations,
        "send_default_pii": False,
        "attach_stacktrace": True,
    }
    environment = _text(sentry_cfg, "environment") or _text(settings_obj, "environment")
    if environment:
        kwargs["environment"] = environment
    if release := _text(sentry_cfg, "release"):
        kwargs["release"] = release
    for name in ("traces_sample_rate", "profiles_sample_rate"):
        rate = _rate(sentry_cfg, name)
        if rate > 0:
            kwargs[name] = rate
    return kwargs


def initialize_sentry(*, settings_obj: Any | None = None) -> bool:
    """Initialize Sentry once, if LMS_SENTRY_ENABLED and LMS_SENTRY_DSN are set.

    Returns True when Sentry is active for this process.
    """
    global _SENTRY_INITIALIZED
    if _SENTRY_INITIALIZED:
        return True

    try:
        if settings_obj is None:
            from config import settings as settings_obj

        sentry_cfg = getattr(settings_obj, "sentry", None)
        dsn = _text(sentry_cfg, "dsn")
        if not getattr(sentry_cfg, "enabled", False) or not dsn:
            return False

        import sentry_sdk

        kwargs = _init_kwargs(settings_obj, dsn)
        sentry_sdk.init(**kwargs)
        tags = asset_tags(settings_obj)
        for key, value in tags.items():
            sentry_sdk.set_tag(key, value)

        _SENTRY_INITIALIZED = True
        logger.info(
            f"Sentry initialized (environment={kwargs.get('environment', 'unset')} "
            f"pipeline_mode={tags.get('pipeline_mode', 'unknown')})"
        )
        return True

    except Exception:
        logger.opt(exception=True).warning("Failed to initialize Sentry (ignored)")
        return False
