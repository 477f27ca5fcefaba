"""Shared pytest fixtures and test configuration.

This module provides common fixtures and utilities for all tests.
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Callable

import pytest

# Ensure repo root is on sys.path
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


def configure_test_env() -> None:
    """Configure environment variables for testing.

    Tests run in the `test` environment (missing webpack output degrades to a
    placeholder instead of failing) against an isolated public directory, so
    nothing under the real public/ tree is read.
    """
    os.environ.setdefault("LMS_PUBLIC_DIR", tempfile.mkdtemp(prefix="lms_assets_test_"))
    os.environ["LMS_ENVIRONMENT"] = "test"
    os.environ["LMS_WEB_SECRET_KEY"] = "test-secret-key"
    os.environ["LMS_SENTRY_ENABLED"] = "0"
    os.environ.pop("USE_OPTIMIZED_JS", None)
    os.environ.pop("LMS_ASSETS_USE_OPTIMIZED_JS", None)
    os.environ.setdefault("LMS_LOG_LEVEL", "ERROR")


# Configure test environment on import
configure_test_env()


@pytest.fixture
def public_dir(tmp_path) -> Path:
    """Empty served-assets root."""
    root = tmp_path / "public"
    root.mkdir()
    return root


@pytest.fixture
def write_manifest(public_dir) -> Callable[[str, dict[str, Any]], Path]:
    """Write a JSON manifest at `public_dir/<relative>` and return its path."""

    def _write(relative: str, data: Any) -> Path:
        path = public_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def asset_config(public_dir):
    """Factory for `AssetConfig` rooted at the test public dir."""
    from backend.utils.manifest import AssetConfig

    def _make(**overrides) -> AssetConfig:
        overrides.setdefault("public_dir", public_dir)
        overrides.setdefault("environment", "test")
        return AssetConfig(**overrides)

    return _make


@pytest.fixture
def settings_for(monkeypatch, public_dir):
    """Build a fresh `Settings` for the test public dir with env overrides."""
    from config.settings import Settings

    def _make(**env: str) -> Settings:
        monkeypatch.setenv("LMS_PUBLIC_DIR", str(public_dir))
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return Settings()

    return _make


@pytest.fixture
def app(settings_for):
    """Create Flask application for testing against the test public dir."""
    from backend import create_app

    application = create_app(settings_for())
    application.testing = True
    return application


@pytest.fixture
def client(app):
    """Create Flask test client.

    This fixture is function-scoped to ensure clean state for each test.
    """
    return app.test_client()


# Test data fixtures
@pytest.fixture
def rev_entries() -> dict[str, str]:
    return {
        "vendor.js": "vendor-abcd1234.js",
        "images/logo.png": "images/logo-5f6e7d8c.png",
        "app.css": "app-0a1b2c3d4e.css",
    }


@pytest.fixture
def webpack_entries() -> dict[str, Any]:
    return {
        "vendor.js": "vendor-c-d4be58c989364f9fe7db.js",
        "main.js": ["main-9f8e7d6c.js", "main-vendors-1a2b3c4d.js"],
    }
