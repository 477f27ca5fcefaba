"""Unit tests for config reload behavior."""

from __future__ import annotations

import importlib


def test_reload_settings_updates_module_binding(monkeypatch):
    """reload_settings should update both `config.settings` and `config.settings.settings`."""
    import config

    settings_module = importlib.import_module("config.settings")

    old = config.settings

    monkeypatch.setenv("USE_OPTIMIZED_JS", "true")
    try:
        new = config.reload_settings()

        assert new is not old
        assert new is config.settings
        assert new is settings_module.settings
        assert new.assets.webpack_dir == "dist/webpack-production"
    finally:
        monkeypatch.delenv("USE_OPTIMIZED_JS")
        config.reload_settings()
