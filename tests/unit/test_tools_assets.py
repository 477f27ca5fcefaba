"""Unit tests for the asset manifest operator tool."""

from __future__ import annotations

import json

import pytest


@pytest.fixture
def configured(monkeypatch, public_dir, write_manifest):
    import config

    write_manifest("dist/rev-manifest.json", {"vendor.js": "vendor-abcd1234.js"})
    write_manifest("dist/webpack-dev/webpack-manifest.json", {"main.js": ["main-11111111.js", "rt-22222222.js"]})

    def _apply(**env: str):
        monkeypatch.setenv("LMS_PUBLIC_DIR", str(public_dir))
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        config.reload_settings()

    _apply()
    yield _apply
    monkeypatch.undo()
    config.reload_settings()


def test_resolve(configured, capsys):
    from tools import assets

    assert assets.main(["resolve", "dist/vendor.js"]) == 0
    assert capsys.readouterr().out.strip() == "dist/vendor.js\t/dist/vendor-abcd1234.js"


def test_resolve_reports_missing(configured, capsys):
    from tools import assets

    assert assets.main(["resolve", "dist/vendor.js", "dist/nope.js"]) == 1
    assert "dist/nope.js\t(not found)" in capsys.readouterr().out


def test_known(configured, capsys):
    from tools import assets

    assert assets.main(["known", "/dist/webpack-dev/anything.js"]) == 0
    assert assets.main(["known", "/dist/nope.js"]) == 1
    assert capsys.readouterr().out.split() == ["known", "unknown"]


def test_chunks(configured, capsys):
    from tools import assets

    assert assets.main(["chunks", "main.js"]) == 0
    assert capsys.readouterr().out.split() == ["main-11111111.js", "rt-22222222.js"]
    assert assets.main(["chunks", "other.js"]) == 1


def test_check_json(configured, capsys):
    from tools import assets

    assert assets.main(["check", "--json"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["rev"]["entries"] == 1
    assert report["webpack"]["entries"] == 1


def test_check_fails_for_missing_strict_manifest(configured, capsys):
    from tools import assets

    configured(LMS_ENVIRONMENT="production", USE_OPTIMIZED_JS="true")
    assert assets.main(["check"]) == 1
    assert "run webpack" in capsys.readouterr().out


def test_configuration_error_exit_code(configured, capsys):
    from tools import assets

    configured(LMS_ENVIRONMENT="production", USE_OPTIMIZED_JS="true")
    assert assets.main(["resolve", "dist/webpack-production/main.js"]) == 2
    assert "run webpack" in capsys.readouterr().err


def test_dispatcher_help_lists_commands(capsys):
    from tools.__main__ import main

    assert main([]) == 0
    err = capsys.readouterr().err
    assert "assets" in err
    assert "config" in err


def test_dispatcher_rejects_unknown_command(capsys):
    from tools.__main__ import main

    assert main(["nope"]) == 2
    assert "Unknown command: nope" in capsys.readouterr().err
