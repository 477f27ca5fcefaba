#!/usr/bin/env python3
"""
Asset manifest operator tool

Usage:
    python -m tools assets resolve dist/webpack-production/main.js [more ...]
    python -m tools assets known /dist/app-1a2b3c4d.css
    python -m tools assets chunks main.js
    python -m tools assets check [--json]
"""

from __future__ import annotations

import argparse
import json
import sys

from loguru import logger

import config
from backend.utils.manifest import ManifestConfigurationError, RevManifest


def _resolver() -> RevManifest:
    return RevManifest.from_settings(config.settings)


def cmd_resolve(args) -> int:
    resolver = _resolver()
    missing = 0
    for source in args.sources:
        url = resolver.url_for(source)
        if url is None:
            missing += 1
            print(f"{source}\t(not found)")
        else:
            print(f"{source}\t{url}")
    return 1 if missing else 0


def cmd_known(args) -> int:
    known = _resolver().include(args.source)
    print("known" if known else "unknown")
    return 0 if known else 1


def cmd_chunks(args) -> int:
    chunks = _resolver().all_webpack_chunks_for(args.bundle)
    if chunks is None:
        print(f"Bundle not found: {args.bundle}", file=sys.stderr)
        return 1
    for chunk in chunks:
        print(chunk)
    return 0


def cmd_check(args) -> int:
    report = _resolver().status()
    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        for name, info in report.items():
            if info["ok"]:
                state = "degraded" if info["degraded"] else f"{info['entries']} entries"
                print(f"✅ {name:8s} {state}  ({info['path']})")
            else:
                print(f"❌ {name:8s} {info['error']}")
    return 0 if all(info["ok"] for info in report.values()) else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fingerprinted asset manifest tool")
    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    resolve_parser = subparsers.add_parser("resolve", help="Print fingerprinted URLs for sources")
    resolve_parser.add_argument("sources", nargs="+", help="Logical asset paths")

    known_parser = subparsers.add_parser("known", help="Check whether a source is servable")
    known_parser.add_argument("source")

    chunks_parser = subparsers.add_parser("chunks", help="List webpack chunks for a bundle")
    chunks_parser.add_argument("bundle")

    check_parser = subparsers.add_parser("check", help="Load both manifests and report status")
    check_parser.add_argument("--json", action="store_true", help="JSON format output")

    args = parser.parse_args(argv)
    handlers = {
        "resolve": cmd_resolve,
        "known": cmd_known,
        "chunks": cmd_chunks,
        "check": cmd_check,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except ManifestConfigurationError as exc:
        logger.error(f"Asset manifest unavailable: {exc}")
        print(f"❌ {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
