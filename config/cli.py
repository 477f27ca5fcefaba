#!/usr/bin/env python3
"""
Configuration Management CLI Tool

Usage:
    python -m config.cli show          # Show current configuration
    python -m config.cli show --json   # JSON format output
    python -m config.cli validate      # Validate configuration and manifest files
    python -m config.cli env           # Generate environment variable template
"""

from __future__ import annotations

import argparse
import json
import sys


def cmd_show(args):
    """Show current configuration"""
    from config.settings import settings

    if args.json:
        data = settings.model_dump(mode="json")
        data["assets"]["webpack_dir"] = settings.assets.webpack_dir
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    print("=" * 60)
    print("LMS Assets Configuration")
    print("=" * 60)

    print("\n📁 Paths:")
    print(f"  public_dir:   {settings.public_dir}")
    print(f"  environment:  {settings.environment}")

    print("\n🌐 Service Configuration:")
    print(f"  serve_host:   {settings.serve_host}")
    print(f"  serve_port:   {settings.serve_port}")

    print("\n📦 Asset Configuration:")
    print(f"  use_optimized_js:   {settings.assets.use_optimized_js}")
    print(f"  webpack_dir:        {settings.assets.webpack_dir}")
    print(f"  dist_dir:           {settings.assets.dist_dir}")
    print(f"  perform_caching:    {settings.assets.perform_caching}")
    print(f"  cache_ttl:          {settings.assets.cache_ttl or 'never expires'}")
    print(f"  rev_manifest:       {settings.assets.rev_manifest_name}")
    print(f"  webpack_manifest:   {settings.assets.webpack_manifest_name}")

    print("\n🌐 Web Configuration:")
    print(f"  secret_key:        {'*' * 8 if settings.web.secret_key else '(not set)'}")
    print(f"  access_log:        {settings.web.access_log}")
    print(f"  warmup_manifests:  {settings.web.warmup_manifests}")
    print(f"  immutable_max_age: {settings.web.immutable_max_age}")

    print("\n🚨 Sentry Configuration:")
    print(f"  enabled:      {settings.sentry.enabled}")
    print(f"  dsn:          {'*' * 8 if settings.sentry.dsn else '(not set)'}")
    print(f"  environment:  {settings.sentry.environment}")

    print("\n📋 Log Configuration:")
    print(f"  log_level:    {settings.log_level}")
    print(f"  log_format:   {settings.log_format}")

    print("\n" + "=" * 60)


def cmd_validate(args):
    """Validate configuration"""
    from backend.utils.manifest import AssetConfig, ManifestConfigurationError, ManifestLoader, Pipeline
    from config.settings import settings

    errors = []
    warnings = []

    if not settings.public_dir.exists():
        warnings.append(f"Public directory does not exist: {settings.public_dir}")

    # Missing manifests are only errors where the resolver would refuse to serve
    loader = ManifestLoader(AssetConfig.from_settings(settings))
    for pipeline in Pipeline:
        try:
            manifest = loader.load(pipeline)
        except ManifestConfigurationError as exc:
            errors.append(str(exc))
            continue
        if manifest.degraded:
            warnings.append(f"{pipeline.value} manifest missing: {loader.config.manifest_path(pipeline)}")

    if settings.is_production and not settings.web.secret_key:
        warnings.append("Secret key not set in production (LMS_WEB_SECRET_KEY)")

    if settings.sentry.enabled and not settings.sentry.dsn:
        warnings.append("Sentry is enabled but LMS_SENTRY_DSN is not set")

    # Output results
    if errors:
        print("❌ Configuration validation failed:")
        for e in errors:
            print(f"  - {e}")
        print()

    if warnings:
        print("⚠️  Configuration warnings:")
        for w in warnings:
            print(f"  - {w}")
        print()

    if not errors and not warnings:
        print("✅ Configuration validation passed")
    elif not errors:
        print("✅ Configuration validation passed (with warnings)")

    return 1 if errors else 0


def cmd_env(args):
    """Generate environment variable template"""
    from config.settings import settings

    print("# Environment variable representation of current configuration")
    print("# Can be copied to .env file")
    print()

    print(f"LMS_ENVIRONMENT={settings.environment}")
    print(f"LMS_PUBLIC_DIR={settings.public_dir}")
    print(f"LMS_SERVE_HOST={settings.serve_host}")
    print(f"LMS_SERVE_PORT={settings.serve_port}")
    print(f"LMS_LOG_LEVEL={settings.log_level}")
    print(f"LMS_LOG_FORMAT={settings.log_format}")
    print()

    print(f"USE_OPTIMIZED_JS={str(settings.assets.use_optimized_js).lower()}")
    print(f"LMS_ASSETS_PERFORM_CACHING={str(settings.assets.perform_caching).lower()}")
    print(f"LMS_ASSETS_CACHE_TTL={settings.assets.cache_ttl}")
    print(f"LMS_ASSETS_DIST_DIR={settings.assets.dist_dir}")
    print(f"LMS_ASSETS_WEBPACK_PRODUCTION_DIR={settings.assets.webpack_production_dir}")
    print(f"LMS_ASSETS_WEBPACK_DEVELOPMENT_DIR={settings.assets.webpack_development_dir}")
    print()

    print(f"LMS_WEB_ACCESS_LOG={str(settings.web.access_log).lower()}")
    print(f"LMS_WEB_WARMUP_MANIFESTS={str(settings.web.warmup_manifests).lower()}")
    print(f"LMS_SENTRY_ENABLED={str(settings.sentry.enabled).lower()}")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="LMS Assets Configuration Management Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m config.cli show          Show current configuration
  python -m config.cli show --json   JSON format output
  python -m config.cli validate      Validate configuration
  python -m config.cli env           Generate environment variables
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # show command
    show_parser = subparsers.add_parser("show", help="Show current configuration")
    show_parser.add_argument("--json", action="store_true", help="JSON format output")

    # validate command
    subparsers.add_parser("validate", help="Validate configuration")

    # env command
    subparsers.add_parser("env", help="Generate environment variable template")

    args = parser.parse_args(argv)

    if args.command == "show":
        cmd_show(args)
    elif args.command == "validate":
        sys.exit(cmd_validate(args))
    elif args.command == "env":
        cmd_env(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
