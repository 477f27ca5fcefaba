"""Test package for the asset service.

- **unit/**: Unit tests for individual functions and classes
  - test_manifest.py: Manifest resolver and loader tests
  - test_manifest_cache.py: Cache policy, request cache and invalidation
  - test_cache.py: LRUCacheTTL tests
  - test_settings.py / test_config_reload.py: Configuration tests
  - test_config_cli.py / test_tools_assets.py: CLI tests

- **integration/**: Integration tests using Flask test client
  - test_app.py: Application setup, template helpers, static cache headers
  - test_api_assets.py: Asset resolution API and /health

Running tests:
    pytest tests/
"""
