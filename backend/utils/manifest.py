"""Fingerprinted asset manifests for cache-busting with hashed filenames.

Two build pipelines each write a JSON manifest mapping logical asset names to
content-hashed filenames:

- rev:     ``<public>/dist/rev-manifest.json`` (served under ``/dist/``)
- webpack: ``<public>/<webpack_dir>/webpack-manifest.json`` where
  ``webpack_dir`` is ``dist/webpack-production`` or ``dist/webpack-dev``

`RevManifest` classifies a source path by pipeline and resolves it to the
fingerprinted URL. Misses are returned as ``None``; a missing manifest in a
strict environment raises `ManifestConfigurationError`.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from loguru import logger

from .cache import ManifestCache

WEBPACK_MISSING_PLACEHOLDER = "Error: you need to run webpack"

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class ManifestConfigurationError(RuntimeError):
    """A manifest required by the current environment is missing or unreadable."""


class Pipeline(str, Enum):
    REV = "rev"
    WEBPACK = "webpack"


class PipelineMode(str, Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"

    @classmethod
    def from_flag(cls, use_optimized_js: bool) -> PipelineMode:
        return cls.PRODUCTION if use_optimized_js else cls.DEVELOPMENT


@dataclass(frozen=True)
class AssetConfig:
    """Asset resolution settings, resolved once at startup."""

    public_dir: Path
    environment: str = "development"
    mode: PipelineMode = PipelineMode.DEVELOPMENT
    perform_caching: bool = False
    cache_ttl: float = 0.0
    dist_dir: str = "dist"
    webpack_production_dir: str = "dist/webpack-production"
    webpack_development_dir: str = "dist/webpack-dev"
    rev_manifest_name: str = "rev-manifest.json"
    webpack_manifest_name: str = "webpack-manifest.json"

    @classmethod
    def from_settings(cls, settings_obj: Any) -> AssetConfig:
        assets = settings_obj.assets
        return cls(
            public_dir=Path(settings_obj.public_dir),
            environment=settings_obj.environment,
            mode=PipelineMode.from_flag(bool(assets.use_optimized_js)),
            perform_caching=bool(assets.perform_caching),
            cache_ttl=float(assets.cache_ttl or 0.0),
            dist_dir=assets.dist_dir,
            webpack_production_dir=assets.webpack_production_dir,
            webpack_development_dir=assets.webpack_development_dir,
            rev_manifest_name=assets.rev_manifest_name,
            webpack_manifest_name=assets.webpack_manifest_name,
        )

    @property
    def webpack_prod(self) -> bool:
        return self.mode is PipelineMode.PRODUCTION

    @property
    def webpack_dir(self) -> str:
        return self.webpack_production_dir if self.webpack_prod else self.webpack_development_dir

    def base_path(self, pipeline: Pipeline) -> str:
        """URL prefix for fingerprinted files of `pipeline` (no trailing slash)."""
        if pipeline is Pipeline.WEBPACK:
            return f"/{self.webpack_dir}"
        return f"/{self.dist_dir}"

    def manifest_path(self, pipeline: Pipeline) -> Path:
        if pipeline is Pipeline.WEBPACK:
            return self.public_dir / self.webpack_dir / self.webpack_manifest_name
        return self.public_dir / self.dist_dir / self.rev_manifest_name

    def caches(self, pipeline: Pipeline) -> bool:
        """Whether `pipeline`'s manifest is kept until invalidated."""
        if pipeline is Pipeline.WEBPACK:
            return self.perform_caching or self.webpack_prod
        return self.perform_caching


@dataclass(frozen=True)
class Manifest:
    """Immutable mapping of logical asset key -> fingerprinted filename.

    A manifest with no `path` was not read from disk (degraded). If a
    `placeholder` is set, every missing key resolves to it.
    """

    pipeline: Pipeline
    entries: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    path: Path | None = None
    placeholder: Any = None
    revved_urls: frozenset[str] = field(default_factory=frozenset)

    @property
    def degraded(self) -> bool:
        return self.path is None

    def get(self, key: str) -> Any:
        return self.entries.get(key, self.placeholder)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


class ManifestLoader:
    """Reads manifests from disk, applying the environment's strictness."""

    def __init__(self, config: AssetConfig):
        self.config = config

    def __call__(self, pipeline: Pipeline) -> Manifest:
        return self.load(pipeline)

    def load(self, pipeline: Pipeline) -> Manifest:
        path = self.config.manifest_path(pipeline)
        started = time.perf_counter()

        if path.is_file():
            logger.debug(f"Reading {pipeline.value} manifest {path}")
            manifest = self._read(pipeline, path)
        elif pipeline is Pipeline.REV:
            if self.config.environment == "production":
                raise ManifestConfigurationError(f"{path} not found: you need to run `gulp rev` first")
            logger.debug(f"Rev manifest not found at {path}, using empty manifest")
            manifest = Manifest(pipeline)
        else:
            if self.config.environment != "test":
                raise ManifestConfigurationError(f"{path} not found: you need to run webpack")
            logger.warning(f"Webpack manifest not found at {path}, every bundle resolves to a placeholder")
            manifest = Manifest(pipeline, placeholder=WEBPACK_MISSING_PLACEHOLDER)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"Loaded {pipeline.value} manifest with {len(manifest)} entries in {elapsed_ms:.1f}ms")
        return manifest

    def _read(self, pipeline: Pipeline, path: Path) -> Manifest:
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise ManifestConfigurationError(f"Failed to read {pipeline.value} manifest {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ManifestConfigurationError(
                f"{pipeline.value} manifest {path} must be a JSON object, got {type(data).__name__}"
            )

        revved: frozenset[str] = frozenset()
        if pipeline is Pipeline.REV:
            base = self.config.base_path(pipeline)
            revved = frozenset(f"{base}/{v}" for v in data.values() if isinstance(v, str))
        return Manifest(pipeline, MappingProxyType(dict(data)), path=path, revved_urls=revved)


class RevManifest:
    """Resolve logical asset paths to fingerprinted URLs across both pipelines."""

    def __init__(
        self,
        config: AssetConfig,
        *,
        loader: ManifestLoader | None = None,
        cache: ManifestCache[Pipeline, Manifest] | None = None,
    ):
        self.config = config
        self._loader = loader or ManifestLoader(config)
        self._cache = cache or ManifestCache(
            self._loader,
            cached=config.caches,
            ttl_s=config.cache_ttl or None,
        )

    @classmethod
    def from_settings(cls, settings_obj: Any) -> RevManifest:
        return cls(AssetConfig.from_settings(settings_obj))

    @property
    def webpack_dir(self) -> str:
        return self.config.webpack_dir

    @property
    def webpack_prod(self) -> bool:
        return self.config.webpack_prod

    @property
    def rev_manifest(self) -> Manifest:
        return self._cache.get_or_load(Pipeline.REV)

    @property
    def webpack_manifest(self) -> Manifest:
        return self._cache.get_or_load(Pipeline.WEBPACK)

    @property
    def revved_urls(self) -> frozenset[str]:
        return self.rev_manifest.revved_urls

    def is_webpack_request(self, source: str) -> bool:
        path = source.removeprefix("/")
        return path == self.webpack_dir or path.startswith(f"{self.webpack_dir}/")

    def include(self, source: str) -> bool:
        """True if `source` is servable: anything under the webpack dir, or a revved URL.

        Webpack chunks are not checked against the manifest.
        """
        if self.is_webpack_request(source):
            return True
        return f"/{source.removeprefix('/')}" in self.revved_urls

    __contains__ = include

    def all_webpack_chunks_for(self, bundle: str) -> list[str] | None:
        entry = self.webpack_manifest.get(bundle)
        if entry is None:
            return None
        if isinstance(entry, str):
            return [entry]
        return [str(chunk) for chunk in entry]

    def webpack_url_for(self, source: str) -> str | None:
        # "dist/webpack-dev/vendor.js" -> manifest["vendor.js"] -> "/dist/webpack-dev/vendor-c-d4be58.js"
        key = source.removeprefix("/").removeprefix(f"{self.webpack_dir}/")
        fingerprinted = self.webpack_manifest.get(key)
        if not fingerprinted or not isinstance(fingerprinted, str):
            return None
        return f"{self.config.base_path(Pipeline.WEBPACK)}/{fingerprinted}"

    def revved_url_for(self, source: str) -> str | None:
        key = source.removeprefix(f"{self.config.dist_dir}/")
        fingerprinted = self.rev_manifest.get(key)
        if not fingerprinted or not isinstance(fingerprinted, str):
            return None
        return f"{self.config.base_path(Pipeline.REV)}/{fingerprinted}"

    def url_for(self, source: str) -> str | None:
        """
        Get the fingerprinted URL for a static asset.

        Args:
            source: Logical asset path, with or without a leading slash
                (e.g., 'dist/webpack-dev/vendor.js' or 'dist/app.css')

        Returns:
            Fingerprinted URL (e.g., '/dist/webpack-dev/vendor-c-d4be58.js'),
            or None if the manifest has no entry for it
        """
        source = source.removeprefix("/")
        if self.is_webpack_request(source):
            return self.webpack_url_for(source)
        return self.revved_url_for(source)

    def invalidate(self, pipeline: Pipeline | None = None) -> None:
        """Drop cached manifests so the next access re-reads them from disk."""
        self._cache.invalidate(pipeline)
        logger.debug(f"Invalidated manifest cache ({pipeline.value if pipeline else 'all'})")

    def warm(self) -> None:
        """Load both manifests now, raising if the environment requires a missing one."""
        for pipeline in Pipeline:
            self._cache.get_or_load(pipeline)

    def status(self) -> dict[str, dict[str, Any]]:
        """Per-pipeline diagnostics for health checks and the CLI."""
        report: dict[str, dict[str, Any]] = {}
        for pipeline in Pipeline:
            path = self.config.manifest_path(pipeline)
            info: dict[str, Any] = {
                "path": str(path),
                "exists": path.is_file(),
                "cached": self._cache.is_cached(pipeline),
            }
            try:
                loaded = self._cache.get_or_load(pipeline)
            except ManifestConfigurationError as exc:
                info["ok"] = False
                info["error"] = str(exc)
            else:
                info["ok"] = True
                info["entries"] = len(loaded)
                info["degraded"] = loaded.degraded
            report[pipeline.value] = info
        return report
