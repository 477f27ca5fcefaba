"""Blueprint modules for app routes."""

from . import api_assets, web

__all__ = [
    "api_assets",
    "web",
]
