"""Backend package for the asset service Flask app.

The main entry point is `create_app()` from `backend.app`.

Modules:
- app: Flask application factory and template asset helpers
- blueprints/: Route handlers (health, asset resolution API)
- services/: Service layer modules
- utils/: Manifest resolver and cache helpers
"""

from .app import create_app

__all__ = ["create_app"]
