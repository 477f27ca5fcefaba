"""
Flask server entrypoint for the asset service.

Development:
    python serve.py
Production (gunicorn):
    gunicorn 'serve:app'
"""

from loguru import logger

from backend import create_app
from config import settings

app = create_app()

if __name__ == "__main__":
    logger.info(f"Serving {settings.public_dir} on {settings.serve_host}:{settings.serve_port}")
    app.run(host=settings.serve_host, port=settings.serve_port, debug=settings.environment == "development")
