"""
ASGI entrypoint: `paygate.asgi:app` pour uvicorn/gunicorn (voir aussi `python -m paygate`).
La configuration (routes, middlewares, exceptions) vit dans paygate.app_setup.factory.
"""
from paygate.app import app

__all__ = ["app"]
