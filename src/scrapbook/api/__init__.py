"""
HTTP API for the scrapbook application.

- create_app: FastAPI application factory
"""

from .app import create_app

__all__ = ["create_app"]
