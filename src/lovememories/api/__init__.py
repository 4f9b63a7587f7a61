"""HTTP API for lovememories application."""

from .app import create_app

__all__ = ["create_app"]
