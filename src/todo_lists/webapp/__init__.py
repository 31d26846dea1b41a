"""Web interface for Todo Lists."""

from .app import create_app

__all__ = ["create_app"]
