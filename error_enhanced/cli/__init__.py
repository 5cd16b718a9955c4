"""Command line interface entry points for error_enhanced."""

from .main import app, create_app

__all__ = ["app", "create_app"]
