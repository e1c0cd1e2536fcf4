"""HTTP service for Voice Studio built on Flask."""

from .app import build_services, create_app

__all__ = ["build_services", "create_app"]
