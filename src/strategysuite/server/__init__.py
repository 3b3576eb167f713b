"""HTTP API server."""

from strategysuite.server._app import create_app, lifespan

__all__ = ["create_app", "lifespan"]
