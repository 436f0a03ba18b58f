"""Azure Functions v2 programming model entry point.

The Functions host imports this module and discovers the routes registered on
the shared :data:`app.app` instance.
"""
from __future__ import annotations

from app import app

__all__ = ["app"]
