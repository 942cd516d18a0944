"""
HTTP API for the shopping cart patterns demo.

This package provides a single FastAPI application that exposes:
- Catalog and cart endpoints
- Snapshot save/restore endpoints
- The listener's received notifications
- The payment adapter demo
"""

from api.main import app

__all__ = ["app"]
