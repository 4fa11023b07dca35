"""
pokertable Server - FastAPI driver for a local table
"""

from pokertable.server.app import app, create_app
from pokertable.server.session import TableSession

__all__ = ["app", "create_app", "TableSession"]
