"""
Router initialization module.

Exports the API routers for the SchemaHub backend.
"""
from schemahub.server.routers import auth, docs, system

__all__ = [
    "auth",
    "docs",
    "system",
]
