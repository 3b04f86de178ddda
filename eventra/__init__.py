"""
Eventra backend package.

Provides a FastAPI application exposing CRUD endpoints for calendar events,
backed by a storage abstraction with an in-memory implementation.
"""

__version__ = "0.1.0"
