"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from fastapi import Request

from eventra.storage import Storage


def get_storage(request: Request) -> Storage:
    """
    Return the storage instance the app was built with.

    The instance is created once in ``create_app`` and lives on
    ``app.state``, so tests get isolation by building a fresh app.
    """
    return request.app.state.storage
