"""
FastAPI application entry point for the Eventra backend.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventra import __version__
from eventra.config import Settings, get_settings
from eventra.routes import router
from eventra.schemas import ValidationErrorItem, ValidationErrorResponse
from eventra.storage import InMemoryStorage, Storage

logger = logging.getLogger(__name__)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request data as 400 with per-field detail."""
    errors = [
        ValidationErrorItem(
            loc=list(error.get("loc", ())),
            msg=error.get("msg", ""),
            type=error.get("type", ""),
        )
        for error in exc.errors()
    ]
    logger.info(
        "Rejected %s %s: %d validation error(s)",
        request.method,
        request.url.path,
        len(errors),
    )
    return JSONResponse(
        status_code=400,
        content=ValidationErrorResponse(
            detail="Invalid event data", errors=errors
        ).model_dump(),
    )


def create_app(
    storage: Optional[Storage] = None, settings: Optional[Settings] = None
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_title, version=__version__, debug=settings.debug)
    app.state.storage = storage if storage is not None else InMemoryStorage()

    if settings.debug:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
