"""civicfix HTTP API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)


def create_app(
    data_dir: str | Path = ".civicfix",
    *,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """Create the FastAPI app serving the issue API.

    Initializes the data directory (creating and seeding any missing
    collection) before the app is returned.

    Args:
        data_dir: Path to the data directory.
        cors_origins: Allowed CORS origins (default: from config.toml).

    Returns:
        Configured FastAPI application.
    """
    from civicfix.config import get_setting
    from civicfix.errors import IssueNotFoundError, PersistenceError
    from civicfix.workspace import init_workspace

    workspace, created = init_workspace(data_dir)
    if created:
        logger.info("Created collections: %s", ", ".join(created))

    app = FastAPI(
        title="civicfix",
        docs_url=None,
        redoc_url=None,
    )
    app.state.workspace = workspace

    from fastapi.middleware.cors import CORSMiddleware

    origins = cors_origins
    if origins is None:
        origins = list(get_setting(workspace.data_dir, "cors_origins"))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(IssueNotFoundError)
    async def _not_found(_request: Request, _exc: IssueNotFoundError) -> Response:
        return JSONResponse(status_code=404, content={"error": "Not found"})

    @app.exception_handler(PersistenceError)
    async def _persistence_failed(_request: Request, exc: PersistenceError) -> Response:
        logger.error("Persistence failure: %s", exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def _route_not_found(
        request: Request,
        exc: StarletteHTTPException,
    ) -> Response:
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return await http_exception_handler(request, exc)

    from civicfix.web.routes import router

    app.include_router(router)

    return app


__all__ = ["create_app"]
