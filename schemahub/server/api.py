"""Module api: FastAPI application serving the aggregated OpenAPI documents."""
#
# PURPOSE:
# Builds the HTTP app around an ApplicationState: error handling, CORS, the
# health probe and the two document routes.
#
# USAGE:
#   uvicorn schemahub.server.api:create_app --factory
#   python -m schemahub serve
#

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import schemahub
from schemahub.base.config import SchemaHubConfig, get_config, setup_logging
from schemahub.errors import SchemaHubError
from schemahub.server.routers import docs, system
from schemahub.server.routers.docs import PUBLIC_ROUTE
from schemahub.server.state import ApplicationState

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE"]
CORS_HEADERS = [
    "Origin",
    "X-Requested-With",
    "Content-Type",
    "Accept",
    "Authorization",
]


def create_app(
    state: Optional[ApplicationState] = None,
    config: Optional[SchemaHubConfig] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        state: prebuilt state (tests pass their own registry this way)
        config: used to build the state when none is given
    """
    state = state or ApplicationState.create(config=config)
    cfg = state.config
    docs_path = cfg.docs.path.strip("/")
    docs_path = f"/{docs_path}" if docs_path else ""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"📜 OpenAPI Docs server is available at {docs_path}{PUBLIC_ROUTE}")
        yield
        state.cache.unbind()

    # FastAPI's own /openapi.json would shadow the aggregated document
    app = FastAPI(
        title="SchemaHub",
        description="Aggregated OpenAPI documents for registered services",
        version=schemahub.__version__,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.schemahub = state

    @app.exception_handler(SchemaHubError)
    async def schemahub_error_handler(request: Request, exc: SchemaHubError):
        logger.error(f"[API] {exc.code.value}: {exc.message}", extra={"details": exc.details})
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_dict(),
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.security.allowed_origins),
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        allow_credentials=True,
        max_age=cfg.security.cors_max_age,
    )

    app.include_router(system.router)
    app.include_router(docs.build_docs_router(docs_path))
    return app


def serve(
    config: Optional[SchemaHubConfig] = None,
    state: Optional[ApplicationState] = None,
) -> None:
    """Run the server in the foreground."""
    cfg = config or get_config()
    setup_logging(cfg)
    app = create_app(state=state, config=cfg)
    uvicorn.run(app, host=cfg.api_host, port=cfg.api_port, log_level=cfg.log.level.lower())
