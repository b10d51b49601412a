from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from schemahub.server.routers.auth import BASIC_CHALLENGE, verify_private_access
from schemahub.server.state import ApplicationState, get_state

logger = logging.getLogger(__name__)

PUBLIC_ROUTE = "/openapi.json"
PRIVATE_ROUTE = "/openapi-private.json"


def build_docs_router(prefix: str = "") -> APIRouter:
    """
    Routes serving the generated documents.

    Args:
        prefix: mounted in front of both routes, e.g. "/openapi"
    """
    prefix = prefix.strip("/")
    router = APIRouter(prefix=f"/{prefix}" if prefix else "", tags=["openapi"])

    @router.get(PUBLIC_ROUTE, include_in_schema=False)
    async def public_schema(state: ApplicationState = Depends(get_state)):
        """Bearer-only document."""
        schema = await state.cache.get_public()
        return JSONResponse(content=schema)

    @router.get(PRIVATE_ROUTE, include_in_schema=False)
    async def private_schema(
        authorized: bool = Depends(verify_private_access),
        state: ApplicationState = Depends(get_state),
    ):
        """
        Unfiltered document, behind Basic credentials.

        Unauthorized callers get the challenge without triggering a rebuild.
        """
        if not authorized:
            return PlainTextResponse(
                "Authentication required",
                status_code=401,
                headers={"WWW-Authenticate": BASIC_CHALLENGE},
            )

        schema = await state.cache.get_private()
        return JSONResponse(content=schema)

    return router
