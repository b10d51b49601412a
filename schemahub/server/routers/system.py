from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends

from schemahub.server.state import ApplicationState, get_state

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(state: ApplicationState = Depends(get_state)):
    """Liveness plus a summary of the registry and document cache."""
    return {
        "status": "ok",
        "timestamp": asyncio.get_running_loop().time(),
        "environment": state.config.environment,
        "services": len(state.registry),
        "last_event": state.bus.last_sequence,
        "schema": state.cache.status(),
    }
