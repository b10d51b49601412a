from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from schemahub.server.state import ApplicationState, get_state

logger = logging.getLogger(__name__)

BASIC_CHALLENGE = 'Basic realm="401"'

# HTTPBasic still raises on an undecodable payload, see read_basic_credentials
basic = HTTPBasic(auto_error=False, realm="401")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def read_basic_credentials(request: Request) -> Optional[HTTPBasicCredentials]:
    """
    Basic credentials from the Authorization header, or None when the header
    is missing, uses another scheme or cannot be decoded.
    """
    try:
        return await basic(request)
    except HTTPException:
        return None


def check_basic_credentials(
    credentials: Optional[HTTPBasicCredentials],
    login: str,
    password: str,
) -> bool:
    if credentials is None:
        return False
    if not (credentials.username and credentials.password):
        return False
    return credentials.username == login and credentials.password == password


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

async def verify_private_access(
    request: Request,
    state: ApplicationState = Depends(get_state),
) -> bool:
    """
    Check the request against the configured private-docs credentials.

    Returns False instead of raising so the route can answer with a Basic
    challenge.
    """
    docs = state.config.docs
    credentials = await read_basic_credentials(request)
    authorized = check_basic_credentials(credentials, docs.private_login, docs.private_password)
    if not authorized:
        logger.warning(
            "Rejected private OpenAPI request",
            extra={"client_ip": get_client_ip(request), "endpoint": str(request.url.path)},
        )
    return authorized
