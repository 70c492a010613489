"""
webhook_gateway.auth.deps

FastAPI dependency functions for authorization.

Responsibilities:
- Extract the query parameters each gated route requires.
- Reject missing parameters before the registry is consulted.
- Enforce user/admin privilege through the shared `Authorizer`.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Query
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED

from webhook_gateway.api.deps import authorizer_dep
from webhook_gateway.auth.authorizer import Authorizer
from webhook_gateway.auth.models import AdminCommand


async def require_admin(
    token: str | None = Query(default=None),
    name: str | None = Query(default=None),
    authorizer: Authorizer = Depends(authorizer_dep),
) -> AdminCommand:
    # Parameter check first: nothing reaches the registry for a malformed request.
    if not token or not name:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="Query parameters 'token' and 'name' are required",
        )
    if not await authorizer.authorize(token, require_admin=True):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return AdminCommand(caller_token=token, name=name)


async def require_user(
    token: str | None = Query(default=None),
    authorizer: Authorizer = Depends(authorizer_dep),
) -> str:
    # A missing token is an authorization failure here, not a client error.
    if not await authorizer.authorize(token, require_admin=False):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return token or ""


# --- Module Notes -----------------------------------------------------------
# Admin routes require both parameters up front (400 when absent); forwarding
# routes only need a token and answer 401 when it is absent.
