"""
webhook_gateway.api.routers.admin

User administration endpoints (admin privilege).

Responsibilities:
- Issue tokens, delete users, promote users.
- Translate registry failures into 500 responses at the handler boundary.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.responses import PlainTextResponse, Response
from starlette.status import HTTP_201_CREATED, HTTP_500_INTERNAL_SERVER_ERROR

from webhook_gateway.api.deps import user_admin_dep
from webhook_gateway.auth.deps import require_admin
from webhook_gateway.auth.models import AdminCommand
from webhook_gateway.exceptions import (
    RegistryError,
    RegistryPartialFailureError,
    TokenGenerationError,
)
from webhook_gateway.observability.logging import get_logger, redact_token
from webhook_gateway.services.user_admin import UserAdminService

router = APIRouter(tags=["admin"])
log = get_logger(__name__)

ADMIN_METHODS = ["GET", "POST"]


@router.api_route("/newToken", methods=ADMIN_METHODS, response_class=PlainTextResponse)
async def new_token(
    command: AdminCommand = Depends(require_admin),
    service: UserAdminService = Depends(user_admin_dep),
) -> PlainTextResponse:
    try:
        token = await service.issue_token(command.name, actor=command.caller_token)
    except (RegistryError, TokenGenerationError) as e:
        log.error(
            "new_token_failed",
            user=command.name,
            actor=redact_token(command.caller_token),
            error=str(e),
        )
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not issue token"
        ) from e
    return PlainTextResponse(token, status_code=HTTP_201_CREATED)


@router.api_route("/deleteUser", methods=ADMIN_METHODS, response_class=Response)
async def delete_user(
    command: AdminCommand = Depends(require_admin),
    service: UserAdminService = Depends(user_admin_dep),
) -> Response:
    try:
        await service.delete_user(command.name, actor=command.caller_token)
    except RegistryError as e:
        _log_mutation_failure("delete_user_failed", command, e)
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not delete user"
        ) from e
    return Response()


@router.api_route("/promoteUser", methods=ADMIN_METHODS, response_class=Response)
async def promote_user(
    command: AdminCommand = Depends(require_admin),
    service: UserAdminService = Depends(user_admin_dep),
) -> Response:
    try:
        await service.promote_user(command.name, actor=command.caller_token)
    except RegistryError as e:
        _log_mutation_failure("promote_user_failed", command, e)
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not promote user"
        ) from e
    return Response()


def _log_mutation_failure(event: str, command: AdminCommand, error: RegistryError) -> None:
    extra = {}
    if isinstance(error, RegistryPartialFailureError):
        extra = {"succeeded": error.succeeded, "failed": error.failed}
    log.error(
        event,
        user=command.name,
        actor=redact_token(command.caller_token),
        error=str(error),
        **extra,
    )
