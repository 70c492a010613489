"""
webhook_gateway.auth.authorizer

Registry-backed authorization decisions.

Responsibilities:
- Decide allow/deny for a token at a required privilege level.
- Treat registry failures as deny while keeping them visible in logs.
"""

from __future__ import annotations

from webhook_gateway.auth.models import Privilege
from webhook_gateway.exceptions import RegistryError
from webhook_gateway.observability.logging import get_logger, redact_token
from webhook_gateway.registry.base import UserRegistry

log = get_logger(__name__)


class Authorizer:
    """
    Stateless token check.

    Every call is a fresh registry read: no cache, no rate limit, no lockout.
    The registry is the single source of truth.
    """

    def __init__(self, registry: UserRegistry) -> None:
        self._registry = registry

    async def authorize(self, token: str | None, *, require_admin: bool) -> bool:
        privilege = Privilege.admin if require_admin else Privilege.user
        if not token:
            log.info("authorization_denied", reason="missing_token", privilege=privilege)
            return False

        try:
            user = await self._registry.get_by_token(token)
        except RegistryError as e:
            log.error(
                "authorization_registry_error",
                token=redact_token(token),
                privilege=privilege,
                error=str(e),
            )
            return False

        if user is None:
            log.info(
                "authorization_denied",
                reason="unknown_token",
                token=redact_token(token),
                privilege=privilege,
            )
            return False
        if not user.has(privilege):
            log.warning(
                "authorization_denied",
                reason="insufficient_privilege",
                user=user.name,
                privilege=privilege,
            )
            return False
        return True
