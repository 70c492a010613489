"""
webhook_gateway.services.user_admin

User administration on top of the registry.

Responsibilities:
- Issue new tokens.
- Revoke and promote every credential that belongs to a name.
"""

from __future__ import annotations

from webhook_gateway.auth.tokens import generate_token
from webhook_gateway.observability.logging import get_logger, redact_token
from webhook_gateway.registry.base import UserRegistry

log = get_logger(__name__)


class UserAdminService:
    """
    Names are not unique. Delete and promote apply to every record carrying the
    name, and a name with no records is a successful no-op.
    """

    def __init__(self, *, registry: UserRegistry, token_bytes: int = 10) -> None:
        self._registry = registry
        self._token_bytes = token_bytes

    async def issue_token(self, name: str, *, actor: str | None = None) -> str:
        token = generate_token(self._token_bytes)
        await self._registry.create_or_replace(token, name, is_admin=False)
        log.info(
            "token_issued",
            user=name,
            token=redact_token(token),
            actor=redact_token(actor),
        )
        return token

    async def delete_user(self, name: str, *, actor: str | None = None) -> int:
        records = await self._registry.find_all_by_name(name)
        log.info("deleting_users", user=name, count=len(records), actor=redact_token(actor))
        if not records:
            return 0
        return await self._registry.delete_all(records)

    async def promote_user(self, name: str, *, actor: str | None = None) -> int:
        records = await self._registry.find_all_by_name(name)
        log.info("promoting_users", user=name, count=len(records), actor=redact_token(actor))
        if not records:
            return 0
        return await self._registry.set_admin_flag(records, True)
