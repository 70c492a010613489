"""Registry doubles wrapping or replacing a real backend."""

from __future__ import annotations

from collections.abc import Sequence

from webhook_gateway.auth.models import UserRecord
from webhook_gateway.exceptions import RegistryError
from webhook_gateway.registry.base import UserRegistry

__all__ = ["FailingRegistry", "SpyRegistry"]


class SpyRegistry:
    """Delegate to a real registry and count lookups."""

    def __init__(self, inner: UserRegistry) -> None:
        self.inner = inner
        self.lookups: list[str] = []

    async def initialize(self) -> None:
        await self.inner.initialize()

    async def get_by_token(self, token: str) -> UserRecord | None:
        self.lookups.append(token)
        return await self.inner.get_by_token(token)

    async def create_or_replace(
        self, token: str, name: str, *, is_admin: bool = False
    ) -> UserRecord:
        return await self.inner.create_or_replace(token, name, is_admin=is_admin)

    async def find_all_by_name(self, name: str) -> list[UserRecord]:
        return await self.inner.find_all_by_name(name)

    async def delete_all(self, records: Sequence[UserRecord]) -> int:
        return await self.inner.delete_all(records)

    async def set_admin_flag(
        self, records: Sequence[UserRecord], is_admin: bool = True
    ) -> int:
        return await self.inner.set_admin_flag(records, is_admin)

    async def ping(self) -> None:
        await self.inner.ping()

    async def close(self) -> None:
        await self.inner.close()


class FailingRegistry(SpyRegistry):
    """Resolve tokens normally but fail every mutation and readiness check."""

    async def create_or_replace(
        self, token: str, name: str, *, is_admin: bool = False
    ) -> UserRecord:
        raise RegistryError("store unavailable")

    async def find_all_by_name(self, name: str) -> list[UserRecord]:
        raise RegistryError("store unavailable")

    async def ping(self) -> None:
        raise RegistryError("store unavailable")
