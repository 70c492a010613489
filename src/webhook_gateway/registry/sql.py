"""
webhook_gateway.registry.sql

SQL registry backend (async SQLAlchemy).

Responsibilities:
- Map registry operations onto the `users` table.
- Apply bulk mutations record by record and report partial failures.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from webhook_gateway.auth.models import UserRecord
from webhook_gateway.db.init_db import init_db
from webhook_gateway.db.models import User
from webhook_gateway.db.session import create_sessionmaker
from webhook_gateway.exceptions import RegistryPartialFailureError
from webhook_gateway.observability.logging import get_logger, redact_token
from webhook_gateway.registry.base import convert_exceptions

log = get_logger(__name__)

_convert = convert_exceptions(SQLAlchemyError)


class SqlUserRegistry:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessions = create_sessionmaker(engine)

    @_convert
    async def initialize(self) -> None:
        await init_db(self._engine)

    @_convert
    async def get_by_token(self, token: str) -> UserRecord | None:
        async with self._sessions() as session:
            user = await session.get(User, token)
            return user.to_record() if user is not None else None

    @_convert
    async def create_or_replace(
        self, token: str, name: str, *, is_admin: bool = False
    ) -> UserRecord:
        async with self._sessions.begin() as session:
            await session.merge(User(token=token, name=name, is_admin=is_admin))
        return UserRecord(token=token, name=name, is_admin=is_admin)

    @_convert
    async def find_all_by_name(self, name: str) -> list[UserRecord]:
        stmt = select(User).where(User.name == name).order_by(User.token)
        async with self._sessions() as session:
            users = (await session.execute(stmt)).scalars().all()
        return [u.to_record() for u in users]

    async def delete_all(self, records: Sequence[UserRecord]) -> int:
        return await self._apply_each(
            "delete",
            records,
            lambda r: delete(User).where(User.token == r.token),
        )

    async def set_admin_flag(
        self, records: Sequence[UserRecord], is_admin: bool = True
    ) -> int:
        return await self._apply_each(
            "set_admin_flag",
            records,
            lambda r: update(User).where(User.token == r.token).values(is_admin=is_admin),
        )

    @_convert
    async def ping(self) -> None:
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        await self._engine.dispose()

    async def _apply_each(
        self,
        operation: str,
        records: Sequence[UserRecord],
        statement: Callable[[UserRecord], Any],
    ) -> int:
        # One transaction per record so a single failure does not undo the others.
        succeeded = 0
        failed: list[str] = []
        for record in records:
            try:
                async with self._sessions.begin() as session:
                    await session.execute(statement(record))
            except SQLAlchemyError as e:
                log.error(
                    "registry_record_failed",
                    operation=operation,
                    token=redact_token(record.token),
                    error=str(e),
                )
                failed.append(redact_token(record.token))
            else:
                succeeded += 1
        if failed:
            raise RegistryPartialFailureError(operation, succeeded=succeeded, failed=failed)
        return succeeded
