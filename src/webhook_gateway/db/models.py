"""
webhook_gateway.db.models

Persistence schema for the SQL registry backend.

Responsibilities:
- Define the `users` table: one row per token.
"""

from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from webhook_gateway.auth.models import UserRecord
from webhook_gateway.db.base import Base


class User(Base):
    __tablename__ = "users"

    # The token is the credential and the key; hex of at least 10 bytes.
    token: Mapped[str] = mapped_column(String(128), primary_key=True)
    # Not unique: delete/promote address every row with a given name.
    name: Mapped[str] = mapped_column(String(256), index=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def to_record(self) -> UserRecord:
        return UserRecord(token=self.token, name=self.name, is_admin=self.is_admin)
