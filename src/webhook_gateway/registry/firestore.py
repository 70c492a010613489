"""
webhook_gateway.registry.firestore

Google Firestore registry backend.

Responsibilities:
- Store one document per token in a `users` collection.
- Keep the document layout of existing deployments (`Name`, `Admin`).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from webhook_gateway.auth.models import UserRecord
from webhook_gateway.exceptions import RegistryError, RegistryPartialFailureError
from webhook_gateway.observability.logging import get_logger, redact_token
from webhook_gateway.registry.base import convert_exceptions

log = get_logger(__name__)

NAME_FIELD = "Name"
ADMIN_FIELD = "Admin"

_convert = convert_exceptions(GoogleAPICallError)


class FirestoreUserRegistry:
    """Firestore-backed user registry.

    The client authenticates to Google on creation, so the registry should be
    created once per process and shared.

    Parameters
    ----------
    client
        Firestore client to use.
    collection
        Name of the collection holding user documents.
    """

    def __init__(self, client: firestore.AsyncClient, *, collection: str = "users") -> None:
        self._client = client
        self._collection = collection

    def _users(self) -> firestore.AsyncCollectionReference:
        return self._client.collection(self._collection)

    async def initialize(self) -> None:
        # Firestore collections are created implicitly by the first write.
        return None

    @_convert
    async def get_by_token(self, token: str) -> UserRecord | None:
        snapshot = await self._users().document(token).get()
        if not snapshot.exists:
            return None
        return _to_record(token, snapshot.to_dict())

    @_convert
    async def create_or_replace(
        self, token: str, name: str, *, is_admin: bool = False
    ) -> UserRecord:
        await self._users().document(token).set({NAME_FIELD: name, ADMIN_FIELD: is_admin})
        return UserRecord(token=token, name=name, is_admin=is_admin)

    @_convert
    async def find_all_by_name(self, name: str) -> list[UserRecord]:
        query = self._users().where(filter=FieldFilter(NAME_FIELD, "==", name))
        snapshots = await query.get()
        return [_to_record(s.id, s.to_dict()) for s in snapshots]

    async def delete_all(self, records: Sequence[UserRecord]) -> int:
        succeeded = 0
        failed: list[str] = []
        for record in records:
            try:
                await self._users().document(record.token).delete()
            except GoogleAPICallError as e:
                log.error(
                    "registry_record_failed",
                    operation="delete",
                    token=redact_token(record.token),
                    error=str(e),
                )
                failed.append(redact_token(record.token))
            else:
                succeeded += 1
        if failed:
            raise RegistryPartialFailureError("delete", succeeded=succeeded, failed=failed)
        return succeeded

    async def set_admin_flag(
        self, records: Sequence[UserRecord], is_admin: bool = True
    ) -> int:
        succeeded = 0
        failed: list[str] = []
        for record in records:
            try:
                # update() only touches the listed field; Name stays as stored.
                await self._users().document(record.token).update({ADMIN_FIELD: is_admin})
            except GoogleAPICallError as e:
                log.error(
                    "registry_record_failed",
                    operation="set_admin_flag",
                    token=redact_token(record.token),
                    error=str(e),
                )
                failed.append(redact_token(record.token))
            else:
                succeeded += 1
        if failed:
            raise RegistryPartialFailureError(
                "set_admin_flag", succeeded=succeeded, failed=failed
            )
        return succeeded

    @_convert
    async def ping(self) -> None:
        await self._users().limit(1).get()

    async def close(self) -> None:
        # The client lives as long as the process; nothing to release here.
        return None


def _to_record(token: str, data: dict[str, Any] | None) -> UserRecord:
    data = data or {}
    name = data.get(NAME_FIELD)
    if not isinstance(name, str) or not name:
        raise RegistryError(f"user document {redact_token(token)} has no {NAME_FIELD}")
    return UserRecord(token=token, name=name, is_admin=bool(data.get(ADMIN_FIELD, False)))
