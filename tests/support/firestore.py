"""Mock Firestore API for testing."""

from __future__ import annotations

from typing import Any

from google.api_core.exceptions import GoogleAPICallError, NotFound

__all__ = ["MockFirestore"]


class MockSnapshot:
    """Mock document snapshot."""

    def __init__(self, doc_id: str, data: dict[str, Any] | None) -> None:
        self.id = doc_id
        self._data = data
        self.exists = data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return dict(self._data) if self._data is not None else None


class MockDocumentRef:
    """Mock document reference.

    Set ``error`` to make every call on this document raise it.
    """

    def __init__(self, doc_id: str, collection: MockCollection) -> None:
        self.id = doc_id
        self._collection = collection
        self.error: GoogleAPICallError | None = None

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    async def get(self) -> MockSnapshot:
        self._check()
        return MockSnapshot(self.id, self._collection.data.get(self.id))

    async def set(self, data: dict[str, Any]) -> None:
        self._check()
        self._collection.data[self.id] = dict(data)

    async def update(self, data: dict[str, Any]) -> None:
        self._check()
        if self.id not in self._collection.data:
            raise NotFound(f"No document to update: {self.id}")
        self._collection.data[self.id].update(data)

    async def delete(self) -> None:
        self._check()
        self._collection.data.pop(self.id, None)


class MockQuery:
    """Mock query supporting a single equality filter and a limit."""

    def __init__(
        self,
        collection: MockCollection,
        *,
        field: str | None = None,
        value: Any = None,
        limit: int | None = None,
    ) -> None:
        self._collection = collection
        self._field = field
        self._value = value
        self._limit = limit

    async def get(self) -> list[MockSnapshot]:
        if self._collection.error is not None:
            raise self._collection.error
        results = [
            MockSnapshot(doc_id, data)
            for doc_id, data in sorted(self._collection.data.items())
            if self._field is None or data.get(self._field) == self._value
        ]
        if self._limit is not None:
            results = results[: self._limit]
        return results


class MockCollection:
    """Mock Firestore collection object."""

    def __init__(self) -> None:
        self.data: dict[str, dict[str, Any]] = {}
        self.error: GoogleAPICallError | None = None
        self._refs: dict[str, MockDocumentRef] = {}

    def document(self, doc_id: str) -> MockDocumentRef:
        if doc_id not in self._refs:
            self._refs[doc_id] = MockDocumentRef(doc_id, self)
        return self._refs[doc_id]

    def where(self, *, filter: Any) -> MockQuery:
        assert filter.op_string == "=="
        return MockQuery(self, field=filter.field_path, value=filter.value)

    def limit(self, count: int) -> MockQuery:
        return MockQuery(self, limit=count)


class MockFirestore:
    """Mock Firestore async client."""

    def __init__(self) -> None:
        self._collections: dict[str, MockCollection] = {}

    def collection(self, name: str) -> MockCollection:
        if name not in self._collections:
            self._collections[name] = MockCollection()
        return self._collections[name]
