"""Entity store port: abstract interface for document persistence."""

import uuid
from abc import ABC, abstractmethod
from typing import Any

Document = dict[str, Any]


class EntityNotFoundError(LookupError):
    """Raised when a document does not exist in its collection."""

    def __init__(self, collection: str, doc_id: str) -> None:
        super().__init__(f"{collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


def new_id() -> str:
    return uuid.uuid4().hex


def parse_sort(sort: str | None) -> tuple[str, bool] | None:
    """Turn ``"-field"`` / ``"field"`` into ``(field, descending)``."""
    if not sort:
        return None
    if sort.startswith("-"):
        return sort[1:], True
    return sort, False


def sort_documents(docs: list[Document], sort: str | None) -> list[Document]:
    """Order documents by one field; documents missing it always go last."""
    spec = parse_sort(sort)
    if spec is None:
        return docs
    field, descending = spec
    present = [d for d in docs if d.get(field) is not None]
    missing = [d for d in docs if d.get(field) is None]
    present.sort(key=lambda d: d[field], reverse=descending)
    return present + missing


def matches(doc: Document, query: dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class EntityStorePort(ABC):
    """Abstraction over the document database (Firestore, SQL, local JSON)."""

    @abstractmethod
    async def list_all(self, collection: str, sort: str | None = None) -> list[Document]:
        """Return every document in a collection."""
        ...

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Document | None:
        """Return one document or None."""
        ...

    @abstractmethod
    async def create(self, collection: str, data: Document) -> Document:
        """Insert a document. Uses ``data["id"]`` when present."""
        ...

    @abstractmethod
    async def update(self, collection: str, doc_id: str, data: Document) -> Document:
        """Shallow-merge ``data`` into a document and return the result."""
        ...

    @abstractmethod
    async def increment(
        self,
        collection: str,
        doc_id: str,
        field: str,
        by: int = 1,
        changes: Document | None = None,
        defaults: Document | None = None,
    ) -> Document:
        """
        Atomically add ``by`` to a numeric field and merge ``changes``.

        A missing field counts as 0. A missing document raises
        ``EntityNotFoundError`` unless ``defaults`` is given, in which case
        it is created from ``defaults`` with ``field`` set to ``by``.
        """
        ...

    @abstractmethod
    async def append(self, collection: str, doc_id: str, field: str, item: Any) -> Document:
        """Atomically append ``item`` to a list field (created if missing)."""
        ...

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document."""
        ...

    @abstractmethod
    async def filter(
        self, collection: str, query: dict[str, Any], sort: str | None = None
    ) -> list[Document]:
        """Return documents whose fields equal every value in ``query``."""
        ...

    async def close(self) -> None:
        """Release backend resources."""


def apply_increment(
    doc: Document | None,
    doc_id: str,
    field: str,
    by: int,
    changes: Document | None,
    defaults: Document | None,
) -> Document | None:
    """Merged result of an increment, or None when the document is missing and has no defaults."""
    if doc is None:
        if defaults is None:
            return None
        base = {**defaults}
        current = 0
    else:
        base = {**doc}
        current = doc.get(field) or 0
    return {**base, **(changes or {}), field: current + by, "id": doc_id}


def apply_append(doc: Document, field: str, item: Any) -> Document:
    return {**doc, field: [*(doc.get(field) or []), item]}
