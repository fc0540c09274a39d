"""Cloud Firestore entity store (production backend)."""

import logging
from typing import Any

from google.api_core.exceptions import NotFound
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter

from coursehub.ports.entity_store import (
    Document,
    EntityNotFoundError,
    EntityStorePort,
    matches,
    new_id,
    sort_documents,
)

logger = logging.getLogger(__name__)


def _snapshot_to_document(snapshot) -> Document | None:
    """Convert a DocumentSnapshot to a dict with an ``id`` field."""
    if not snapshot.exists:
        return None
    doc = snapshot.to_dict() or {}
    doc["id"] = snapshot.id
    return doc


class FirestoreStoreAdapter(EntityStorePort):
    """
    Entity store backed by ``google.cloud.firestore.AsyncClient``.

    Sorting happens client-side so documents missing the sort field are
    kept (Firestore's ``order_by`` would silently drop them).
    """

    def __init__(self, project: str | None = None, client: firestore.AsyncClient | None = None) -> None:
        self._client = client or firestore.AsyncClient(project=project)
        logger.info("FirestoreStore initialized: project=%s", self._client.project)

    async def list_all(self, collection: str, sort: str | None = None) -> list[Document]:
        docs = [
            _snapshot_to_document(snap)
            async for snap in self._client.collection(collection).stream()
        ]
        return sort_documents([d for d in docs if d is not None], sort)

    async def get(self, collection: str, doc_id: str) -> Document | None:
        snapshot = await self._client.collection(collection).document(doc_id).get()
        return _snapshot_to_document(snapshot)

    async def create(self, collection: str, data: Document) -> Document:
        payload = {k: v for k, v in data.items() if k != "id"}
        doc_id = data.get("id") or new_id()
        await self._client.collection(collection).document(doc_id).set(payload)
        logger.info("Created %s/%s", collection, doc_id)
        return {**payload, "id": doc_id}

    async def update(self, collection: str, doc_id: str, data: Document) -> Document:
        ref = self._client.collection(collection).document(doc_id)
        try:
            await ref.update({k: v for k, v in data.items() if k != "id"})
        except NotFound as exc:
            raise EntityNotFoundError(collection, doc_id) from exc
        return _snapshot_to_document(await ref.get())

    async def increment(
        self,
        collection: str,
        doc_id: str,
        field: str,
        by: int = 1,
        changes: Document | None = None,
        defaults: Document | None = None,
    ) -> Document:
        ref = self._client.collection(collection).document(doc_id)
        payload = {k: v for k, v in (changes or {}).items() if k != "id"}
        payload[field] = firestore.Increment(by)
        try:
            await ref.update(payload)
        except NotFound as exc:
            if defaults is None:
                raise EntityNotFoundError(collection, doc_id) from exc
            # merge keeps the count of a concurrent first write
            seed = {k: v for k, v in defaults.items() if k != "id"}
            await ref.set({**seed, **payload}, merge=True)
        return _snapshot_to_document(await ref.get())

    async def append(self, collection: str, doc_id: str, field: str, item: Any) -> Document:
        ref = self._client.collection(collection).document(doc_id)
        try:
            await ref.update({field: firestore.ArrayUnion([item])})
        except NotFound as exc:
            raise EntityNotFoundError(collection, doc_id) from exc
        return _snapshot_to_document(await ref.get())

    async def delete(self, collection: str, doc_id: str) -> None:
        ref = self._client.collection(collection).document(doc_id)
        snapshot = await ref.get()
        if not snapshot.exists:
            raise EntityNotFoundError(collection, doc_id)
        await ref.delete()
        logger.info("Deleted %s/%s", collection, doc_id)

    async def filter(
        self, collection: str, query: dict[str, Any], sort: str | None = None
    ) -> list[Document]:
        if "id" in query:
            doc = await self.get(collection, query["id"])
            return [doc] if doc is not None and matches(doc, query) else []

        ref = self._client.collection(collection)
        for key, value in query.items():
            ref = ref.where(filter=FieldFilter(key, "==", value))
        docs = [_snapshot_to_document(snap) async for snap in ref.stream()]
        return sort_documents([d for d in docs if d is not None], sort)
