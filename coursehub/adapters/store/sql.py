"""SQL entity store: documents as JSON rows via SQLAlchemy."""

import asyncio
import logging
from collections import defaultdict
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from coursehub.database import build_session_factory, create_schema
from coursehub.domain.models import Document as DocumentRow
from coursehub.ports.entity_store import (
    Document,
    EntityNotFoundError,
    EntityStorePort,
    apply_append,
    apply_increment,
    matches,
    new_id,
    sort_documents,
)

logger = logging.getLogger(__name__)


class SqlStoreAdapter(EntityStorePort):
    """Store documents in the ``documents`` table (Postgres or SQLite)."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory: async_sessionmaker = build_session_factory(engine)
        self._schema_ready = False
        self._schema_lock = asyncio.Lock()
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        logger.info("SqlStore initialized: %s", engine.url.render_as_string(hide_password=True))

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self._schema_lock:
            if not self._schema_ready:
                await create_schema(self._engine)
                self._schema_ready = True

    @staticmethod
    def _to_document(row: DocumentRow) -> Document:
        return {**(row.data or {}), "id": row.doc_id}

    async def list_all(self, collection: str, sort: str | None = None) -> list[Document]:
        await self._ensure_schema()
        async with self._session_factory() as session:
            result = await session.execute(
                select(DocumentRow)
                .where(DocumentRow.collection == collection)
                .order_by(DocumentRow.created_at, DocumentRow.pk)
            )
            docs = [self._to_document(row) for row in result.scalars().all()]
        return sort_documents(docs, sort)

    async def get(self, collection: str, doc_id: str) -> Document | None:
        await self._ensure_schema()
        async with self._session_factory() as session:
            row = await session.get(DocumentRow, DocumentRow.make_pk(collection, doc_id))
            return self._to_document(row) if row else None

    async def _get_for_update(self, session: AsyncSession, collection: str, doc_id: str) -> DocumentRow | None:
        # Row lock on Postgres; SQLite serialises writers on its own
        result = await session.execute(
            select(DocumentRow)
            .where(DocumentRow.pk == DocumentRow.make_pk(collection, doc_id))
            .with_for_update()
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _write_row(session: AsyncSession, row: DocumentRow | None, collection: str, doc: Document) -> None:
        payload = {k: v for k, v in doc.items() if k != "id"}
        if row is not None:
            # Reassign so the JSON column is flagged dirty
            row.data = payload
            return
        session.add(
            DocumentRow(
                pk=DocumentRow.make_pk(collection, doc["id"]),
                collection=collection,
                doc_id=doc["id"],
                data=payload,
            )
        )

    async def create(self, collection: str, data: Document) -> Document:
        await self._ensure_schema()
        doc = {**data, "id": data.get("id") or new_id()}
        async with self._locks[collection], self._session_factory() as session:
            row = await self._get_for_update(session, collection, doc["id"])
            self._write_row(session, row, collection, doc)
            await session.commit()
        logger.info("Created %s/%s", collection, doc["id"])
        return doc

    async def update(self, collection: str, doc_id: str, data: Document) -> Document:
        await self._ensure_schema()
        async with self._locks[collection], self._session_factory() as session:
            row = await self._get_for_update(session, collection, doc_id)
            if row is None:
                raise EntityNotFoundError(collection, doc_id)
            merged = {**self._to_document(row), **data, "id": doc_id}
            self._write_row(session, row, collection, merged)
            await session.commit()
        return merged

    async def increment(
        self,
        collection: str,
        doc_id: str,
        field: str,
        by: int = 1,
        changes: Document | None = None,
        defaults: Document | None = None,
    ) -> Document:
        await self._ensure_schema()
        async with self._locks[collection], self._session_factory() as session:
            row = await self._get_for_update(session, collection, doc_id)
            current = self._to_document(row) if row is not None else None
            merged = apply_increment(current, doc_id, field, by, changes, defaults)
            if merged is None:
                raise EntityNotFoundError(collection, doc_id)
            self._write_row(session, row, collection, merged)
            await session.commit()
        return merged

    async def append(self, collection: str, doc_id: str, field: str, item: Any) -> Document:
        await self._ensure_schema()
        async with self._locks[collection], self._session_factory() as session:
            row = await self._get_for_update(session, collection, doc_id)
            if row is None:
                raise EntityNotFoundError(collection, doc_id)
            merged = apply_append(self._to_document(row), field, item)
            self._write_row(session, row, collection, merged)
            await session.commit()
        return merged

    async def delete(self, collection: str, doc_id: str) -> None:
        await self._ensure_schema()
        async with self._locks[collection], self._session_factory() as session:
            row = await self._get_for_update(session, collection, doc_id)
            if row is None:
                raise EntityNotFoundError(collection, doc_id)
            await session.delete(row)
            await session.commit()
        logger.info("Deleted %s/%s", collection, doc_id)

    async def filter(
        self, collection: str, query: dict[str, Any], sort: str | None = None
    ) -> list[Document]:
        docs = await self.list_all(collection)
        return sort_documents([d for d in docs if matches(d, query)], sort)

    async def close(self) -> None:
        await self._engine.dispose()
