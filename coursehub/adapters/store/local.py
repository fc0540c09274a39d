"""Local JSON-file entity store (offline / mock backend)."""

import asyncio
import copy
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

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


class LocalJsonStoreAdapter(EntityStorePort):
    """
    Keep each collection in ``<base_path>/<collection>.json`` as a JSON list.

    Collections without a file on disk start from the optional seed file,
    a JSON object mapping collection names to document lists.
    """

    def __init__(self, base_path: str, seed_path: str | None = None) -> None:
        self._base = Path(base_path)
        self._seed_path = Path(seed_path) if seed_path else None
        self._seed: dict[str, list[Document]] | None = None
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        logger.info("LocalJsonStore initialized at: %s", self._base.resolve())

    def _path(self, collection: str) -> Path:
        return self._base / f"{collection}.json"

    async def _load_seed(self) -> dict[str, list[Document]]:
        if self._seed is None:
            self._seed = {}
            if self._seed_path and self._seed_path.exists():
                async with aiofiles.open(self._seed_path, "r", encoding="utf-8") as f:
                    self._seed = json.loads(await f.read())
                logger.info("Loaded seed data from %s", self._seed_path)
        return self._seed

    async def _read(self, collection: str) -> list[Document]:
        path = self._path(collection)
        if not path.exists():
            seed = await self._load_seed()
            return copy.deepcopy(seed.get(collection, []))
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            raw = await f.read()
        return json.loads(raw) if raw.strip() else []

    async def _write(self, collection: str, docs: list[Document]) -> None:
        path = self._path(collection)
        await aiofiles.os.makedirs(self._base, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        async with aiofiles.open(tmp, "w", encoding="utf-8") as f:
            await f.write(json.dumps(docs, indent=2, default=str))
        await aiofiles.os.replace(tmp, path)
        logger.debug("Wrote %s (%d documents)", path.name, len(docs))

    async def list_all(self, collection: str, sort: str | None = None) -> list[Document]:
        async with self._locks[collection]:
            docs = await self._read(collection)
        return sort_documents(docs, sort)

    async def get(self, collection: str, doc_id: str) -> Document | None:
        async with self._locks[collection]:
            docs = await self._read(collection)
        return next((d for d in docs if d.get("id") == doc_id), None)

    async def create(self, collection: str, data: Document) -> Document:
        doc = {**data, "id": data.get("id") or new_id()}
        async with self._locks[collection]:
            docs = [d for d in await self._read(collection) if d.get("id") != doc["id"]]
            docs.append(doc)
            await self._write(collection, docs)
        logger.info("Created %s/%s", collection, doc["id"])
        return dict(doc)

    async def update(self, collection: str, doc_id: str, data: Document) -> Document:
        async with self._locks[collection]:
            docs = await self._read(collection)
            for index, doc in enumerate(docs):
                if doc.get("id") == doc_id:
                    merged = {**doc, **data, "id": doc_id}
                    docs[index] = merged
                    await self._write(collection, docs)
                    return dict(merged)
        raise EntityNotFoundError(collection, doc_id)

    async def increment(
        self,
        collection: str,
        doc_id: str,
        field: str,
        by: int = 1,
        changes: Document | None = None,
        defaults: Document | None = None,
    ) -> Document:
        async with self._locks[collection]:
            docs = await self._read(collection)
            index = next((i for i, d in enumerate(docs) if d.get("id") == doc_id), None)
            current = docs[index] if index is not None else None
            merged = apply_increment(current, doc_id, field, by, changes, defaults)
            if merged is None:
                raise EntityNotFoundError(collection, doc_id)
            if index is None:
                docs.append(merged)
            else:
                docs[index] = merged
            await self._write(collection, docs)
        return dict(merged)

    async def append(self, collection: str, doc_id: str, field: str, item: Any) -> Document:
        async with self._locks[collection]:
            docs = await self._read(collection)
            for index, doc in enumerate(docs):
                if doc.get("id") == doc_id:
                    docs[index] = apply_append(doc, field, item)
                    await self._write(collection, docs)
                    return dict(docs[index])
        raise EntityNotFoundError(collection, doc_id)

    async def delete(self, collection: str, doc_id: str) -> None:
        async with self._locks[collection]:
            docs = await self._read(collection)
            remaining = [d for d in docs if d.get("id") != doc_id]
            if len(remaining) == len(docs):
                raise EntityNotFoundError(collection, doc_id)
            await self._write(collection, remaining)
        logger.info("Deleted %s/%s", collection, doc_id)

    async def filter(
        self, collection: str, query: dict[str, Any], sort: str | None = None
    ) -> list[Document]:
        docs = await self.list_all(collection)
        return sort_documents([d for d in docs if matches(d, query)], sort)
