"""Lesson bookmarks with optional notes."""

import logging

from fastapi import HTTPException, status

from coursehub.domain.entities import BOOKMARKS, utcnow_iso
from coursehub.ports.entity_store import Document, EntityStorePort

logger = logging.getLogger(__name__)


class BookmarkService:
    """Handles bookmark creation, listing and removal for one viewer."""

    def __init__(self, store: EntityStorePort) -> None:
        self._store = store

    async def create(
        self,
        user_id: str,
        course_id: str,
        lesson_title: str,
        lesson_index: int = 0,
        course_title: str = "",
        notes: str = "",
    ) -> Document:
        bookmark = await self._store.create(
            BOOKMARKS,
            {
                "user_id": user_id,
                "course_id": course_id,
                "course_title": course_title,
                "lesson_title": lesson_title,
                "lesson_index": lesson_index,
                "notes": notes,
                "created_at": utcnow_iso(),
            },
        )
        logger.info("Bookmark added: user=%s course=%s lesson=%s", user_id, course_id, lesson_title)
        return bookmark

    async def list_for_user(self, user_id: str, course_id: str | None = None) -> list[Document]:
        """Newest first, optionally limited to one course."""
        query = {"user_id": user_id}
        if course_id:
            query["course_id"] = course_id
        return await self._store.filter(BOOKMARKS, query, sort="-created_at")

    async def delete(self, user_id: str, bookmark_id: str) -> None:
        """Remove a bookmark. Raises 404 when missing, 403 when owned by someone else."""
        bookmark = await self._store.get(BOOKMARKS, bookmark_id)
        if bookmark is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Bookmark not found",
            )
        if bookmark.get("user_id") != user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only remove your own bookmarks",
            )
        await self._store.delete(BOOKMARKS, bookmark_id)
