"""Per-viewer course progress: completed lessons, time spent, saved flag."""

import logging

from fastapi import HTTPException, status

from coursehub.domain.entities import (
    DEFAULT_TOTAL_LESSONS,
    USER_PROGRESS,
    Course,
    utcnow_iso,
)
from coursehub.ports.entity_store import Document, EntityNotFoundError, EntityStorePort

logger = logging.getLogger(__name__)

MINUTES_PER_LESSON = 30


def progress_percentage(progress: Document | None) -> int:
    if not progress:
        return 0
    total = progress.get("total_lessons") or DEFAULT_TOTAL_LESSONS
    completed = len(progress.get("completed_lessons") or [])
    return round(completed / total * 100)


class ProgressService:
    """Creates and updates ``user_progress`` documents."""

    def __init__(self, store: EntityStorePort) -> None:
        self._store = store

    async def get(self, user_id: str, course_id: str) -> Document | None:
        found = await self._store.filter(
            USER_PROGRESS, {"user_id": user_id, "course_id": course_id}
        )
        return found[0] if found else None

    async def list_for_user(self, user_id: str) -> list[Document]:
        return await self._store.filter(
            USER_PROGRESS, {"user_id": user_id}, sort="-last_accessed"
        )

    async def _upsert(self, user_id: str, course: Course, changes: Document) -> Document:
        current = await self.get(user_id, course.id)
        if current:
            return await self._store.update(USER_PROGRESS, current["id"], changes)
        return await self._store.create(
            USER_PROGRESS,
            {
                "user_id": user_id,
                "course_id": course.id,
                "course_title": course.title,
                "course_category": course.category,
                "course_image": course.image_url,
                "course_duration": course.duration,
                "total_lessons": DEFAULT_TOTAL_LESSONS,
                "completed_lessons": [],
                "time_spent_minutes": 0,
                "is_saved": False,
                **changes,
            },
        )

    async def complete_lesson(self, user_id: str, course: Course, lesson_index: int) -> Document:
        """
        Mark a lesson as done.

        Completing an already-completed lesson changes nothing. Each new
        completion adds 30 minutes of study time.
        """
        current = await self.get(user_id, course.id)
        total = (current or {}).get("total_lessons") or DEFAULT_TOTAL_LESSONS
        if not 0 <= lesson_index < total:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Lesson index must be between 0 and {total - 1}",
            )

        completed = list((current or {}).get("completed_lessons") or [])
        if current and lesson_index in completed:
            return current

        completed.append(lesson_index)
        progress = await self._upsert(
            user_id,
            course,
            {
                "completed_lessons": completed,
                "last_accessed": utcnow_iso(),
                "time_spent_minutes": ((current or {}).get("time_spent_minutes") or 0)
                + MINUTES_PER_LESSON,
            },
        )
        logger.info("Lesson %d completed: user=%s course=%s", lesson_index, user_id, course.id)
        return progress

    async def toggle_saved(self, user_id: str, course: Course) -> Document:
        current = await self.get(user_id, course.id)
        return await self._upsert(
            user_id,
            course,
            {
                "is_saved": not bool((current or {}).get("is_saved")),
                "last_accessed": utcnow_iso(),
            },
        )

    async def remove(self, user_id: str, progress_id: str) -> None:
        """Delete a progress record owned by the viewer."""
        doc = await self._store.get(USER_PROGRESS, progress_id)
        if doc is None or doc.get("user_id") != user_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Progress not found",
            )
        try:
            await self._store.delete(USER_PROGRESS, progress_id)
        except EntityNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Progress not found",
            ) from exc
