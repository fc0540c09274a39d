"""Course-view tracking: the engagement history the recommender reads."""

import logging
import uuid

from coursehub.domain.entities import COURSE_VIEWS, Course, EngagementRecord, utcnow_iso
from coursehub.ports.entity_store import Document, EntityStorePort
from coursehub.services.cache import StaleCache

logger = logging.getLogger(__name__)


def history_cache_key(user_id: str) -> str:
    return f"{COURSE_VIEWS}:{user_id}"


def view_document_id(user_id: str, course_id: str) -> str:
    """Deterministic id of a viewer's record for one course."""
    return uuid.uuid5(uuid.NAMESPACE_URL, f"{user_id}/{course_id}").hex


class EngagementService:
    """Records course views and serves per-viewer engagement history."""

    def __init__(self, store: EntityStorePort, cache: StaleCache) -> None:
        self._store = store
        self._cache = cache

    async def track_view(self, user_id: str, course: Course) -> Document:
        """Increment the viewer's view count for a course, creating the record on first view."""
        existing = await self._store.filter(
            COURSE_VIEWS, {"user_id": user_id, "course_id": course.id}
        )
        updated = await self._store.increment(
            COURSE_VIEWS,
            existing[0]["id"] if existing else view_document_id(user_id, course.id),
            "view_count",
            changes={"last_accessed": utcnow_iso()},
            defaults={
                "user_id": user_id,
                "course_id": course.id,
                "course_category": course.category or "",
            },
        )
        self._cache.invalidate(history_cache_key(user_id))
        logger.info(
            "Tracked view: user=%s course=%s count=%s",
            user_id, course.id, updated.get("view_count"),
        )
        return updated

    async def history(self, user_id: str) -> list[EngagementRecord]:
        """The viewer's course-view records, most viewed first."""

        async def load() -> list[EngagementRecord]:
            docs = await self._store.filter(
                COURSE_VIEWS, {"user_id": user_id}, sort="-view_count"
            )
            return [EngagementRecord.from_document(doc) for doc in docs]

        return await self._cache.get_or_refresh(history_cache_key(user_id), load)
