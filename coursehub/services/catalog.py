"""Course catalog browsing backed by the stale cache."""

import logging

from fastapi import HTTPException, status

from coursehub.domain.entities import COURSES, Course
from coursehub.ports.entity_store import EntityStorePort
from coursehub.services.cache import StaleCache

logger = logging.getLogger(__name__)

CATALOG_CACHE_KEY = "courses"


class CatalogService:
    """Read access to the course catalog."""

    def __init__(self, store: EntityStorePort, cache: StaleCache) -> None:
        self._store = store
        self._cache = cache

    async def _load_catalog(self) -> list[Course]:
        docs = await self._store.list_all(COURSES)
        logger.info("Fetched catalog: %d courses", len(docs))
        return [Course.from_document(doc) for doc in docs]

    async def list_courses(self) -> list[Course]:
        """Full catalog in store order."""
        return await self._cache.get_or_refresh(CATALOG_CACHE_KEY, self._load_catalog)

    async def get_course(self, course_id: str) -> Course:
        """Single course. Raises 404 if it is in neither the cache nor the store."""
        for course in await self.list_courses():
            if course.id == course_id:
                return course
        doc = await self._store.get(COURSES, course_id)
        if doc is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Course not found",
            )
        return Course.from_document(doc)

    async def browse(
        self,
        search: str | None = None,
        categories: list[str] | None = None,
        sort: str | None = None,
    ) -> list[Course]:
        """
        Filter and order the catalog.

        ``search`` matches title or category case-insensitively; ``categories``
        keeps only the listed ones. ``sort`` is ``popular`` (most enrolled
        first) or ``newest``; anything else keeps catalog order.
        """
        courses = await self.list_courses()
        needle = (search or "").strip().lower()
        if needle:
            courses = [
                c for c in courses
                if needle in c.title.lower() or needle in c.category.lower()
            ]
        if categories:
            wanted = set(categories)
            courses = [c for c in courses if c.category in wanted]

        if sort == "popular":
            courses = sorted(courses, key=lambda c: c.enrollment_count, reverse=True)
        elif sort == "newest":
            courses = sorted(courses, key=lambda c: c.created_at or "", reverse=True)
        return courses

    async def categories(self) -> list[str]:
        """Distinct non-empty categories in first-seen order."""
        seen: dict[str, None] = {}
        for course in await self.list_courses():
            if course.category:
                seen.setdefault(course.category, None)
        return list(seen)

    async def featured(self, category: str | None = None) -> list[Course]:
        """Popular courses, or every course of one category."""
        courses = await self.list_courses()
        if category:
            return [c for c in courses if c.category == category]
        return [c for c in courses if c.is_popular]
