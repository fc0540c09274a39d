"""Recommender adapter combining cached providers with the category-affinity scorer."""

import logging

from coursehub.domain import scoring
from coursehub.domain.entities import Recommendation
from coursehub.ports.recommender import RecommenderPort
from coursehub.services.catalog import CatalogService
from coursehub.services.engagement import EngagementService

logger = logging.getLogger(__name__)


class CategoryAffinityRecommender(RecommenderPort):
    """
    Recommend courses from the viewer's category history.

    Data comes through the catalog and engagement services (and therefore
    through their stale cache); the ranking itself is
    :func:`coursehub.domain.scoring.recommend`.
    """

    def __init__(
        self,
        catalog: CatalogService,
        engagement: EngagementService,
        category_boost: float = scoring.CATEGORY_BOOST,
        popularity_boost: float = scoring.POPULARITY_BOOST,
        limit: int = scoring.SHORTLIST_SIZE,
    ) -> None:
        self._catalog = catalog
        self._engagement = engagement
        self._category_boost = category_boost
        self._popularity_boost = popularity_boost
        self._limit = limit

    async def recommend(
        self,
        user_id: str,
        current_course_id: str,
        current_category: str = "",
    ) -> list[Recommendation]:
        catalog = await self._catalog.list_courses()
        history = await self._engagement.history(user_id)
        results = scoring.recommend(
            current_course_id,
            current_category,
            history,
            catalog,
            category_boost=self._category_boost,
            popularity_boost=self._popularity_boost,
            limit=self._limit,
        )
        logger.info(
            "Recommendations for user=%s course=%s: %d of %d courses",
            user_id, current_course_id, len(results), len(catalog),
        )
        return results
