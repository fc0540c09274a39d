"""Recommender port: abstract interface for the recommendation engine."""

from abc import ABC, abstractmethod

from coursehub.domain.entities import Recommendation


class RecommenderPort(ABC):
    """Abstraction for the course recommendation engine."""

    @abstractmethod
    async def recommend(
        self,
        user_id: str,
        current_course_id: str,
        current_category: str = "",
    ) -> list[Recommendation]:
        """Return a ranked shortlist of courses for a viewer on a course page."""
        ...
