"""Learning dashboard summary for one viewer."""

from coursehub.domain.entities import DEFAULT_TOTAL_LESSONS, DashboardStats
from coursehub.domain.scoring import favorite_category
from coursehub.services.bookmark import BookmarkService
from coursehub.services.engagement import EngagementService
from coursehub.services.progress import ProgressService


class DashboardService:
    def __init__(
        self,
        progress: ProgressService,
        bookmarks: BookmarkService,
        engagement: EngagementService,
    ) -> None:
        self._progress = progress
        self._bookmarks = bookmarks
        self._engagement = engagement

    async def summary(self, user_id: str) -> DashboardStats:
        stats = DashboardStats()
        for record in await self._progress.list_for_user(user_id):
            done = len(record.get("completed_lessons") or [])
            total = record.get("total_lessons") or DEFAULT_TOTAL_LESSONS
            if done >= total:
                stats.completed += 1
            elif done > 0:
                stats.in_progress += 1
            if record.get("is_saved"):
                stats.saved += 1
            stats.total_time_minutes += record.get("time_spent_minutes") or 0

        stats.bookmarks = await self._bookmarks.list_for_user(user_id)
        stats.favorite_category = favorite_category(await self._engagement.history(user_id))
        return stats
