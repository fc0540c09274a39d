"""Service wiring and FastAPI dependency providers."""

from dataclasses import dataclass

from fastapi import Request

from coursehub.adapters.recommender.category_affinity import CategoryAffinityRecommender
from coursehub.adapters.store.factory import build_entity_store
from coursehub.config import Settings
from coursehub.ports.entity_store import EntityStorePort
from coursehub.ports.recommender import RecommenderPort
from coursehub.services.bookmark import BookmarkService
from coursehub.services.cache import StaleCache
from coursehub.services.catalog import CatalogService
from coursehub.services.dashboard import DashboardService
from coursehub.services.engagement import EngagementService
from coursehub.services.progress import ProgressService
from coursehub.services.qa import QAService


@dataclass
class Services:
    store: EntityStorePort
    cache: StaleCache
    catalog: CatalogService
    engagement: EngagementService
    recommender: RecommenderPort
    progress: ProgressService
    bookmarks: BookmarkService
    qa: QAService
    dashboard: DashboardService


def build_services(settings: Settings, store: EntityStorePort | None = None) -> Services:
    """Assemble the service graph around one entity store and one cache."""
    store = store or build_entity_store(settings)
    cache = StaleCache(
        stale_after=settings.cache_stale_seconds,
        evict_after=settings.cache_evict_seconds,
    )
    catalog = CatalogService(store, cache)
    engagement = EngagementService(store, cache)
    progress = ProgressService(store)
    bookmarks = BookmarkService(store)
    return Services(
        store=store,
        cache=cache,
        catalog=catalog,
        engagement=engagement,
        recommender=CategoryAffinityRecommender(
            catalog,
            engagement,
            category_boost=settings.recommendation_category_boost,
            popularity_boost=settings.recommendation_popularity_boost,
            limit=settings.recommendation_limit,
        ),
        progress=progress,
        bookmarks=bookmarks,
        qa=QAService(store),
        dashboard=DashboardService(progress, bookmarks, engagement),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
