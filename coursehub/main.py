"""FastAPI application factory and entry point for CourseHub."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coursehub.api.dependencies import build_services
from coursehub.api.routes.bookmarks import router as bookmarks_router
from coursehub.api.routes.courses import router as courses_router
from coursehub.api.routes.progress import router as progress_router
from coursehub.api.routes.questions import router as questions_router
from coursehub.config import Settings, settings as default_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown events."""
    cfg: Settings = app.state.settings
    logger.info("CourseHub starting up...")
    logger.info("Data backend: %s", cfg.data_backend.value)
    logger.info("Cache staleness window: %.0fs", cfg.cache_stale_seconds)
    logger.info(
        "Recommendation boosts: category=%s popularity=%s limit=%d",
        cfg.recommendation_category_boost,
        cfg.recommendation_popularity_boost,
        cfg.recommendation_limit,
    )
    yield
    await app.state.services.store.close()
    logger.info("CourseHub shutting down...")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    cfg = settings or default_settings
    application = FastAPI(
        title="CourseHub",
        description="E-learning catalog, progress tracking and course recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )
    application.state.settings = cfg
    application.state.services = build_services(cfg)

    # ── Middleware ──────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ─────────────────────────────────────
    application.include_router(courses_router)
    application.include_router(progress_router)
    application.include_router(bookmarks_router)
    application.include_router(questions_router)

    # ── Health Check ───────────────────────────────
    @application.get("/health", tags=["System"])
    async def health() -> dict[str, str]:
        return {"status": "healthy", "service": "coursehub"}

    return application


app = create_app()
