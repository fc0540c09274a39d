"""Catalog, view tracking and recommendation routes."""

from fastapi import APIRouter, Depends, Query, Response, status

from coursehub.api.dependencies import Services, get_services
from coursehub.api.middleware.auth import get_current_user
from coursehub.api.schemas import (
    CategoriesResponse,
    CourseListResponse,
    CourseResponse,
    CourseViewResponse,
    RecommendationItem,
    RecommendationsResponse,
)
from coursehub.domain.entities import Viewer

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get("", response_model=CourseListResponse)
async def list_courses(
    search: str | None = Query(default=None, max_length=200),
    category: list[str] | None = Query(default=None),
    sort: str | None = Query(default=None, pattern="^(popular|newest)$"),
    services: Services = Depends(get_services),
) -> CourseListResponse:
    """Browse the catalog with optional search, category filter and sort."""
    courses = await services.catalog.browse(search=search, categories=category, sort=sort)
    return CourseListResponse(
        items=[CourseResponse.model_validate(c) for c in courses],
        total=len(courses),
    )


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(services: Services = Depends(get_services)) -> CategoriesResponse:
    return CategoriesResponse(categories=await services.catalog.categories())


@router.get("/featured", response_model=list[CourseResponse])
async def featured_courses(
    category: str | None = Query(default=None),
    services: Services = Depends(get_services),
) -> list[CourseResponse]:
    """Popular courses for the home page, or all courses of one category."""
    return [CourseResponse.model_validate(c) for c in await services.catalog.featured(category)]


@router.get("/{course_id}", response_model=CourseResponse)
async def get_course(course_id: str, services: Services = Depends(get_services)) -> CourseResponse:
    return CourseResponse.model_validate(await services.catalog.get_course(course_id))


@router.post("/{course_id}/views", response_model=CourseViewResponse)
async def track_view(
    course_id: str,
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> CourseViewResponse:
    """Record that the viewer opened a course page."""
    course = await services.catalog.get_course(course_id)
    view = await services.engagement.track_view(user.id, course)
    return CourseViewResponse.model_validate(view)


@router.get(
    "/{course_id}/recommendations",
    response_model=RecommendationsResponse,
    responses={204: {"description": "Nothing to recommend; hide the panel"}},
)
async def get_recommendations(
    course_id: str,
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
):
    """Up to four other courses the viewer is likely to want next."""
    course = await services.catalog.get_course(course_id)
    results = await services.recommender.recommend(user.id, course.id, course.category)
    if not results:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return RecommendationsResponse(
        recommendations=[
            RecommendationItem(course=CourseResponse.model_validate(r.course), score=r.score)
            for r in results
        ]
    )
