"""Progress tracking and learning dashboard routes."""

from fastapi import APIRouter, Depends, Path, status

from coursehub.api.dependencies import Services, get_services
from coursehub.api.middleware.auth import get_current_user
from coursehub.api.schemas import DashboardResponse, ProgressResponse
from coursehub.domain.entities import Viewer
from coursehub.ports.entity_store import Document
from coursehub.services.progress import progress_percentage

router = APIRouter(tags=["Progress"])


def _to_response(doc: Document) -> ProgressResponse:
    return ProgressResponse.model_validate({**doc, "percentage": progress_percentage(doc)})


@router.get("/courses/{course_id}/progress", response_model=ProgressResponse | None)
async def get_progress(
    course_id: str,
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> ProgressResponse | None:
    doc = await services.progress.get(user.id, course_id)
    return _to_response(doc) if doc else None


@router.post("/courses/{course_id}/progress/lessons/{lesson_index}", response_model=ProgressResponse)
async def complete_lesson(
    course_id: str,
    lesson_index: int = Path(..., ge=0),
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> ProgressResponse:
    course = await services.catalog.get_course(course_id)
    return _to_response(await services.progress.complete_lesson(user.id, course, lesson_index))


@router.post("/courses/{course_id}/progress/save", response_model=ProgressResponse)
async def toggle_saved(
    course_id: str,
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> ProgressResponse:
    course = await services.catalog.get_course(course_id)
    return _to_response(await services.progress.toggle_saved(user.id, course))


@router.delete("/progress/{progress_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_progress(
    progress_id: str,
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> None:
    await services.progress.remove(user.id, progress_id)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> DashboardResponse:
    """In-progress / completed / saved counts, study time, bookmarks and favourite category."""
    return DashboardResponse.model_validate(await services.dashboard.summary(user.id))
