"""Bookmark routes."""

from fastapi import APIRouter, Depends, Query, status

from coursehub.api.dependencies import Services, get_services
from coursehub.api.middleware.auth import get_current_user
from coursehub.api.schemas import BookmarkCreateRequest, BookmarkResponse
from coursehub.domain.entities import Viewer

router = APIRouter(prefix="/bookmarks", tags=["Bookmarks"])


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    course_id: str | None = Query(default=None),
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> list[BookmarkResponse]:
    docs = await services.bookmarks.list_for_user(user.id, course_id)
    return [BookmarkResponse.model_validate(d) for d in docs]


@router.post("", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    data: BookmarkCreateRequest,
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> BookmarkResponse:
    doc = await services.bookmarks.create(user.id, **data.model_dump())
    return BookmarkResponse.model_validate(doc)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark_id: str,
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> None:
    await services.bookmarks.delete(user.id, bookmark_id)
