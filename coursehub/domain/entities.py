"""Plain domain objects built from store documents."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# ── Collections ────────────────────────────────────
COURSES = "courses"
COURSE_VIEWS = "course_views"
USER_PROGRESS = "user_progress"
BOOKMARKS = "bookmarks"
QUESTIONS = "questions"

DEFAULT_TOTAL_LESSONS = 10


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _as_int(value: Any) -> int:
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class Viewer:
    """The person behind a request."""

    id: str
    full_name: str = "Anonymous"
    email: str = ""


@dataclass(frozen=True)
class Course:
    """A course in the catalog. Read-only from the recommender's point of view."""

    id: str
    title: str = ""
    category: str = ""
    duration: str = ""
    partner: str = ""
    image_url: str = ""
    is_popular: bool = False
    cohort_start: str | None = None
    created_at: str | None = None
    enrollment_count: int = 0

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Course":
        return cls(
            id=str(doc.get("id", "")),
            title=doc.get("title") or "",
            category=doc.get("category") or "",
            duration=doc.get("duration") or "",
            partner=doc.get("partner") or "",
            image_url=doc.get("image_url") or "",
            is_popular=bool(doc.get("is_popular", False)),
            cohort_start=doc.get("cohort_start"),
            created_at=doc.get("created_at"),
            enrollment_count=_as_int(doc.get("enrollment_count")),
        )


@dataclass(frozen=True)
class EngagementRecord:
    """How often a viewer opened courses of one category."""

    course_id: str | None = None
    course_category: str | None = None
    view_count: int | None = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "EngagementRecord":
        return cls(
            course_id=doc.get("course_id"),
            course_category=doc.get("course_category") or None,
            view_count=_as_int(doc.get("view_count")),
        )


@dataclass(frozen=True)
class Recommendation:
    course: Course
    score: float


@dataclass
class DashboardStats:
    in_progress: int = 0
    completed: int = 0
    saved: int = 0
    total_time_minutes: int = 0
    favorite_category: str | None = None
    bookmarks: list[dict[str, Any]] = field(default_factory=list)
