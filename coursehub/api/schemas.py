"""Pydantic request/response schemas."""

from pydantic import BaseModel, ConfigDict, Field


# ── Courses ────────────────────────────────────────


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    category: str
    duration: str
    partner: str
    image_url: str
    is_popular: bool
    cohort_start: str | None = None
    created_at: str | None = None
    enrollment_count: int = 0


class CourseListResponse(BaseModel):
    items: list[CourseResponse]
    total: int


class CategoriesResponse(BaseModel):
    categories: list[str]


class CourseViewResponse(BaseModel):
    id: str
    course_id: str
    course_category: str = ""
    view_count: int = 0
    last_accessed: str | None = None


# ── Recommendations ────────────────────────────────


class RecommendationItem(BaseModel):
    course: CourseResponse
    score: float


class RecommendationsResponse(BaseModel):
    recommendations: list[RecommendationItem]


# ── Progress ───────────────────────────────────────


class ProgressResponse(BaseModel):
    id: str
    course_id: str
    completed_lessons: list[int] = Field(default_factory=list)
    total_lessons: int = 10
    time_spent_minutes: int = 0
    is_saved: bool = False
    last_accessed: str | None = None
    course_title: str | None = None
    course_category: str | None = None
    course_image: str | None = None
    course_duration: str | None = None
    percentage: int = 0


# ── Bookmarks ──────────────────────────────────────


class BookmarkCreateRequest(BaseModel):
    course_id: str = Field(..., min_length=1)
    lesson_title: str = Field(..., min_length=1)
    lesson_index: int = Field(0, ge=0)
    course_title: str = ""
    notes: str = Field("", max_length=2000)


class BookmarkResponse(BaseModel):
    id: str
    course_id: str
    course_title: str = ""
    lesson_title: str
    lesson_index: int = 0
    notes: str = ""
    created_at: str | None = None


# ── Q&A ────────────────────────────────────────────


class QuestionCreateRequest(BaseModel):
    question_text: str
    lesson_title: str = ""


class AnswerCreateRequest(BaseModel):
    answer_text: str


class AnswerResponse(BaseModel):
    answer_text: str
    author_name: str
    author_email: str = ""
    upvotes: int = 0
    created_at: str | None = None
    is_instructor: bool = False


class QuestionResponse(BaseModel):
    id: str
    course_id: str
    question_text: str
    lesson_title: str = ""
    author_name: str
    author_email: str = ""
    answers: list[AnswerResponse] = Field(default_factory=list)
    upvotes: int = 0
    is_resolved: bool = False
    created_date: str | None = None


# ── Dashboard ──────────────────────────────────────


class DashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    in_progress: int
    completed: int
    saved: int
    total_time_minutes: int
    favorite_category: str | None = None
    bookmarks: list[BookmarkResponse]
