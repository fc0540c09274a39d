"""
Category-affinity scoring for the "Recommended For You" panel.

The score of a candidate course is the viewer's accumulated views in the
course's category (plus a boost for the category being viewed right now),
plus a flat bonus for popular courses. Everything here is pure: no I/O, no
shared state, and every missing field counts as zero.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence

from coursehub.domain.entities import Course, EngagementRecord, Recommendation

# Tunable policy values, kept at their historical defaults.
CATEGORY_BOOST = 5
POPULARITY_BOOST = 3
SHORTLIST_SIZE = 4


def build_category_scores(history: Iterable[EngagementRecord]) -> dict[str, float]:
    """Sum view counts per category. Records without a category are skipped."""
    scores: dict[str, float] = defaultdict(float)
    for record in history:
        if not record.course_category:
            continue
        scores[record.course_category] += record.view_count or 0
    return dict(scores)


def favorite_category(history: Iterable[EngagementRecord]) -> str | None:
    """Category with the most accumulated views; first seen wins a tie."""
    scores = build_category_scores(history)
    if not scores:
        return None
    return max(scores, key=scores.__getitem__)


def recommend(
    current_course_id: str | None,
    current_category: str | None,
    history: Iterable[EngagementRecord],
    catalog: Sequence[Course],
    *,
    category_boost: float = CATEGORY_BOOST,
    popularity_boost: float = POPULARITY_BOOST,
    limit: int = SHORTLIST_SIZE,
) -> list[Recommendation]:
    """
    Rank catalog courses for a viewer looking at ``current_course_id``.

    The current course is never recommended. Equal scores keep their
    catalog order. An empty result means the panel should not be shown.
    """
    scores = build_category_scores(history)
    if current_category:
        scores[current_category] = scores.get(current_category, 0) + category_boost

    candidates = [
        Recommendation(
            course=course,
            score=scores.get(course.category or "", 0)
            + (popularity_boost if course.is_popular else 0),
        )
        for course in catalog
        if course.id != current_course_id
    ]
    # sorted() is stable, also with reverse=True
    ranked = sorted(candidates, key=lambda r: r.score, reverse=True)
    return ranked[: max(limit, 0)]
