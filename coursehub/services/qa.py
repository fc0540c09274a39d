"""Course Q&A thread: questions with embedded answers."""

import logging

from fastapi import HTTPException, status

from coursehub.domain.entities import QUESTIONS, Viewer, utcnow_iso
from coursehub.ports.entity_store import Document, EntityNotFoundError, EntityStorePort

logger = logging.getLogger(__name__)


def _require_text(text: str, what: str) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{what} must not be empty",
        )
    return cleaned


class QAService:
    """Handles questions, answers, upvotes and resolution."""

    def __init__(self, store: EntityStorePort) -> None:
        self._store = store

    @staticmethod
    def _not_found() -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Question not found",
        )

    async def list_for_course(self, course_id: str) -> list[Document]:
        """Newest questions first."""
        return await self._store.filter(
            QUESTIONS, {"course_id": course_id}, sort="-created_date"
        )

    async def ask(
        self, course_id: str, viewer: Viewer, question_text: str, lesson_title: str = ""
    ) -> Document:
        text = _require_text(question_text, "Question")
        question = await self._store.create(
            QUESTIONS,
            {
                "course_id": course_id,
                "question_text": text,
                "lesson_title": lesson_title,
                "author_name": viewer.full_name or "Anonymous",
                "author_email": viewer.email or "",
                "answers": [],
                "upvotes": 0,
                "is_resolved": False,
                "created_date": utcnow_iso(),
            },
        )
        logger.info("Question asked on course %s by %s", course_id, viewer.id)
        return question

    async def answer(self, question_id: str, viewer: Viewer, answer_text: str) -> Document:
        text = _require_text(answer_text, "Answer")
        answer = {
            "answer_text": text,
            "author_name": viewer.full_name or "Anonymous",
            "author_email": viewer.email or "",
            "is_instructor": False,
            "upvotes": 0,
            "created_at": utcnow_iso(),
        }
        try:
            question = await self._store.append(QUESTIONS, question_id, "answers", answer)
        except EntityNotFoundError as exc:
            raise self._not_found() from exc
        logger.info("Question %s answered by %s", question_id, viewer.id)
        return question

    async def upvote(self, question_id: str) -> Document:
        try:
            return await self._store.increment(QUESTIONS, question_id, "upvotes")
        except EntityNotFoundError as exc:
            raise self._not_found() from exc

    async def resolve(self, question_id: str) -> Document:
        try:
            return await self._store.update(QUESTIONS, question_id, {"is_resolved": True})
        except EntityNotFoundError as exc:
            raise self._not_found() from exc
