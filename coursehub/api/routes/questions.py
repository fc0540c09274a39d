"""Q&A discussion routes."""

from fastapi import APIRouter, Depends, status

from coursehub.api.dependencies import Services, get_services
from coursehub.api.middleware.auth import get_current_user
from coursehub.api.schemas import (
    AnswerCreateRequest,
    QuestionCreateRequest,
    QuestionResponse,
)
from coursehub.domain.entities import Viewer

router = APIRouter(tags=["Q&A"])


@router.get("/courses/{course_id}/questions", response_model=list[QuestionResponse])
async def list_questions(
    course_id: str, services: Services = Depends(get_services)
) -> list[QuestionResponse]:
    return [QuestionResponse.model_validate(q) for q in await services.qa.list_for_course(course_id)]


@router.post(
    "/courses/{course_id}/questions",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def ask_question(
    course_id: str,
    data: QuestionCreateRequest,
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> QuestionResponse:
    await services.catalog.get_course(course_id)
    question = await services.qa.ask(course_id, user, data.question_text, data.lesson_title)
    return QuestionResponse.model_validate(question)


@router.post(
    "/questions/{question_id}/answers",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def answer_question(
    question_id: str,
    data: AnswerCreateRequest,
    services: Services = Depends(get_services),
    user: Viewer = Depends(get_current_user),
) -> QuestionResponse:
    return QuestionResponse.model_validate(
        await services.qa.answer(question_id, user, data.answer_text)
    )


@router.post("/questions/{question_id}/upvote", response_model=QuestionResponse)
async def upvote_question(
    question_id: str,
    services: Services = Depends(get_services),
    _user: Viewer = Depends(get_current_user),
) -> QuestionResponse:
    return QuestionResponse.model_validate(await services.qa.upvote(question_id))


@router.post("/questions/{question_id}/resolve", response_model=QuestionResponse)
async def resolve_question(
    question_id: str,
    services: Services = Depends(get_services),
    _user: Viewer = Depends(get_current_user),
) -> QuestionResponse:
    return QuestionResponse.model_validate(await services.qa.resolve(question_id))
