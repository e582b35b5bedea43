from typing import List

from fastapi import APIRouter, Depends

from ..schemas import (
    AdminQuizDetail,
    AdminQuizSummary,
    CreateQuestionRequest,
    CreateQuizRequest,
    DeleteQuestionRequest,
    DeleteQuizRequest,
    GetQuizRequest,
    MessageResponse,
    PublicQuizDetail,
    QuestionResponse,
    QuizResponse,
    QuizSummary,
    UpdateQuizRequest,
)
from ...dependencies import get_current_admin, get_quiz_service
from ....core.security import AuthContext
from ....services.quiz_service import QuizService

router = APIRouter()


@router.post("/list", response_model=List[QuizSummary])
async def list_quizzes(service: QuizService = Depends(get_quiz_service)):
    return service.list_active()


@router.post("/get", response_model=PublicQuizDetail)
async def get_quiz(
    request: GetQuizRequest,
    service: QuizService = Depends(get_quiz_service)
):
    # Correctness flags are not part of PublicQuizDetail
    return service.get_active(request.quiz_id)


@router.post("/create", response_model=QuizResponse)
async def create_quiz(
    request: CreateQuizRequest,
    admin: AuthContext = Depends(get_current_admin),
    service: QuizService = Depends(get_quiz_service)
):
    return service.create_quiz(admin, title=request.title, description=request.description)


@router.post("/update", response_model=QuizResponse)
async def update_quiz(
    request: UpdateQuizRequest,
    admin: AuthContext = Depends(get_current_admin),
    service: QuizService = Depends(get_quiz_service)
):
    return service.update_quiz(
        admin,
        request.quiz_id,
        title=request.title,
        description=request.description,
        is_active=request.is_active
    )


@router.post("/delete", response_model=MessageResponse)
async def delete_quiz(
    request: DeleteQuizRequest,
    admin: AuthContext = Depends(get_current_admin),
    service: QuizService = Depends(get_quiz_service)
):
    return service.delete_quiz(admin, request.quiz_id)


@router.post("/createQuestion", response_model=QuestionResponse)
async def create_question(
    request: CreateQuestionRequest,
    admin: AuthContext = Depends(get_current_admin),
    service: QuizService = Depends(get_quiz_service)
):
    return service.create_question(
        admin,
        quiz_id=request.quiz_id,
        question_text=request.question_text,
        options=[option.model_dump() for option in request.options],
        order_index=request.order_index
    )


@router.post("/deleteQuestion", response_model=MessageResponse)
async def delete_question(
    request: DeleteQuestionRequest,
    admin: AuthContext = Depends(get_current_admin),
    service: QuizService = Depends(get_quiz_service)
):
    return service.delete_question(admin, request.question_id)


@router.post("/admin/list", response_model=List[AdminQuizSummary])
async def list_quizzes_admin(
    admin: AuthContext = Depends(get_current_admin),
    service: QuizService = Depends(get_quiz_service)
):
    return service.list_all(admin)


@router.post("/admin/get", response_model=AdminQuizDetail)
async def get_quiz_admin(
    request: GetQuizRequest,
    admin: AuthContext = Depends(get_current_admin),
    service: QuizService = Depends(get_quiz_service)
):
    return service.get_any(admin, request.quiz_id)
