from typing import List

from fastapi import APIRouter, Depends

from ..schemas import (
    AttemptHistoryItem,
    AttemptResultResponse,
    GetResultRequest,
    StartQuizRequest,
    StartQuizResponse,
    SubmitQuizRequest,
    SubmitQuizResponse,
)
from ...dependencies import get_attempt_service, get_current_user
from ....core.security import AuthContext
from ....services.attempt_service import AttemptService
from ....services.scoring import SubmittedAnswer

router = APIRouter()


@router.post("/start", response_model=StartQuizResponse)
async def start_quiz(
    request: StartQuizRequest,
    auth: AuthContext = Depends(get_current_user),
    service: AttemptService = Depends(get_attempt_service)
):
    return service.start(auth, request.quiz_id)


@router.post("/submit", response_model=SubmitQuizResponse)
async def submit_quiz(
    request: SubmitQuizRequest,
    auth: AuthContext = Depends(get_current_user),
    service: AttemptService = Depends(get_attempt_service)
):
    answers = [
        SubmittedAnswer(question_id=a.question_id, selected_option_id=a.selected_option_id)
        for a in request.answers
    ]
    return service.submit(auth, request.attempt_id, answers)


@router.post("/result", response_model=AttemptResultResponse)
async def get_result(
    request: GetResultRequest,
    auth: AuthContext = Depends(get_current_user),
    service: AttemptService = Depends(get_attempt_service)
):
    return service.result(auth, request.attempt_id)


@router.post("/myAttempts", response_model=List[AttemptHistoryItem])
async def my_attempts(
    auth: AuthContext = Depends(get_current_user),
    service: AttemptService = Depends(get_attempt_service)
):
    return service.my_attempts(auth)
