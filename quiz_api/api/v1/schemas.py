from datetime import datetime
from typing import Optional, List, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class RPCModel(BaseModel):
    """Base for every RPC payload: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(RPCModel):
    message: str


# Auth

class RegisterRequest(RPCModel):
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password must be at least 6 characters")
    name: str = Field(..., min_length=2, description="Name must be at least 2 characters")


class LoginRequest(RPCModel):
    email: EmailStr
    password: str = Field(..., min_length=1, description="Password is required")


class UserResponse(RPCModel):
    id: int
    email: str
    name: str
    role: Literal["user", "admin"]
    created_at: Optional[datetime] = None


class AuthResponse(RPCModel):
    user: UserResponse
    token: str


# Quizzes

class QuizOwner(RPCModel):
    id: int
    name: str


class QuizOwnerDetail(QuizOwner):
    email: str


class QuizSummary(RPCModel):
    id: int
    title: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    created_by_user: Optional[QuizOwner] = None


class AdminQuizSummary(QuizSummary):
    created_by: int
    updated_at: datetime
    question_count: int


class PublicAnswerOption(RPCModel):
    id: int
    option_text: str
    order_index: int


class PublicQuestion(RPCModel):
    id: int
    question_text: str
    order_index: int
    answer_options: List[PublicAnswerOption]


class PublicQuizDetail(RPCModel):
    id: int
    title: str
    description: Optional[str] = None
    created_at: datetime
    questions: List[PublicQuestion]


class AnswerOptionResponse(PublicAnswerOption):
    question_id: int
    is_correct: bool


class QuestionResponse(RPCModel):
    id: int
    quiz_id: int
    question_text: str
    order_index: int
    created_at: datetime
    answer_options: List[AnswerOptionResponse]


class QuizResponse(RPCModel):
    id: int
    title: str
    description: Optional[str] = None
    created_by: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AdminQuizDetail(QuizResponse):
    questions: List[QuestionResponse]
    created_by_user: Optional[QuizOwnerDetail] = None


class GetQuizRequest(RPCModel):
    quiz_id: int = Field(..., gt=0)


class CreateQuizRequest(RPCModel):
    title: str = Field(..., min_length=1, description="Title is required")
    description: Optional[str] = None


class UpdateQuizRequest(RPCModel):
    quiz_id: int = Field(..., gt=0)
    title: Optional[str] = Field(None, min_length=1, description="Title cannot be empty")
    description: Optional[str] = None
    is_active: Optional[bool] = None


class DeleteQuizRequest(RPCModel):
    quiz_id: int = Field(..., gt=0)


class AnswerOptionInput(RPCModel):
    option_text: str = Field(..., min_length=1, description="Option text is required")
    is_correct: bool


class CreateQuestionRequest(RPCModel):
    quiz_id: int = Field(..., gt=0)
    question_text: str = Field(..., min_length=1, description="Question text is required")
    options: List[AnswerOptionInput] = Field(..., min_length=2, description="At least 2 options required")
    order_index: Optional[int] = None


class DeleteQuestionRequest(RPCModel):
    question_id: int = Field(..., gt=0)


# Attempts

class StartQuizRequest(RPCModel):
    quiz_id: int = Field(..., gt=0)


class StartQuizResponse(RPCModel):
    attempt_id: int
    quiz_id: int
    total_questions: int


class SubmittedAnswerInput(RPCModel):
    question_id: int = Field(..., gt=0)
    selected_option_id: int = Field(..., gt=0)


class SubmitQuizRequest(RPCModel):
    attempt_id: int = Field(..., gt=0)
    answers: List[SubmittedAnswerInput]


class SubmitQuizResponse(RPCModel):
    attempt_id: int
    score: int
    total_questions: int
    percentage: int
    completed_at: datetime


class GetResultRequest(RPCModel):
    attempt_id: int = Field(..., gt=0)


class ResultQuiz(RPCModel):
    id: int
    title: str
    description: Optional[str] = None


class SelectedOption(RPCModel):
    id: int
    text: str
    was_correct: bool


class CorrectOption(RPCModel):
    id: int
    option_text: str


class ResultAnswer(RPCModel):
    question_id: int
    question_text: Optional[str] = None
    selected_option: Optional[SelectedOption] = None
    correct_option: Optional[CorrectOption] = None


class AttemptResultResponse(RPCModel):
    attempt_id: int
    quiz: Optional[ResultQuiz] = None
    score: Optional[int] = None
    total_questions: Optional[int] = None
    percentage: int
    completed_at: datetime
    answers: List[ResultAnswer]


class AttemptQuiz(RPCModel):
    id: int
    title: str


class AttemptHistoryItem(RPCModel):
    attempt_id: int
    quiz: Optional[AttemptQuiz] = None
    score: Optional[int] = None
    total_questions: Optional[int] = None
    percentage: Optional[int] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
