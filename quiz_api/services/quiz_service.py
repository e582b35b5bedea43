from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy.exc import IntegrityError

from ..core.exceptions import BadRequestError, ConflictError, NotFoundError, QuizNotFoundError
from ..core.security import AuthContext
from ..models.question import Question
from ..models.quiz import Quiz
from ..repositories.quiz_repository import QuizRepository

logger = structlog.get_logger(__name__)


class QuizService:
    """Quiz browsing for everyone and authoring for administrators."""

    def __init__(self, repo: QuizRepository):
        self.repo = repo

    def list_active(self) -> List[Quiz]:
        return self.repo.list_quizzes(active_only=True)

    def get_active(self, quiz_id: int) -> Quiz:
        quiz = self.repo.get_by_id(quiz_id, active_only=True)
        if not quiz:
            raise QuizNotFoundError(quiz_id)
        return quiz

    def list_all(self, auth: AuthContext) -> List[Quiz]:
        return self.repo.list_quizzes(active_only=False)

    def get_any(self, auth: AuthContext, quiz_id: int) -> Quiz:
        quiz = self.repo.get_by_id(quiz_id)
        if not quiz:
            raise QuizNotFoundError(quiz_id)
        return quiz

    def create_quiz(self, auth: AuthContext, title: str, description: Optional[str] = None) -> Quiz:
        quiz = self.repo.create(title=title, description=description, created_by=auth.user_id)
        logger.info("Quiz created", quiz_id=quiz.id, user_id=auth.user_id)
        return quiz

    def update_quiz(
        self,
        auth: AuthContext,
        quiz_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Quiz:
        changes: Dict[str, Any] = {}
        if title:
            changes["title"] = title
        if description is not None:
            changes["description"] = description
        if is_active is not None:
            changes["is_active"] = is_active

        quiz = self.repo.update(quiz_id, changes)
        if not quiz:
            raise QuizNotFoundError(quiz_id)

        logger.info("Quiz updated", quiz_id=quiz_id, fields=sorted(changes))
        return quiz

    def delete_quiz(self, auth: AuthContext, quiz_id: int) -> Dict[str, str]:
        try:
            deleted = self.repo.delete(quiz_id)
        except IntegrityError as e:
            # Stores enforcing foreign keys refuse while attempts still reference the quiz
            logger.warning("Quiz delete refused by store", quiz_id=quiz_id, error=str(e.orig))
            raise ConflictError("Quiz is still referenced by quiz attempts", details={"quiz_id": quiz_id})

        if not deleted:
            raise QuizNotFoundError(quiz_id)

        logger.info("Quiz deleted", quiz_id=quiz_id, user_id=auth.user_id)
        return {"message": "Quiz deleted successfully"}

    def create_question(
        self,
        auth: AuthContext,
        quiz_id: int,
        question_text: str,
        options: List[Dict[str, Any]],
        order_index: Optional[int] = None,
    ) -> Question:
        if not self.repo.get_by_id(quiz_id):
            raise QuizNotFoundError(quiz_id)

        correct_count = sum(1 for option in options if option["is_correct"])
        if correct_count != 1:
            raise BadRequestError(
                "Exactly one option must be marked as correct",
                details={"correct_options": correct_count}
            )

        question = self.repo.create_question(
            quiz_id=quiz_id,
            question_text=question_text,
            order_index=order_index if order_index is not None else 0,
            options=options,
        )
        logger.info("Question created", quiz_id=quiz_id, question_id=question.id, options=len(options))
        return question

    def delete_question(self, auth: AuthContext, question_id: int) -> Dict[str, str]:
        try:
            deleted = self.repo.delete_question(question_id)
        except IntegrityError as e:
            logger.warning("Question delete refused by store", question_id=question_id, error=str(e.orig))
            raise ConflictError("Question is still referenced by submitted answers", details={"question_id": question_id})

        if not deleted:
            raise NotFoundError("Question not found", details={"question_id": question_id})

        logger.info("Question deleted", question_id=question_id, user_id=auth.user_id)
        return {"message": "Question deleted successfully"}
