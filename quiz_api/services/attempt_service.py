from dataclasses import asdict
from typing import Any, Dict, Iterable, List

import structlog

from ..core.exceptions import AttemptNotFoundError, BadRequestError, QuizNotFoundError
from ..core.security import AuthContext
from ..repositories.attempt_repository import AttemptRepository
from ..repositories.quiz_repository import QuizRepository
from .scoring import SubmittedAnswer, build_correct_answer_map, calculate_percentage, score_answers

logger = structlog.get_logger(__name__)


class AttemptService:
    """
    Attempt lifecycle: start, submit and score, review.

    Every call takes the caller's verified identity explicitly and only ever
    touches attempts owned by that caller.
    """

    def __init__(self, attempt_repo: AttemptRepository, quiz_repo: QuizRepository):
        self.attempt_repo = attempt_repo
        self.quiz_repo = quiz_repo

    def start(self, auth: AuthContext, quiz_id: int) -> Dict[str, Any]:
        quiz = self.quiz_repo.get_by_id(quiz_id, active_only=True)
        if not quiz:
            raise QuizNotFoundError(quiz_id, message="Quiz not found or not active")

        total_questions = len(quiz.questions)
        attempt = self.attempt_repo.create(
            user_id=auth.user_id,
            quiz_id=quiz.id,
            total_questions=total_questions
        )

        logger.info("Attempt started", attempt_id=attempt.id, quiz_id=quiz.id, user_id=auth.user_id)
        return {
            "attempt_id": attempt.id,
            "quiz_id": quiz.id,
            "total_questions": total_questions,
        }

    def submit(self, auth: AuthContext, attempt_id: int, answers: Iterable[SubmittedAnswer]) -> Dict[str, Any]:
        attempt = self.attempt_repo.get_for_user(attempt_id, auth.user_id)
        if not attempt:
            raise AttemptNotFoundError(attempt_id)

        if attempt.is_completed:
            raise BadRequestError("Quiz already submitted", details={"attempt_id": attempt_id})

        questions = self.quiz_repo.get_questions(attempt.quiz_id)
        correct_answers = build_correct_answer_map(questions)
        scored, correct_count = score_answers(answers, correct_answers)

        completed = self.attempt_repo.complete(attempt_id, [asdict(answer) for answer in scored], correct_count)
        if completed is None:
            logger.warning("Concurrent submission rejected", attempt_id=attempt_id, user_id=auth.user_id)
            raise BadRequestError("Quiz already submitted", details={"attempt_id": attempt_id})

        total_questions = len(questions)
        percentage = calculate_percentage(correct_count, total_questions)

        logger.info(
            "Attempt submitted",
            attempt_id=attempt_id,
            quiz_id=attempt.quiz_id,
            user_id=auth.user_id,
            score=correct_count,
            total_questions=total_questions,
            answered=len(scored)
        )
        return {
            "attempt_id": completed.id,
            "score": correct_count,
            "total_questions": total_questions,
            "percentage": percentage,
            "completed_at": completed.completed_at,
        }

    def result(self, auth: AuthContext, attempt_id: int) -> Dict[str, Any]:
        attempt = self.attempt_repo.get_with_answers(attempt_id, auth.user_id)
        if not attempt:
            raise AttemptNotFoundError(attempt_id)

        if not attempt.is_completed:
            raise BadRequestError("Quiz not yet completed", details={"attempt_id": attempt_id})

        question_ids = [answer.question_id for answer in attempt.user_answers]
        correct_options = self.quiz_repo.get_correct_options(question_ids)

        answers: List[Dict[str, Any]] = []
        for user_answer in attempt.user_answers:
            # Question or option can be gone: deleted quiz, or ids unknown at submit time
            question = user_answer.question
            selected = user_answer.selected_option
            correct = correct_options.get(user_answer.question_id)
            answers.append({
                "question_id": user_answer.question_id,
                "question_text": question.question_text if question else None,
                "selected_option": {
                    "id": selected.id,
                    "text": selected.option_text,
                    "was_correct": selected.is_correct,
                } if selected else None,
                "correct_option": {"id": correct.id, "option_text": correct.option_text} if correct else None,
            })

        return {
            "attempt_id": attempt.id,
            "quiz": attempt.quiz,
            "score": attempt.score,
            "total_questions": attempt.total_questions,
            "percentage": calculate_percentage(attempt.score, attempt.total_questions),
            "completed_at": attempt.completed_at,
            "answers": answers,
        }

    def my_attempts(self, auth: AuthContext) -> List[Dict[str, Any]]:
        history = []
        for attempt in self.attempt_repo.get_user_attempts(auth.user_id):
            has_percentage = bool(attempt.total_questions) and attempt.score is not None
            history.append({
                "attempt_id": attempt.id,
                "quiz": attempt.quiz,
                "score": attempt.score,
                "total_questions": attempt.total_questions,
                "percentage": calculate_percentage(attempt.score, attempt.total_questions) if has_percentage else None,
                "completed_at": attempt.completed_at,
                "created_at": attempt.created_at,
            })
        return history
