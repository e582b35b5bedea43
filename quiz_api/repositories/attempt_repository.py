from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import desc, update
from sqlalchemy.orm import Session, joinedload, selectinload

from ..models.attempt import Attempt
from ..models.user_answer import UserAnswer


class AttemptRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, user_id: int, quiz_id: int, total_questions: int) -> Attempt:
        """Create a new in-progress attempt"""
        attempt = Attempt(user_id=user_id, quiz_id=quiz_id, total_questions=total_questions)
        self.session.add(attempt)
        self.session.commit()
        self.session.refresh(attempt)
        return attempt

    def get_for_user(self, attempt_id: int, user_id: int) -> Optional[Attempt]:
        """Get an attempt only if it belongs to the user"""
        return (
            self.session.query(Attempt)
            .filter(Attempt.id == attempt_id, Attempt.user_id == user_id)
            .first()
        )

    def get_with_answers(self, attempt_id: int, user_id: int) -> Optional[Attempt]:
        """Get an owned attempt with its quiz and answers joined to question and selected option"""
        return (
            self.session.query(Attempt)
            .options(
                joinedload(Attempt.quiz),
                selectinload(Attempt.user_answers).joinedload(UserAnswer.question),
                selectinload(Attempt.user_answers).joinedload(UserAnswer.selected_option),
            )
            .filter(Attempt.id == attempt_id, Attempt.user_id == user_id)
            .first()
        )

    def get_user_attempts(self, user_id: int) -> List[Attempt]:
        """All attempts by a user, newest first"""
        return (
            self.session.query(Attempt)
            .options(joinedload(Attempt.quiz))
            .filter(Attempt.user_id == user_id)
            .order_by(desc(Attempt.created_at), desc(Attempt.id))
            .all()
        )

    def complete(self, attempt_id: int, answers: List[Dict[str, Any]], score: int) -> Optional[Attempt]:
        """
        Store the scored answers and finalize the attempt atomically.

        Each answer is a mapping of ``question_id``, ``selected_option_id``
        and ``is_correct``.

        The final update only matches while ``completed_at`` is still null.
        When another submission got there first nothing is written and None
        is returned.
        """
        completed_at = datetime.now(timezone.utc)
        try:
            result = self.session.execute(
                update(Attempt)
                .where(Attempt.id == attempt_id, Attempt.completed_at.is_(None))
                .values(score=score, completed_at=completed_at)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.session.rollback()
                return None

            if answers:
                self.session.add_all([UserAnswer(attempt_id=attempt_id, **answer) for answer in answers])

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        attempt = self.session.get(Attempt, attempt_id)
        self.session.refresh(attempt)
        return attempt
