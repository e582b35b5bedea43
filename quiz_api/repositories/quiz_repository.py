from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session, selectinload

from ..models.quiz import Quiz
from ..models.question import Question
from ..models.answer_option import AnswerOption


class QuizRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, quiz_id: int, active_only: bool = False) -> Optional[Quiz]:
        """Get a quiz with its questions and their options"""
        query = (
            self.session.query(Quiz)
            .options(selectinload(Quiz.questions).selectinload(Question.answer_options))
            .filter(Quiz.id == quiz_id)
        )
        if active_only:
            query = query.filter(Quiz.is_active == True)
        return query.first()

    def list_quizzes(self, active_only: bool = True) -> List[Quiz]:
        """List quizzes newest first"""
        query = self.session.query(Quiz).options(selectinload(Quiz.questions))
        if active_only:
            query = query.filter(Quiz.is_active == True)
        return query.order_by(desc(Quiz.created_at), desc(Quiz.id)).all()

    def create(self, title: str, description: Optional[str], created_by: int) -> Quiz:
        quiz = Quiz(title=title, description=description, created_by=created_by)
        self.session.add(quiz)
        self.session.commit()
        self.session.refresh(quiz)
        return quiz

    def update(self, quiz_id: int, changes: Dict[str, Any]) -> Optional[Quiz]:
        quiz = self.session.query(Quiz).filter(Quiz.id == quiz_id).first()
        if not quiz:
            return None

        for field, value in changes.items():
            setattr(quiz, field, value)
        quiz.updated_at = datetime.now(timezone.utc)

        self.session.commit()
        self.session.refresh(quiz)
        return quiz

    def delete(self, quiz_id: int) -> bool:
        """Delete a quiz; its questions and options go with it"""
        quiz = self.get_by_id(quiz_id)
        if not quiz:
            return False
        try:
            self.session.delete(quiz)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return True

    def get_questions(self, quiz_id: int) -> List[Question]:
        """All questions of a quiz with their options, in display order"""
        return (
            self.session.query(Question)
            .options(selectinload(Question.answer_options))
            .filter(Question.quiz_id == quiz_id)
            .order_by(Question.order_index, Question.id)
            .all()
        )

    def get_question(self, question_id: int) -> Optional[Question]:
        return (
            self.session.query(Question)
            .options(selectinload(Question.answer_options))
            .filter(Question.id == question_id)
            .first()
        )

    def create_question(self, quiz_id: int, question_text: str, order_index: int, options: List[Dict[str, Any]]) -> Question:
        """Create a question and its options in one transaction"""
        try:
            question = Question(quiz_id=quiz_id, question_text=question_text, order_index=order_index)
            self.session.add(question)
            self.session.flush()

            self.session.add_all([
                AnswerOption(
                    question_id=question.id,
                    option_text=option["option_text"],
                    is_correct=option["is_correct"],
                    order_index=index,
                )
                for index, option in enumerate(options)
            ])
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        return self.get_question(question.id)

    def delete_question(self, question_id: int) -> bool:
        question = self.get_question(question_id)
        if not question:
            return False
        try:
            self.session.delete(question)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return True

    def get_correct_options(self, question_ids: List[int]) -> Dict[int, AnswerOption]:
        """Map question id -> its first correct option, for the given questions"""
        if not question_ids:
            return {}

        options = (
            self.session.query(AnswerOption)
            .filter(AnswerOption.question_id.in_(question_ids), AnswerOption.is_correct == True)
            .order_by(AnswerOption.order_index, AnswerOption.id)
            .all()
        )

        correct = {}
        for option in options:
            correct.setdefault(option.question_id, option)
        return correct
