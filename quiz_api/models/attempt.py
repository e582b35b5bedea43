from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..core.database import Base


class Attempt(Base):
    """
    One user's pass through a quiz.

    An attempt is in progress while ``completed_at`` is null and completed
    once it is set. Completion happens exactly once.
    """
    __tablename__ = "quiz_attempts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False, index=True)

    score = Column(Integer, nullable=True)
    total_questions = Column(Integer, nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", lazy="select")
    quiz = relationship("Quiz", lazy="select")
    user_answers = relationship(
        "UserAnswer",
        back_populates="attempt",
        cascade="all, delete-orphan",
        order_by="UserAnswer.id",
    )

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def __repr__(self):
        return f"<Attempt(id={self.id}, quiz_id={self.quiz_id}, score={self.score}, completed={self.is_completed})>"
