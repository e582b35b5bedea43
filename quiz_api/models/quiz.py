from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Boolean, true
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from ..core.database import Base


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    created_by_user = relationship("User", back_populates="quizzes", lazy="joined")
    questions = relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="[Question.order_index, Question.id]",
    )

    # No attempts relationship: deleting a quiz leaves attempt rows and their quiz_id as they are.

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def __repr__(self):
        return f"<Quiz(id={self.id}, title={self.title!r}, active={self.is_active})>"
