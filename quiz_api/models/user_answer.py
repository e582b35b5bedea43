from sqlalchemy import Column, Integer, ForeignKey, Boolean
from sqlalchemy.orm import relationship

from ..core.database import Base


class UserAnswer(Base):
    __tablename__ = "user_answers"

    id = Column(Integer, primary_key=True, index=True)
    attempt_id = Column(Integer, ForeignKey("quiz_attempts.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    selected_option_id = Column(Integer, ForeignKey("answer_options.id"), nullable=False)
    # Snapshot taken at submission time, never recomputed
    is_correct = Column(Boolean, nullable=False)

    attempt = relationship("Attempt", back_populates="user_answers")
    question = relationship("Question", lazy="select")
    selected_option = relationship("AnswerOption", lazy="select")

    def __repr__(self):
        return f"<UserAnswer(id={self.id}, attempt_id={self.attempt_id}, question_id={self.question_id}, correct={self.is_correct})>"
