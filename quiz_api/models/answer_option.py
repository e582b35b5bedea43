from sqlalchemy import Column, Integer, Text, ForeignKey, Boolean, Index, false, text
from sqlalchemy.orm import relationship

from ..core.database import Base


class AnswerOption(Base):
    __tablename__ = "answer_options"

    id = Column(Integer, primary_key=True, index=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    option_text = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False, server_default=false())
    order_index = Column(Integer, nullable=False, default=0, server_default="0")

    question = relationship("Question", back_populates="answer_options")

    __table_args__ = (
        # At most one correct option per question
        Index(
            "uq_answer_options_one_correct",
            "question_id",
            unique=True,
            sqlite_where=text("is_correct = 1"),
            postgresql_where=text("is_correct"),
        ),
    )

    def __repr__(self):
        return f"<AnswerOption(id={self.id}, question_id={self.question_id}, correct={self.is_correct})>"
