from .user import User
from .quiz import Quiz
from .question import Question
from .answer_option import AnswerOption
from .attempt import Attempt
from .user_answer import UserAnswer

__all__ = ["User", "Quiz", "Question", "AnswerOption", "Attempt", "UserAnswer"]
