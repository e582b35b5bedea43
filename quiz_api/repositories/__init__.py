from .user_repository import UserRepository
from .quiz_repository import QuizRepository
from .attempt_repository import AttemptRepository

__all__ = ["UserRepository", "QuizRepository", "AttemptRepository"]
