from typing import Optional, Dict, Any


class QuizApiError(Exception):
    status_code = 500

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or self.default_error_code()
        self.details = details or {}
        super().__init__(self.message)

    @classmethod
    def default_error_code(cls) -> str:
        return cls.__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class NotFoundError(QuizApiError):
    status_code = 404

    @classmethod
    def default_error_code(cls) -> str:
        return "NOT_FOUND"


class BadRequestError(QuizApiError):
    status_code = 400

    @classmethod
    def default_error_code(cls) -> str:
        return "BAD_REQUEST"


class ConflictError(QuizApiError):
    status_code = 409

    @classmethod
    def default_error_code(cls) -> str:
        return "CONFLICT"


class UnauthorizedError(QuizApiError):
    status_code = 401

    @classmethod
    def default_error_code(cls) -> str:
        return "UNAUTHORIZED"


class ForbiddenError(QuizApiError):
    status_code = 403

    @classmethod
    def default_error_code(cls) -> str:
        return "FORBIDDEN"


class AttemptNotFoundError(NotFoundError):
    def __init__(self, attempt_id: int):
        super().__init__(
            message="Quiz attempt not found",
            details={"attempt_id": attempt_id}
        )


class QuizNotFoundError(NotFoundError):
    def __init__(self, quiz_id: int, message: str = "Quiz not found"):
        super().__init__(
            message=message,
            details={"quiz_id": quiz_id}
        )
