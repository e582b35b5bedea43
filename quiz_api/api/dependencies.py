from typing import Optional

import structlog
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.exceptions import ForbiddenError, UnauthorizedError
from ..core.security import AuthContext, context_from_token
from ..repositories.attempt_repository import AttemptRepository
from ..repositories.quiz_repository import QuizRepository
from ..repositories.user_repository import UserRepository
from ..services.attempt_service import AttemptService
from ..services.auth_service import AuthService
from ..services.quiz_service import QuizService

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_quiz_repository(db: Session = Depends(get_db)) -> QuizRepository:
    return QuizRepository(db)


def get_attempt_repository(db: Session = Depends(get_db)) -> AttemptRepository:
    return AttemptRepository(db)


def get_auth_service(repo: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(repo)


def get_quiz_service(repo: QuizRepository = Depends(get_quiz_repository)) -> QuizService:
    return QuizService(repo)


def get_attempt_service(
    attempt_repo: AttemptRepository = Depends(get_attempt_repository),
    quiz_repo: QuizRepository = Depends(get_quiz_repository)
) -> AttemptService:
    return AttemptService(attempt_repo, quiz_repo)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthContext:
    if not credentials or not credentials.credentials:
        raise UnauthorizedError("Missing authentication token")

    auth = context_from_token(credentials.credentials)
    if not auth:
        raise UnauthorizedError("Invalid or expired token")
    return auth


async def get_current_admin(
    auth: AuthContext = Depends(get_current_user)
) -> AuthContext:
    if not auth.is_admin:
        logger.info("Admin access denied", user_id=auth.user_id)
        raise ForbiddenError("Admin access required")
    return auth
