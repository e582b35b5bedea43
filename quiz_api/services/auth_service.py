from typing import Any, Dict

import structlog

from ..core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from ..core.security import AuthContext, create_access_token, hash_password, verify_password
from ..models.user import User
from ..repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class AuthService:

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def register(self, email: str, password: str, name: str) -> Dict[str, Any]:
        if self.repo.get_by_email(email):
            raise ConflictError("User with this email already exists")

        user = self.repo.create(email=email, password_hash=hash_password(password), name=name, role="user")
        logger.info("User registered", user_id=user.id)

        return {"user": user, "token": self.issue_token(user)}

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self.repo.get_by_email(email)
        if not user or not verify_password(password, user.password):
            logger.info("Login rejected", email=email)
            raise UnauthorizedError("Invalid email or password")

        return {"user": user, "token": self.issue_token(user)}

    def me(self, auth: AuthContext) -> User:
        user = self.repo.get_by_id(auth.user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def logout(self, auth: AuthContext) -> Dict[str, str]:
        # Tokens are stateless; the client drops its copy
        return {"message": "Logged out successfully"}

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(user_id=user.id, email=user.email, role=user.role)
