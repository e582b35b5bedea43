from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional, Dict, Any

import structlog
from jose import jwt, JWTError
from passlib.context import CryptContext

from ..config import get_settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Verified identity of the caller, passed explicitly to every service call."""
    user_id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@lru_cache()
def get_password_context() -> CryptContext:
    settings = get_settings()
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)


def hash_password(password: str) -> str:
    return get_password_context().hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return get_password_context().verify(password, hashed_password)
    except ValueError:
        # Malformed or foreign hash
        return False


def create_access_token(user_id: int, email: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expires_minutes))
    claims = {
        "sub": str(user_id),
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info("Token verification failed", error=str(e))
        return None


def context_from_token(token: str) -> Optional[AuthContext]:
    payload = decode_access_token(token)
    if not payload:
        return None

    user_id = payload.get("userId")
    email = payload.get("email")
    role = payload.get("role")
    if not isinstance(user_id, int) or not email or role not in ("user", "admin"):
        return None

    return AuthContext(user_id=user_id, email=email, role=role)

