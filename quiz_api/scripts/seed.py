"""
Create the admin and regular seed accounts if they do not exist yet.

    python -m quiz_api.scripts.seed
"""
import structlog

from ..config import get_settings
from ..core.database import SessionLocal, create_tables
from ..core.security import hash_password
from ..repositories.user_repository import UserRepository

logger = structlog.get_logger(__name__)


def ensure_user(repo: UserRepository, email: str, password: str, name: str, role: str) -> bool:
    if repo.get_by_email(email):
        logger.info("Seed user already exists", email=email, role=role)
        return False

    repo.create(email=email, password_hash=hash_password(password), name=name, role=role)
    logger.info("Created seed user", email=email, role=role)
    return True


def seed() -> None:
    settings = get_settings()
    create_tables()

    db = SessionLocal()
    try:
        repo = UserRepository(db)
        ensure_user(repo, settings.seed_admin_email, settings.seed_admin_password, "Admin User", "admin")
        ensure_user(repo, settings.seed_user_email, settings.seed_user_password, "Test User", "user")
    finally:
        db.close()

    logger.info("Seeding complete")


if __name__ == "__main__":
    seed()
