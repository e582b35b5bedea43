import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest


@pytest.fixture
def test_db():
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker
    from sqlalchemy.pool import StaticPool
    from quiz_api.core.database import Base
    from quiz_api import models  # noqa: F401

    # Use in-memory SQLite for tests
    SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def _create_user(db, email, name, role, password="secret123"):
    from quiz_api.core.security import hash_password
    from quiz_api.repositories.user_repository import UserRepository

    return UserRepository(db).create(email=email, password_hash=hash_password(password), name=name, role=role)


@pytest.fixture
def admin_user(test_db):
    return _create_user(test_db, "admin@example.com", "Admin User", "admin")


@pytest.fixture
def regular_user(test_db):
    return _create_user(test_db, "user@example.com", "Test User", "user")


@pytest.fixture
def other_user(test_db):
    return _create_user(test_db, "other@example.com", "Other User", "user")


def _auth_for(user):
    from quiz_api.core.security import AuthContext
    return AuthContext(user_id=user.id, email=user.email, role=user.role)


@pytest.fixture
def admin_auth(admin_user):
    return _auth_for(admin_user)


@pytest.fixture
def user_auth(regular_user):
    return _auth_for(regular_user)


@pytest.fixture
def other_auth(other_user):
    return _auth_for(other_user)


@pytest.fixture
def quiz_repo(test_db):
    from quiz_api.repositories.quiz_repository import QuizRepository
    return QuizRepository(test_db)


@pytest.fixture
def attempt_repo(test_db):
    from quiz_api.repositories.attempt_repository import AttemptRepository
    return AttemptRepository(test_db)


@pytest.fixture
def quiz_service(quiz_repo):
    from quiz_api.services.quiz_service import QuizService
    return QuizService(quiz_repo)


@pytest.fixture
def attempt_service(attempt_repo, quiz_repo):
    from quiz_api.services.attempt_service import AttemptService
    return AttemptService(attempt_repo, quiz_repo)


@pytest.fixture
def make_quiz(quiz_repo, admin_user):
    """
    Build a quiz from a compact description.

    Each question is a list of (option_text, is_correct) pairs. Returns the
    quiz id and, per question, a dict with its id, correct option id and
    the id of one wrong option.
    """
    def _make(questions, title="Books of the Bible", is_active=True):
        quiz = quiz_repo.create(title=title, description="Test quiz", created_by=admin_user.id)
        built = []
        for index, options in enumerate(questions):
            question = quiz_repo.create_question(
                quiz_id=quiz.id,
                question_text=f"Question {index + 1}",
                order_index=index,
                options=[{"option_text": text, "is_correct": correct} for text, correct in options],
            )
            correct = next((o.id for o in question.answer_options if o.is_correct), None)
            wrong = next(o.id for o in question.answer_options if not o.is_correct)
            built.append({"id": question.id, "correct": correct, "wrong": wrong})
        if not is_active:
            quiz_repo.update(quiz.id, {"is_active": False})
        return quiz.id, built

    return _make


@pytest.fixture
def three_question_quiz(make_quiz):
    return make_quiz([
        [("Genesis", True), ("Exodus", False), ("Leviticus", False)],
        [("Moses", False), ("David", True)],
        [("Paul", True), ("Peter", False), ("John", False), ("James", False)],
    ])


@pytest.fixture
async def async_client(test_db):
    from httpx import AsyncClient, ASGITransport
    from quiz_api.main import app
    from quiz_api.core.database import get_db

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # Use ASGITransport for direct app interaction
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


def bearer(user) -> dict:
    from quiz_api.core.security import create_access_token
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email, user.role)}"}


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture
def user_headers(regular_user):
    return bearer(regular_user)
