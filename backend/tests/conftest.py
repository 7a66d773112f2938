"""
Pytest fixtures: SQLite in-memory database, users, tokens, course tree
"""

import os

# Phải set trước khi import academy (settings được cache, engine tạo lúc import)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789abcdef")

from datetime import timedelta
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from academy.config import get_settings
from academy.database import Base, SessionLocal, engine, get_db
from academy.main import app
from academy.models.user import User
from academy.repositories.user_repository import RoleRepository
from academy.schemas.course import ChapterCreate, CourseCreate, LessonCreate
from academy.schemas.quiz import QuizFormCreate, QuizQuestionInput
from academy.services.auth_service import AuthService
from academy.services.course_service import CourseService
from academy.services.hierarchy_service import HierarchyService
from academy.services.quiz_service import QuizService
from academy.utils import utcnow

PASSWORD = "secret123"


@pytest.fixture(scope="session")
def settings():
    return get_settings()


@pytest.fixture(scope="session")
def auth_service(settings):
    return AuthService(settings)


@pytest.fixture(scope="session")
def password_hash(auth_service):
    """bcrypt với cost >= 13 khá chậm nên chỉ hash một lần"""
    return auth_service.hash_password(PASSWORD)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db, password_hash):
    def _make_user(username, roles=("User",), **fields):
        now = utcnow()
        user = User(
            username=username,
            first_name=fields.pop("first_name", username.capitalize()),
            last_name=fields.pop("last_name", "Tester"),
            email=fields.pop("email", f"{username}@example.com"),
            password_hash=password_hash,
            refresh_token=AuthService.generate_refresh_token(),
            refresh_token_expiry_time=now + timedelta(hours=1),
            created_at=now,
            updated_at=now,
            **fields,
        )
        user.roles = [RoleRepository.get_or_create(db, role) for role in roles]
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("admin", roles=("Admin", "User"))


@pytest.fixture
def student(make_user):
    return make_user("student")


def bearer(auth_service, user):
    return {"Authorization": f"Bearer {auth_service.create_access_token(user)}"}


@pytest.fixture
def admin_headers(auth_service, admin):
    return bearer(auth_service, admin)


@pytest.fixture
def student_headers(auth_service, student):
    return bearer(auth_service, student)


@pytest.fixture
def course_tree(db):
    """Một khóa học, một lesson, hai chapter"""
    course = CourseService.create_course(db, CourseCreate(title="Python Basics", level="Beginner"))
    lesson = HierarchyService.create_lesson(db, LessonCreate(learning_course_id=course.id, title="Variables"))
    chapters = [
        HierarchyService.create_chapter(db, lesson.id, ChapterCreate(title=f"Chapter {number}"))
        for number in (1, 2)
    ]
    return SimpleNamespace(course=course, lesson=lesson, chapters=chapters)


@pytest.fixture
def make_quiz(db):
    def _make_quiz(chapter_id, correct=(0, 2, 1), title="Check yourself"):
        questions = [
            QuizQuestionInput(
                question_text=f"Question {position}",
                options=["A", "B", "C", "D"],
                correct_answer_index=answer,
            )
            for position, answer in enumerate(correct)
        ]
        return QuizService.create_form(db, QuizFormCreate(chapter_id=chapter_id, title=title, questions=questions))

    return _make_quiz
