import os
from datetime import timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from lms.core.config import get_settings
from lms.db.base import Base
from lms.db.session import build_engine
from lms.api.deps import get_db
from lms.core.security import hash_password
from lms.domain.clock import utcnow
from lms.models import Assignment, Course, Enrollment, Quiz, User, UserRole


@pytest.fixture(scope="session")
def db_engine(tmp_path_factory):
    db_path = tmp_path_factory.mktemp("data") / "test.db"
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"
    get_settings.cache_clear()
    settings = get_settings()
    engine = build_engine(settings.database_url)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture()
def db_session(db_engine):
    session_local = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = session_local()
    try:
        yield db
    finally:
        db.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
        db.close()


@pytest.fixture()
def client(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from lms.main import app

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def seed_data(db_session):
    teacher = User(
        full_name="Grace Hopper",
        email="teacher@example.com",
        password_hash=hash_password("teacher123"),
        role=UserRole.teacher,
    )
    student = User(
        full_name="Alan Turing",
        email="student@example.com",
        password_hash=hash_password("student123"),
        role=UserRole.student,
    )
    outsider = User(
        full_name="Ada Lovelace",
        email="outsider@example.com",
        password_hash=hash_password("student123"),
        role=UserRole.student,
    )
    db_session.add_all([teacher, student, outsider])
    db_session.flush()

    course = Course(teacher_id=teacher.id, code="ABC123", title="Algorithms")
    db_session.add(course)
    db_session.flush()
    db_session.add(Enrollment(student_id=student.id, course_id=course.id))

    now = utcnow()
    quiz = Quiz(
        course_id=course.id,
        title="Quiz 1",
        time_limit_minutes=30,
        due_date=now + timedelta(days=1),
        questions=[
            {"type": "mcq", "prompt": "2 + 2 = ?", "options": ["3", "4"], "correct_answer": 1},
            {"type": "essay", "prompt": "What is a loop?"},
        ],
    )
    assignment = Assignment(course_id=course.id, title="Homework 1", due_date=now + timedelta(days=1))
    late_assignment = Assignment(course_id=course.id, title="Homework 0", due_date=now - timedelta(days=1))
    db_session.add_all([quiz, assignment, late_assignment])
    db_session.commit()
    return {
        "teacher": teacher,
        "student": student,
        "outsider": outsider,
        "course": course,
        "quiz": quiz,
        "assignment": assignment,
        "late_assignment": late_assignment,
    }


def _auth_headers(client, email: str, password: str) -> dict:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def teacher_headers(client, seed_data):
    return _auth_headers(client, "teacher@example.com", "teacher123")


@pytest.fixture()
def student_headers(client, seed_data):
    return _auth_headers(client, "student@example.com", "student123")


@pytest.fixture()
def outsider_headers(client, seed_data):
    return _auth_headers(client, "outsider@example.com", "student123")
