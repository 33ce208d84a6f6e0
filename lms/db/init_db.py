import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from lms.core.security import hash_password
from lms.db.base import Base
from lms.db.session import SessionLocal, engine
from lms.domain.clock import utcnow
from lms.models import Assignment, Course, Enrollment, Quiz, User, UserRole

logger = logging.getLogger(__name__)

DEMO_COURSE_CODE = "DEMO01"


def seed_demo_data(db: Optional[Session] = None) -> bool:
    """Insert a demo teacher, student, course, quiz and assignment into an empty database.

    Returns False without touching anything when users already exist.
    """
    owns_session = db is None
    if owns_session:
        db = SessionLocal()
    try:
        if db.query(User).first():
            return False

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
        db.add_all([teacher, student])
        db.flush()

        course = Course(
            teacher_id=teacher.id,
            code=DEMO_COURSE_CODE,
            title="Introduction to Programming",
            description="Variables, loops and functions",
        )
        db.add(course)
        db.flush()

        db.add(Enrollment(student_id=student.id, course_id=course.id))

        now = utcnow()
        quiz = Quiz(
            course_id=course.id,
            title="Quiz 1",
            description="Basics",
            time_limit_minutes=30,
            due_date=now + timedelta(days=7),
            questions=[
                {
                    "type": "mcq",
                    "prompt": "2 + 2 = ?",
                    "options": ["3", "4", "5"],
                    "correct_answer": 1,
                },
                {
                    "type": "essay",
                    "prompt": "Explain what a loop is.",
                },
            ],
        )
        assignment = Assignment(
            course_id=course.id,
            title="Homework 1",
            description="Write a program that prints the first ten squares",
            due_date=now + timedelta(days=14),
        )
        db.add_all([quiz, assignment])

        db.commit()
        logger.info(f"Seeded demo data: course {course.code}, quiz {quiz.id}, assignment {assignment.id}")
        return True
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    seed_demo_data()
