from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from lms.db.base import Base
from lms.domain.clock import utcnow
from lms.models._ids import new_id


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(String(36), primary_key=True, default=new_id)
    course_id = Column(String(36), ForeignKey("courses.id"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    time_limit_minutes = Column(Integer, nullable=False)
    due_date = Column(DateTime, nullable=False)
    # [{"type": "mcq" | "essay", "prompt": str, "options": [...], "correct_answer": int}]
    questions = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    course = relationship("Course", back_populates="quizzes")
    submissions = relationship("QuizSubmissionRecord", back_populates="quiz", cascade="all, delete-orphan")


class QuizSubmissionRecord(Base):
    __tablename__ = "quiz_submissions"
    __table_args__ = (UniqueConstraint("quiz_id", "student_id", name="uq_quiz_submissions_quiz_student"),)

    id = Column(String(36), primary_key=True, default=new_id)
    quiz_id = Column(String(36), ForeignKey("quizzes.id"), nullable=False)
    student_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    answers = Column(JSON, nullable=False, default=list)
    started_at = Column(DateTime, nullable=True)
    submitted_at = Column(DateTime, nullable=True)
    grade = Column(Float, nullable=True)
    feedback = Column(String, nullable=True)
    status = Column(String(20), nullable=False)
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    quiz = relationship("Quiz", back_populates="submissions")
    student = relationship("User")
