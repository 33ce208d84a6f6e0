import enum
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from lms.db.base import Base
from lms.domain.clock import utcnow
from lms.models._ids import new_id


class SubmissionType(str, enum.Enum):
    TEXT = "TEXT"
    FILE = "FILE"
    BOTH = "BOTH"


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(String(36), primary_key=True, default=new_id)
    course_id = Column(String(36), ForeignKey("courses.id"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    due_date = Column(DateTime, nullable=False)
    submission_type = Column(
        Enum(SubmissionType, name="submission_type"), nullable=False, default=SubmissionType.TEXT
    )
    # Set by the first grade; closes the assignment to new submissions.
    grading_started = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    course = relationship("Course", back_populates="assignments")
    submissions = relationship(
        "AssignmentSubmissionRecord", back_populates="assignment", cascade="all, delete-orphan"
    )


class AssignmentSubmissionRecord(Base):
    __tablename__ = "assignment_submissions"
    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_assignment_submissions_assignment_student"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    assignment_id = Column(String(36), ForeignKey("assignments.id"), nullable=False)
    student_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    content = Column(String, nullable=True)
    file_path = Column(String, nullable=True)
    file_name = Column(String, nullable=True)
    grade = Column(Float, nullable=True)
    feedback = Column(String, nullable=True)
    is_late = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False)
    version = Column(Integer, nullable=False, default=0)
    submitted_at = Column(DateTime, nullable=True)
    graded_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    assignment = relationship("Assignment", back_populates="submissions")
    student = relationship("User")
