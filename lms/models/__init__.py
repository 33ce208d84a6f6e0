from lms.models.user import User, UserRole
from lms.models.course import Course, Enrollment
from lms.models.quiz import Quiz, QuizSubmissionRecord
from lms.models.assignment import Assignment, AssignmentSubmissionRecord, SubmissionType

__all__ = [
    "User",
    "UserRole",
    "Course",
    "Enrollment",
    "Quiz",
    "QuizSubmissionRecord",
    "Assignment",
    "AssignmentSubmissionRecord",
    "SubmissionType",
]
