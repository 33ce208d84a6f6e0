from lms.domain.assignment_submission import AssignmentSubmission, AssignmentSubmissionStatus
from lms.domain.course_code import CourseCode
from lms.domain.errors import (
    ConcurrentModificationError,
    DomainError,
    InvalidOperationError,
    InvalidStateError,
    ValidationError,
)
from lms.domain.grade import Grade
from lms.domain.quiz_submission import QuizAnswer, QuizSubmission, QuizSubmissionStatus

__all__ = [
    "AssignmentSubmission",
    "AssignmentSubmissionStatus",
    "CourseCode",
    "ConcurrentModificationError",
    "DomainError",
    "InvalidOperationError",
    "InvalidStateError",
    "ValidationError",
    "Grade",
    "QuizAnswer",
    "QuizSubmission",
    "QuizSubmissionStatus",
]
