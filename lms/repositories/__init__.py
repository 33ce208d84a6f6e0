from lms.repositories.assignment_submissions import SqlAlchemyAssignmentSubmissionRepository
from lms.repositories.course_codes import SqlAlchemyCourseCodeChecker
from lms.repositories.quiz_submissions import SqlAlchemyQuizSubmissionRepository

__all__ = [
    "SqlAlchemyAssignmentSubmissionRepository",
    "SqlAlchemyCourseCodeChecker",
    "SqlAlchemyQuizSubmissionRepository",
]
