"""Persistence ports used by the services layer.

Implementations live in ``lms.repositories``; the domain never imports them.
"""
from typing import List, Optional, Protocol

from lms.domain.assignment_submission import AssignmentSubmission
from lms.domain.course_code import CourseCode
from lms.domain.quiz_submission import QuizSubmission


class QuizSubmissionRepository(Protocol):
    def find_by_id(self, submission_id: str) -> Optional[QuizSubmission]: ...

    def find_by_quiz_and_student(self, quiz_id: str, student_id: str) -> Optional[QuizSubmission]: ...

    def find_by_quiz_id(self, quiz_id: str) -> List[QuizSubmission]: ...

    def save(
        self,
        submission: QuizSubmission,
        expected_version: Optional[int] = None,
        expected_status: Optional[str] = None,
    ) -> QuizSubmission:
        """Insert or update. With ``expected_version`` (and ``expected_status``) the stored row must still carry those values."""
        ...


class AssignmentSubmissionRepository(Protocol):
    def find_by_id(self, submission_id: str) -> Optional[AssignmentSubmission]: ...

    def find_by_assignment_and_student(
        self, assignment_id: str, student_id: str
    ) -> Optional[AssignmentSubmission]: ...

    def find_by_assignment_id(self, assignment_id: str) -> List[AssignmentSubmission]: ...

    def save(
        self,
        submission: AssignmentSubmission,
        expected_version: Optional[int] = None,
        expected_status: Optional[str] = None,
    ) -> AssignmentSubmission: ...


class CourseCodeChecker(Protocol):
    def is_unique(self, code: CourseCode) -> bool: ...
