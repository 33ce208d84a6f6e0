"""A student's submission for an untimed assignment.

Lifecycle: NOT_SUBMITTED -> SUBMITTED -> GRADED, with SUBMITTED -> SUBMITTED
allowed through ``resubmit`` until grading starts. Grade changes accept an
optional expected version and refuse to touch the entity when it does not
match the current one.
"""
import enum
import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Union

from lms.domain.clock import utcnow
from lms.domain.errors import (
    ConcurrentModificationError,
    InvalidOperationError,
    InvalidStateError,
    ValidationError,
)
from lms.domain.grade import validate_grade_value

STALE_VERSION_MESSAGE = "Submission has been modified by another user. Please refresh and try again"


class AssignmentSubmissionStatus(str, enum.Enum):
    NOT_SUBMITTED = "NOT_SUBMITTED"
    SUBMITTED = "SUBMITTED"
    GRADED = "GRADED"


class AssignmentSubmission:
    def __init__(
        self,
        id: str,
        assignment_id: str,
        student_id: str,
        status: Union[AssignmentSubmissionStatus, str] = AssignmentSubmissionStatus.NOT_SUBMITTED,
        version: int = 0,
        is_late: bool = False,
        content: Optional[str] = None,
        file_path: Optional[str] = None,
        file_name: Optional[str] = None,
        grade: Optional[float] = None,
        feedback: Optional[str] = None,
        submitted_at: Optional[datetime] = None,
        graded_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        try:
            status = AssignmentSubmissionStatus(status)
        except ValueError as exc:
            raise ValidationError(
                f"Invalid submission status: {status}. Must be NOT_SUBMITTED, SUBMITTED, or GRADED"
            ) from exc

        now = utcnow()
        self._id = id
        self._assignment_id = assignment_id
        self._student_id = student_id
        self._content = content
        self._file_path = file_path
        self._file_name = file_name
        self._grade = grade
        self._feedback = feedback
        self._is_late = bool(is_late)
        self._status = status
        self._version = version
        self._submitted_at = submitted_at
        self._graded_at = graded_at
        self._created_at = created_at or now
        self._updated_at = updated_at or now

        self._validate()

    @classmethod
    def create(
        cls,
        assignment_id: str,
        student_id: str,
        id: Optional[str] = None,
        **fields,
    ) -> "AssignmentSubmission":
        """New submission record; defaults to NOT_SUBMITTED at version 0."""
        return cls(id=id or str(uuid.uuid4()), assignment_id=assignment_id, student_id=student_id, **fields)

    @classmethod
    def reconstitute(cls, **fields) -> "AssignmentSubmission":
        return cls(**fields)

    def _validate(self) -> None:
        if not isinstance(self._id, str) or not self._id.strip():
            raise ValidationError("AssignmentSubmission ID is required")
        if not isinstance(self._assignment_id, str) or not self._assignment_id.strip():
            raise ValidationError("Assignment ID is required")
        if not isinstance(self._student_id, str) or not self._student_id.strip():
            raise ValidationError("Student ID is required")
        if self._grade is not None:
            validate_grade_value(self._grade)
        if isinstance(self._version, bool) or not isinstance(self._version, int) or self._version < 0:
            raise ValidationError("Version must be non-negative")
        if self._status == AssignmentSubmissionStatus.GRADED and self._grade is None:
            raise ValidationError("Graded submission must have a grade")

    def _check_version(self, expected_version: Optional[int]) -> None:
        if expected_version is not None and expected_version != self._version:
            raise ConcurrentModificationError(STALE_VERSION_MESSAGE)

    def _touch(self, now: Optional[datetime] = None) -> None:
        self._updated_at = now or utcnow()

    # Lifecycle

    def submit(self, is_late: bool, now: Optional[datetime] = None) -> None:
        if self._status != AssignmentSubmissionStatus.NOT_SUBMITTED:
            raise InvalidStateError("Submission has already been submitted")

        now = now or utcnow()
        self._status = AssignmentSubmissionStatus.SUBMITTED
        self._is_late = bool(is_late)
        self._submitted_at = now
        self._touch(now)

    def resubmit(self, is_late: bool, now: Optional[datetime] = None) -> None:
        if self._status == AssignmentSubmissionStatus.GRADED:
            raise InvalidOperationError("Cannot resubmit after grading has started")
        if self._status != AssignmentSubmissionStatus.SUBMITTED:
            raise InvalidStateError("Cannot resubmit a submission that has not been submitted")

        now = now or utcnow()
        self._is_late = bool(is_late)
        self._submitted_at = now
        self._touch(now)

    def update_content(
        self,
        content: Optional[str] = None,
        file_path: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> None:
        """Replace only the fields that were provided."""
        if self._status == AssignmentSubmissionStatus.GRADED:
            raise InvalidOperationError("Cannot update content after grading has started")

        if content is not None:
            self._content = content
        if file_path is not None:
            self._file_path = file_path
        if file_name is not None:
            self._file_name = file_name
        self._touch()

    def assign_grade(
        self,
        grade_value: float,
        feedback: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> None:
        self._check_version(expected_version)
        validate_grade_value(grade_value)
        if self._status != AssignmentSubmissionStatus.SUBMITTED:
            raise InvalidStateError("Cannot grade submission that has not been submitted")

        now = utcnow()
        self._grade = grade_value
        self._feedback = feedback
        self._status = AssignmentSubmissionStatus.GRADED
        self._graded_at = now
        self._version += 1
        self._touch(now)

    def update_grade(
        self,
        grade_value: float,
        feedback: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> None:
        self._check_version(expected_version)
        if self._status != AssignmentSubmissionStatus.GRADED:
            raise InvalidStateError("Cannot update grade for submission that has not been graded")
        validate_grade_value(grade_value)

        self._grade = grade_value
        self._feedback = feedback
        self._version += 1
        self._touch()

    def mark_as_late(self) -> None:
        self._is_late = True
        self._touch()

    # Queries

    def is_graded(self) -> bool:
        return self._status == AssignmentSubmissionStatus.GRADED

    def is_submitted(self) -> bool:
        return self._status in (AssignmentSubmissionStatus.SUBMITTED, AssignmentSubmissionStatus.GRADED)

    @property
    def id(self) -> str:
        return self._id

    @property
    def assignment_id(self) -> str:
        return self._assignment_id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def content(self) -> Optional[str]:
        return self._content

    @property
    def file_path(self) -> Optional[str]:
        return self._file_path

    @property
    def file_name(self) -> Optional[str]:
        return self._file_name

    @property
    def grade(self) -> Optional[float]:
        return self._grade

    @property
    def feedback(self) -> Optional[str]:
        return self._feedback

    @property
    def is_late(self) -> bool:
        return self._is_late

    @property
    def status(self) -> AssignmentSubmissionStatus:
        return self._status

    @property
    def version(self) -> int:
        return self._version

    @property
    def submitted_at(self) -> Optional[datetime]:
        return self._submitted_at

    @property
    def graded_at(self) -> Optional[datetime]:
        return self._graded_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "assignment_id": self._assignment_id,
            "student_id": self._student_id,
            "content": self._content,
            "file_path": self._file_path,
            "file_name": self._file_name,
            "grade": self._grade,
            "feedback": self._feedback,
            "is_late": self._is_late,
            "status": self._status.value,
            "version": self._version,
            "submitted_at": self._submitted_at,
            "graded_at": self._graded_at,
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    def __repr__(self) -> str:
        return (
            f"<AssignmentSubmission {self._id} assignment={self._assignment_id} "
            f"status={self._status.value} v{self._version}>"
        )
