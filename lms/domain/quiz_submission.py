"""A student's attempt at one timed quiz.

Lifecycle: NOT_STARTED -> IN_PROGRESS -> SUBMITTED -> GRADED. There is no
backward transition. The time limit is enforced lazily: every ``submit`` or
``auto_submit`` call re-checks the elapsed wall-clock time, nothing runs in
the background.
"""
import enum
import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional, Union

from lms.domain.clock import utcnow
from lms.domain.errors import InvalidOperationError, InvalidStateError, ValidationError
from lms.domain.grade import validate_grade_value


class QuizSubmissionStatus(str, enum.Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    GRADED = "GRADED"


@dataclass(frozen=True)
class QuizAnswer:
    """``answer`` is an option index for multiple choice, free text for essays."""

    question_index: int
    answer: Union[str, int]

    def __post_init__(self):
        if isinstance(self.question_index, bool) or not isinstance(self.question_index, int):
            raise ValidationError("Question index must be an integer")
        if self.question_index < 0:
            raise ValidationError("Question index cannot be negative")
        if isinstance(self.answer, bool) or not isinstance(self.answer, (str, int)):
            raise ValidationError("Answer must be a string or an option index")

    @classmethod
    def from_value(cls, value: Union["QuizAnswer", Dict[str, Any]]) -> "QuizAnswer":
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            try:
                return cls(question_index=value["question_index"], answer=value["answer"])
            except KeyError as exc:
                raise ValidationError(f"Answer is missing field {exc.args[0]!r}") from exc
        raise ValidationError("Answer must be a QuizAnswer or a mapping")

    def to_dict(self) -> Dict[str, Any]:
        return {"question_index": self.question_index, "answer": self.answer}


def _coerce_answers(answers: Optional[Iterable]) -> List[QuizAnswer]:
    if answers is None:
        return []
    return [QuizAnswer.from_value(item) for item in answers]


def _require_time_limit(time_limit_minutes) -> float:
    if (
        isinstance(time_limit_minutes, bool)
        or not isinstance(time_limit_minutes, Real)
        or not math.isfinite(time_limit_minutes)
        or time_limit_minutes <= 0
    ):
        raise ValidationError("Time limit must be a positive number of minutes")
    return time_limit_minutes


class QuizSubmission:
    def __init__(
        self,
        id: str,
        quiz_id: str,
        student_id: str,
        status: Union[QuizSubmissionStatus, str],
        version: int,
        answers: Optional[Iterable] = None,
        started_at: Optional[datetime] = None,
        submitted_at: Optional[datetime] = None,
        grade: Optional[float] = None,
        feedback: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        try:
            status = QuizSubmissionStatus(status)
        except ValueError as exc:
            raise ValidationError(
                f"Invalid submission status: {status}. "
                "Must be NOT_STARTED, IN_PROGRESS, SUBMITTED, or GRADED"
            ) from exc

        now = utcnow()
        self._id = id
        self._quiz_id = quiz_id
        self._student_id = student_id
        self._answers = _coerce_answers(answers)
        self._started_at = started_at
        self._submitted_at = submitted_at
        self._grade = grade
        self._feedback = feedback
        self._status = status
        self._version = version
        self._created_at = created_at or now
        self._updated_at = updated_at or now

        self._validate()

    @classmethod
    def create(cls, quiz_id: str, student_id: str) -> "QuizSubmission":
        """New attempt: NOT_STARTED, no answers, version 1."""
        return cls(
            id=str(uuid.uuid4()),
            quiz_id=quiz_id,
            student_id=student_id,
            status=QuizSubmissionStatus.NOT_STARTED,
            version=1,
            answers=[],
        )

    @classmethod
    def reconstitute(cls, **fields) -> "QuizSubmission":
        """Rebuild an attempt from stored fields; invariants are re-checked."""
        return cls(**fields)

    def _validate(self) -> None:
        if not isinstance(self._id, str) or not self._id.strip():
            raise ValidationError("QuizSubmission ID is required")
        if not isinstance(self._quiz_id, str) or not self._quiz_id.strip():
            raise ValidationError("Quiz ID is required")
        if not isinstance(self._student_id, str) or not self._student_id.strip():
            raise ValidationError("Student ID is required")
        if isinstance(self._version, bool) or not isinstance(self._version, int) or self._version < 1:
            raise ValidationError("Version must be a positive integer")

        if self._status == QuizSubmissionStatus.IN_PROGRESS and self._started_at is None:
            raise ValidationError("Started date is required for in-progress submissions")
        if (
            self._status in (QuizSubmissionStatus.SUBMITTED, QuizSubmissionStatus.GRADED)
            and self._submitted_at is None
        ):
            raise ValidationError("Submitted date is required for submitted submissions")
        if self._status == QuizSubmissionStatus.GRADED and self._grade is None:
            raise ValidationError("Grade is required for graded submissions")
        if self._grade is not None:
            validate_grade_value(self._grade)

    def _touch(self, now: Optional[datetime] = None) -> None:
        self._updated_at = now or utcnow()

    # Lifecycle

    def start(self, quiz_due_date: datetime, now: Optional[datetime] = None) -> None:
        if self._status != QuizSubmissionStatus.NOT_STARTED:
            raise InvalidStateError("Quiz has already been started or submitted")

        now = now or utcnow()
        if now >= quiz_due_date:
            raise InvalidOperationError("Cannot start quiz after due date")

        self._started_at = now
        self._status = QuizSubmissionStatus.IN_PROGRESS
        self._touch(now)

    def update_answers(self, answers: Iterable) -> None:
        """Auto-save: replace the stored answers while the attempt is open."""
        if self._status != QuizSubmissionStatus.IN_PROGRESS:
            raise InvalidStateError("Cannot update answers when quiz is not in progress")

        self._answers = _coerce_answers(answers)
        self._touch()

    def submit(
        self,
        answers: Iterable,
        time_limit_minutes: float,
        is_auto_submit: bool = False,
        now: Optional[datetime] = None,
    ) -> None:
        if self._status != QuizSubmissionStatus.IN_PROGRESS:
            raise InvalidStateError("Quiz must be in progress to submit")

        now = now or utcnow()
        if not is_auto_submit and self.is_time_expired(time_limit_minutes, now):
            raise InvalidOperationError("Quiz time has expired")

        new_answers = _coerce_answers(answers)
        self._answers = new_answers
        self._submitted_at = now
        self._status = QuizSubmissionStatus.SUBMITTED
        self._touch(now)

    def auto_submit(self, time_limit_minutes: float, now: Optional[datetime] = None) -> None:
        """Close an expired attempt with whatever answers were last auto-saved."""
        if self._status != QuizSubmissionStatus.IN_PROGRESS:
            raise InvalidStateError("Quiz must be in progress to auto-submit")

        now = now or utcnow()
        if not self.is_time_expired(time_limit_minutes, now):
            raise InvalidOperationError("Cannot auto-submit before time expires")

        self._submitted_at = now
        self._status = QuizSubmissionStatus.SUBMITTED
        self._touch(now)

    def set_grade(self, grade_value: float, feedback: Optional[str] = None) -> None:
        if self._status != QuizSubmissionStatus.SUBMITTED:
            raise InvalidStateError("Can only grade submitted submissions")
        validate_grade_value(grade_value)

        self._grade = grade_value
        self._feedback = feedback
        self._status = QuizSubmissionStatus.GRADED
        self._version += 1
        self._touch()

    def update_grade(self, grade_value: float, feedback: Optional[str] = None) -> None:
        if self._status != QuizSubmissionStatus.GRADED:
            raise InvalidStateError("Can only update grade for graded submissions")
        validate_grade_value(grade_value)

        self._grade = grade_value
        self._feedback = feedback
        self._version += 1
        self._touch()

    # Queries

    def is_time_expired(self, time_limit_minutes: float, now: Optional[datetime] = None) -> bool:
        limit = _require_time_limit(time_limit_minutes)
        if self._started_at is None:
            return False
        now = now or utcnow()
        return (now - self._started_at).total_seconds() >= limit * 60

    def get_remaining_time_seconds(self, time_limit_minutes: float, now: Optional[datetime] = None) -> int:
        """Whole seconds left, rounded up so it only reaches 0 once the attempt has expired."""
        limit = _require_time_limit(time_limit_minutes)
        total_seconds = limit * 60
        if self._started_at is None:
            return math.ceil(total_seconds)
        now = now or utcnow()
        elapsed = (now - self._started_at).total_seconds()
        return max(0, math.ceil(total_seconds - elapsed))

    def is_late(self) -> bool:
        # A quiz past its time limit is auto-submitted, never late.
        return False

    def is_graded(self) -> bool:
        return self._status == QuizSubmissionStatus.GRADED

    @property
    def id(self) -> str:
        return self._id

    @property
    def quiz_id(self) -> str:
        return self._quiz_id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def answers(self) -> List[QuizAnswer]:
        return list(self._answers)

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    @property
    def submitted_at(self) -> Optional[datetime]:
        return self._submitted_at

    @property
    def grade(self) -> Optional[float]:
        return self._grade

    @property
    def feedback(self) -> Optional[str]:
        return self._feedback

    @property
    def status(self) -> QuizSubmissionStatus:
        return self._status

    @property
    def version(self) -> int:
        return self._version

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "quiz_id": self._quiz_id,
            "student_id": self._student_id,
            "answers": [answer.to_dict() for answer in self._answers],
            "started_at": self._started_at,
            "submitted_at": self._submitted_at,
            "grade": self._grade,
            "feedback": self._feedback,
            "status": self._status.value,
            "version": self._version,
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    def __repr__(self) -> str:
        return f"<QuizSubmission {self._id} quiz={self._quiz_id} status={self._status.value} v{self._version}>"
