import logging
from dataclasses import dataclass
from datetime import datetime
from numbers import Real
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from lms.domain.clock import utcnow
from lms.domain.errors import ConcurrentModificationError, InvalidStateError
from lms.domain.quiz_submission import QuizSubmission, QuizSubmissionStatus
from lms.models import Course, Enrollment, Quiz, User, UserRole
from lms.repositories import SqlAlchemyQuizSubmissionRepository
from lms.services import timing
from lms.services.errors import ApplicationError, ConflictError, ForbiddenError, NotFoundError, QuizClosedError

logger = logging.getLogger(__name__)


@dataclass
class QuizAttempt:
    submission: QuizSubmission
    quiz: Quiz
    time_expired: bool = False


@dataclass
class QuizTimer:
    status: QuizSubmissionStatus
    remaining_seconds: int
    remaining_display: str
    expires_at: Optional[datetime]
    is_expired: bool


def get_quiz(db: Session, quiz_id: str) -> Quiz:
    quiz = db.query(Quiz).filter(Quiz.id == quiz_id).first()
    if not quiz:
        raise NotFoundError("Quiz not found")
    return quiz


def is_enrolled(db: Session, student_id: str, course_id: str) -> bool:
    return (
        db.query(Enrollment.id)
        .filter(Enrollment.student_id == student_id, Enrollment.course_id == course_id)
        .first()
        is not None
    )


def _load_submission(repo: SqlAlchemyQuizSubmissionRepository, submission_id: str) -> QuizSubmission:
    submission = repo.find_by_id(submission_id)
    if not submission:
        raise NotFoundError("Quiz submission not found")
    return submission


def _require_owner(submission: QuizSubmission, student: User, message: str) -> None:
    if submission.student_id != student.id:
        raise ForbiddenError(message)


def _require_course_teacher(course: Course, user: User, message: str) -> None:
    if user.role != UserRole.teacher or course.teacher_id != user.id:
        raise ForbiddenError(message)


def start_quiz(db: Session, quiz_id: str, student: User, now: Optional[datetime] = None) -> QuizAttempt:
    """Open a new attempt, resume an open one, or close one whose time ran out while away."""
    now = now or utcnow()
    quiz = get_quiz(db, quiz_id)
    if not is_enrolled(db, student.id, quiz.course_id):
        raise ForbiddenError("You must be enrolled in the course to start this quiz")

    repo = SqlAlchemyQuizSubmissionRepository(db)
    existing = repo.find_by_quiz_and_student(quiz.id, student.id)
    if existing:
        if existing.status in (QuizSubmissionStatus.SUBMITTED, QuizSubmissionStatus.GRADED):
            raise ConflictError("You have already submitted this quiz")

        if existing.is_time_expired(quiz.time_limit_minutes, now):
            loaded_version, loaded_status = existing.version, existing.status.value
            existing.auto_submit(quiz.time_limit_minutes, now)
            repo.save(existing, expected_version=loaded_version, expected_status=loaded_status)
            logger.info(f"Quiz submission {existing.id} auto-submitted on resume")
            return QuizAttempt(existing, quiz, time_expired=True)

        logger.info(f"Quiz submission {existing.id} resumed by {student.id}")
        return QuizAttempt(existing, quiz)

    submission = QuizSubmission.create(quiz.id, student.id)
    submission.start(quiz.due_date, now)
    repo.save(submission)
    logger.info(f"Quiz {quiz.id} started by {student.id} (submission {submission.id})")
    return QuizAttempt(submission, quiz)


def auto_save_answers(
    db: Session,
    submission_id: str,
    student: User,
    answers: Iterable,
    now: Optional[datetime] = None,
) -> QuizSubmission:
    now = now or utcnow()
    repo = SqlAlchemyQuizSubmissionRepository(db)
    submission = _load_submission(repo, submission_id)
    _require_owner(submission, student, "You do not have permission to modify this submission")
    quiz = get_quiz(db, submission.quiz_id)

    if submission.status != QuizSubmissionStatus.IN_PROGRESS:
        raise InvalidStateError("Cannot update answers when quiz is not in progress")
    if submission.is_time_expired(quiz.time_limit_minutes, now):
        raise QuizClosedError("Quiz time has expired. Answers cannot be saved.")

    loaded_version, loaded_status = submission.version, submission.status.value
    submission.update_answers(answers)
    return repo.save(submission, expected_version=loaded_version, expected_status=loaded_status)


def submit_quiz(
    db: Session,
    submission_id: str,
    student: User,
    answers: Iterable,
    now: Optional[datetime] = None,
) -> QuizSubmission:
    """Final submission by the student.

    An attempt found already expired is closed with its auto-saved answers and
    the call fails, so the late payload is never recorded.
    """
    now = now or utcnow()
    repo = SqlAlchemyQuizSubmissionRepository(db)
    submission = _load_submission(repo, submission_id)
    _require_owner(submission, student, "You do not have permission to submit this quiz")
    quiz = get_quiz(db, submission.quiz_id)

    loaded_version, loaded_status = submission.version, submission.status.value
    if submission.status == QuizSubmissionStatus.IN_PROGRESS and submission.is_time_expired(
        quiz.time_limit_minutes, now
    ):
        submission.auto_submit(quiz.time_limit_minutes, now)
        repo.save(submission, expected_version=loaded_version, expected_status=loaded_status)
        logger.info(f"Quiz submission {submission.id} auto-submitted on late submit")
        raise QuizClosedError("Quiz time has expired. The quiz has been auto-submitted.")

    submission.submit(answers, quiz.time_limit_minutes, is_auto_submit=False, now=now)
    repo.save(submission, expected_version=loaded_version, expected_status=loaded_status)
    logger.info(f"Quiz submission {submission.id} submitted")
    return submission


def auto_submit_quiz(
    db: Session,
    submission_id: str,
    student: User,
    now: Optional[datetime] = None,
) -> QuizSubmission:
    """Called when the client countdown reaches zero."""
    now = now or utcnow()
    repo = SqlAlchemyQuizSubmissionRepository(db)
    submission = _load_submission(repo, submission_id)
    _require_owner(submission, student, "You do not have permission to submit this quiz")
    quiz = get_quiz(db, submission.quiz_id)

    loaded_version, loaded_status = submission.version, submission.status.value
    submission.auto_submit(quiz.time_limit_minutes, now)
    repo.save(submission, expected_version=loaded_version, expected_status=loaded_status)
    logger.info(f"Quiz submission {submission.id} auto-submitted")
    return submission


def get_quiz_submission(db: Session, submission_id: str, user: User) -> Tuple[QuizSubmission, Quiz]:
    submission = _load_submission(SqlAlchemyQuizSubmissionRepository(db), submission_id)
    quiz = get_quiz(db, submission.quiz_id)
    if submission.student_id != user.id:
        _require_course_teacher(quiz.course, user, "You do not have permission to view this submission")
    return submission, quiz


def list_quiz_submissions(db: Session, quiz_id: str, teacher: User) -> List[QuizSubmission]:
    quiz = get_quiz(db, quiz_id)
    _require_course_teacher(quiz.course, teacher, "You do not have permission to view submissions in this course")
    return SqlAlchemyQuizSubmissionRepository(db).find_by_quiz_id(quiz.id)


def describe_timer(submission: QuizSubmission, quiz: Quiz, now: Optional[datetime] = None) -> QuizTimer:
    now = now or utcnow()
    limit = quiz.time_limit_minutes
    if submission.status == QuizSubmissionStatus.IN_PROGRESS:
        remaining = timing.calculate_remaining_time(submission.started_at, limit, now)
        expired = timing.is_expired(submission.started_at, limit, now)
    elif submission.status == QuizSubmissionStatus.NOT_STARTED:
        remaining = timing.calculate_remaining_time(None, limit, now)
        expired = False
    else:
        remaining, expired = 0, True
    return QuizTimer(
        status=submission.status,
        remaining_seconds=remaining,
        remaining_display=timing.format_time(remaining),
        expires_at=timing.calculate_expiration_time(submission.started_at, limit, now),
        is_expired=expired,
    )


def _validate_question_points(question_points: Sequence, question_count: int) -> None:
    if len(question_points) != question_count:
        raise ApplicationError(f"Question points array must have {question_count} elements (one per question)")
    for index, points in enumerate(question_points, start=1):
        if isinstance(points, bool) or not isinstance(points, Real) or points != points:
            raise ApplicationError(f"Question {index}: Points must be a valid number")
        if points < 0:
            raise ApplicationError(f"Question {index}: Points cannot be negative")


def grade_quiz_submission(
    db: Session,
    submission_id: str,
    teacher: User,
    question_points: Sequence[float],
    feedback: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> Tuple[QuizSubmission, Optional[str]]:
    """Grade (or re-grade) from per-question points.

    Returns the submission and a warning when the points do not add up to 100;
    the warning never blocks the save.
    """
    repo = SqlAlchemyQuizSubmissionRepository(db)
    submission = _load_submission(repo, submission_id)
    quiz = get_quiz(db, submission.quiz_id)
    _require_course_teacher(quiz.course, teacher, "You do not have permission to grade submissions in this course")

    _validate_question_points(question_points, len(quiz.questions or []))
    total = sum(question_points)
    if total < 0 or total > 100:
        raise ApplicationError("Total grade must be between 0 and 100")

    warning = None
    if total != 100:
        warning = f"Warning: The total points ({total:g}) do not equal 100. Please verify the point distribution."

    if expected_version is not None and expected_version != submission.version:
        raise ConcurrentModificationError(
            "Submission has been modified by another user. Please refresh and try again"
        )

    loaded_version = submission.version
    if submission.is_graded():
        submission.update_grade(total, feedback)
    else:
        submission.set_grade(total, feedback)
    repo.save(submission, expected_version=loaded_version)
    logger.info(f"Quiz submission {submission.id} graded {total:g} by {teacher.id} (v{submission.version})")
    return submission, warning
