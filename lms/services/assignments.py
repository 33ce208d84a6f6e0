import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from lms.domain.assignment_submission import AssignmentSubmission
from lms.domain.clock import utcnow
from lms.domain.errors import InvalidOperationError
from lms.models import Assignment, SubmissionType, User
from lms.repositories import SqlAlchemyAssignmentSubmissionRepository
from lms.services.errors import ApplicationError, ForbiddenError, NotFoundError
from lms.services.quizzes import is_enrolled

logger = logging.getLogger(__name__)


def get_assignment(db: Session, assignment_id: str) -> Assignment:
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFoundError("Assignment not found")
    return assignment


def _require_course_teacher(assignment: Assignment, teacher: User, message: str) -> None:
    if assignment.course.teacher_id != teacher.id:
        raise ForbiddenError(message)


def _validate_submission_type(assignment: Assignment, content: Optional[str], file_path: Optional[str]) -> None:
    has_text = content is not None and bool(content.strip())
    has_file = file_path is not None
    submission_type = assignment.submission_type
    if submission_type == SubmissionType.FILE and not has_file:
        raise ApplicationError("This assignment requires a file upload")
    if submission_type == SubmissionType.TEXT and not has_text:
        raise ApplicationError("This assignment requires text submission")
    if submission_type == SubmissionType.BOTH and not (has_file and has_text):
        raise ApplicationError("This assignment requires both file upload and text submission")


def submit_assignment(
    db: Session,
    assignment_id: str,
    student: User,
    content: Optional[str] = None,
    file_path: Optional[str] = None,
    file_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AssignmentSubmission:
    """First call submits; later calls replace the content and resubmit until grading starts."""
    now = now or utcnow()
    assignment = get_assignment(db, assignment_id)
    if not is_enrolled(db, student.id, assignment.course_id):
        raise ForbiddenError("You must be enrolled in the course to submit this assignment")

    repo = SqlAlchemyAssignmentSubmissionRepository(db)
    submission = repo.find_by_assignment_and_student(assignment.id, student.id)
    if submission is not None and submission.is_graded():
        raise InvalidOperationError("Cannot resubmit after grading has started")
    if assignment.grading_started:
        raise ApplicationError("This assignment is closed and cannot accept new submissions")
    _validate_submission_type(assignment, content, file_path)

    is_late = now > assignment.due_date

    if submission is None:
        submission = AssignmentSubmission.create(
            assignment.id,
            student.id,
            content=content,
            file_path=file_path,
            file_name=file_name,
        )
        submission.submit(is_late, now)
        repo.save(submission)
        logger.info(f"Assignment {assignment.id} submitted by {student.id} (late={is_late})")
        return submission

    loaded_version, loaded_status = submission.version, submission.status.value
    submission.update_content(content=content, file_path=file_path, file_name=file_name)
    submission.resubmit(is_late, now)
    repo.save(submission, expected_version=loaded_version, expected_status=loaded_status)
    logger.info(f"Assignment {assignment.id} resubmitted by {student.id} (late={is_late})")
    return submission


def grade_assignment_submission(
    db: Session,
    submission_id: str,
    teacher: User,
    grade: float,
    feedback: Optional[str] = None,
    expected_version: Optional[int] = None,
    regrade: bool = False,
) -> AssignmentSubmission:
    repo = SqlAlchemyAssignmentSubmissionRepository(db)
    submission = repo.find_by_id(submission_id)
    if not submission:
        raise NotFoundError("Submission not found")
    assignment = get_assignment(db, submission.assignment_id)
    _require_course_teacher(assignment, teacher, "You do not have permission to grade submissions in this course")
    if assignment.course.archived:
        raise ApplicationError("Cannot grade submissions in an archived course")

    loaded_version = submission.version
    if regrade:
        submission.update_grade(grade, feedback, expected_version=expected_version)
    else:
        submission.assign_grade(grade, feedback, expected_version=expected_version)
    # Committed with the submission below.
    assignment.grading_started = True
    repo.save(submission, expected_version=loaded_version)
    logger.info(f"Assignment submission {submission.id} graded {grade} by {teacher.id} (v{submission.version})")
    return submission


def get_my_submission(db: Session, assignment_id: str, student: User) -> AssignmentSubmission:
    assignment = get_assignment(db, assignment_id)
    submission = SqlAlchemyAssignmentSubmissionRepository(db).find_by_assignment_and_student(
        assignment.id, student.id
    )
    if not submission:
        raise NotFoundError("Submission not found")
    return submission


def list_assignment_submissions(db: Session, assignment_id: str, teacher: User) -> List[AssignmentSubmission]:
    assignment = get_assignment(db, assignment_id)
    _require_course_teacher(assignment, teacher, "You do not have permission to view submissions in this course")
    return SqlAlchemyAssignmentSubmissionRepository(db).find_by_assignment_id(assignment.id)
