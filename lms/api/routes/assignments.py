from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lms.api.deps import get_db, get_current_teacher, get_current_student
from lms.models import User
from lms.schemas.assignment_submission import (
    AssignmentGradeRequest,
    AssignmentSubmissionOut,
    AssignmentSubmitRequest,
)
from lms.services import assignments

router = APIRouter()


@router.post("/assignments/{assignment_id}/submit", response_model=AssignmentSubmissionOut)
def submit_assignment(
    assignment_id: str,
    request: AssignmentSubmitRequest,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
) -> AssignmentSubmissionOut:
    submission = assignments.submit_assignment(
        db,
        assignment_id,
        current_student,
        content=request.content,
        file_path=request.file_path,
        file_name=request.file_name,
    )
    return AssignmentSubmissionOut.from_entity(submission)


@router.get("/assignments/{assignment_id}/my-submission", response_model=AssignmentSubmissionOut)
def my_submission(
    assignment_id: str,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
) -> AssignmentSubmissionOut:
    return AssignmentSubmissionOut.from_entity(assignments.get_my_submission(db, assignment_id, current_student))


@router.get("/assignments/{assignment_id}/submissions", response_model=list[AssignmentSubmissionOut])
def list_submissions(
    assignment_id: str,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
):
    items = assignments.list_assignment_submissions(db, assignment_id, current_teacher)
    return [AssignmentSubmissionOut.from_entity(item) for item in items]


@router.post("/submissions/{submission_id}/grade", response_model=AssignmentSubmissionOut)
def assign_grade(
    submission_id: str,
    request: AssignmentGradeRequest,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
) -> AssignmentSubmissionOut:
    submission = assignments.grade_assignment_submission(
        db, submission_id, current_teacher, request.grade, request.feedback, expected_version=request.version
    )
    return AssignmentSubmissionOut.from_entity(submission)


@router.put("/submissions/{submission_id}/grade", response_model=AssignmentSubmissionOut)
def update_grade(
    submission_id: str,
    request: AssignmentGradeRequest,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
) -> AssignmentSubmissionOut:
    submission = assignments.grade_assignment_submission(
        db,
        submission_id,
        current_teacher,
        request.grade,
        request.feedback,
        expected_version=request.version,
        regrade=True,
    )
    return AssignmentSubmissionOut.from_entity(submission)
