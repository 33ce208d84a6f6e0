from typing import List, Optional

from sqlalchemy.orm import Session

from lms.domain.assignment_submission import AssignmentSubmission
from lms.models import AssignmentSubmissionRecord
from lms.repositories._versioned import save_versioned


def to_entity(record: AssignmentSubmissionRecord) -> AssignmentSubmission:
    return AssignmentSubmission.reconstitute(
        id=record.id,
        assignment_id=record.assignment_id,
        student_id=record.student_id,
        content=record.content,
        file_path=record.file_path,
        file_name=record.file_name,
        grade=record.grade,
        feedback=record.feedback,
        is_late=record.is_late,
        status=record.status,
        version=record.version,
        submitted_at=record.submitted_at,
        graded_at=record.graded_at,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SqlAlchemyAssignmentSubmissionRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, submission_id: str) -> Optional[AssignmentSubmission]:
        record = (
            self.db.query(AssignmentSubmissionRecord)
            .filter(AssignmentSubmissionRecord.id == submission_id)
            .first()
        )
        return to_entity(record) if record else None

    def find_by_assignment_and_student(self, assignment_id: str, student_id: str) -> Optional[AssignmentSubmission]:
        record = (
            self.db.query(AssignmentSubmissionRecord)
            .filter(
                AssignmentSubmissionRecord.assignment_id == assignment_id,
                AssignmentSubmissionRecord.student_id == student_id,
            )
            .first()
        )
        return to_entity(record) if record else None

    def find_by_assignment_id(self, assignment_id: str) -> List[AssignmentSubmission]:
        records = (
            self.db.query(AssignmentSubmissionRecord)
            .filter(AssignmentSubmissionRecord.assignment_id == assignment_id)
            .order_by(AssignmentSubmissionRecord.submitted_at.desc())
            .all()
        )
        return [to_entity(record) for record in records]

    def save(
        self,
        submission: AssignmentSubmission,
        expected_version: Optional[int] = None,
        expected_status: Optional[str] = None,
    ) -> AssignmentSubmission:
        save_versioned(self.db, AssignmentSubmissionRecord, submission.to_dict(), expected_version, expected_status)
        return submission
