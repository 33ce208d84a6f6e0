from typing import List, Optional

from sqlalchemy.orm import Session

from lms.domain.quiz_submission import QuizSubmission
from lms.models import QuizSubmissionRecord
from lms.repositories._versioned import save_versioned


def to_entity(record: QuizSubmissionRecord) -> QuizSubmission:
    return QuizSubmission.reconstitute(
        id=record.id,
        quiz_id=record.quiz_id,
        student_id=record.student_id,
        answers=record.answers or [],
        started_at=record.started_at,
        submitted_at=record.submitted_at,
        grade=record.grade,
        feedback=record.feedback,
        status=record.status,
        version=record.version,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SqlAlchemyQuizSubmissionRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, submission_id: str) -> Optional[QuizSubmission]:
        record = self.db.query(QuizSubmissionRecord).filter(QuizSubmissionRecord.id == submission_id).first()
        return to_entity(record) if record else None

    def find_by_quiz_and_student(self, quiz_id: str, student_id: str) -> Optional[QuizSubmission]:
        record = (
            self.db.query(QuizSubmissionRecord)
            .filter(QuizSubmissionRecord.quiz_id == quiz_id, QuizSubmissionRecord.student_id == student_id)
            .first()
        )
        return to_entity(record) if record else None

    def find_by_quiz_id(self, quiz_id: str) -> List[QuizSubmission]:
        records = (
            self.db.query(QuizSubmissionRecord)
            .filter(QuizSubmissionRecord.quiz_id == quiz_id)
            .order_by(QuizSubmissionRecord.submitted_at.desc())
            .all()
        )
        return [to_entity(record) for record in records]

    def save(
        self,
        submission: QuizSubmission,
        expected_version: Optional[int] = None,
        expected_status: Optional[str] = None,
    ) -> QuizSubmission:
        save_versioned(self.db, QuizSubmissionRecord, submission.to_dict(), expected_version, expected_status)
        return submission
