from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from lms.domain.assignment_submission import AssignmentSubmission, AssignmentSubmissionStatus
from lms.domain.grade import Grade


class AssignmentSubmitRequest(BaseModel):
    content: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None


class AssignmentGradeRequest(BaseModel):
    grade: float
    feedback: Optional[str] = None
    version: Optional[int] = None


class AssignmentSubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    assignment_id: str
    student_id: str
    status: AssignmentSubmissionStatus
    version: int
    content: Optional[str] = None
    file_name: Optional[str] = None
    is_late: bool
    grade: Optional[float] = None
    letter_grade: Optional[str] = None
    feedback: Optional[str] = None
    submitted_at: Optional[datetime] = None
    graded_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, submission: AssignmentSubmission) -> "AssignmentSubmissionOut":
        out = cls.model_validate(submission)
        if submission.grade is not None:
            out.letter_grade = Grade(submission.grade).letter
        return out
