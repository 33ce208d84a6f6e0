from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict

from lms.domain.grade import Grade
from lms.domain.quiz_submission import QuizSubmission, QuizSubmissionStatus


class QuizAnswerIn(BaseModel):
    question_index: int
    answer: Union[int, str]


class QuizAnswerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    question_index: int
    answer: Union[int, str]


class AnswersRequest(BaseModel):
    answers: List[QuizAnswerIn]


class QuizGradeRequest(BaseModel):
    question_points: List[float]
    feedback: Optional[str] = None
    version: Optional[int] = None


class QuizSubmissionOut(BaseModel):
    id: str
    quiz_id: str
    student_id: str
    status: QuizSubmissionStatus
    version: int
    answers: List[QuizAnswerOut]
    started_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    grade: Optional[float] = None
    letter_grade: Optional[str] = None
    feedback: Optional[str] = None

    @classmethod
    def from_entity(cls, submission: QuizSubmission) -> "QuizSubmissionOut":
        return cls(
            id=submission.id,
            quiz_id=submission.quiz_id,
            student_id=submission.student_id,
            status=submission.status,
            version=submission.version,
            answers=[QuizAnswerOut.model_validate(answer) for answer in submission.answers],
            started_at=submission.started_at,
            submitted_at=submission.submitted_at,
            grade=submission.grade,
            letter_grade=Grade(submission.grade).letter if submission.grade is not None else None,
            feedback=submission.feedback,
        )


class QuizStartResponse(BaseModel):
    submission: QuizSubmissionOut
    remaining_seconds: int
    time_expired: bool


class QuizTimerOut(BaseModel):
    status: QuizSubmissionStatus
    remaining_seconds: int
    remaining_display: str
    expires_at: Optional[datetime] = None
    is_expired: bool


class QuizGradeResponse(BaseModel):
    submission: QuizSubmissionOut
    warning: Optional[str] = None
