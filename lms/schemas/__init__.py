from lms.schemas.auth import LoginRequest, LoginResponse, LoginUser, MeResponse
from lms.schemas.course import CourseCreate, CourseOut, EnrollRequest, EnrollmentOut
from lms.schemas.quiz_submission import (
    AnswersRequest,
    QuizGradeRequest,
    QuizGradeResponse,
    QuizStartResponse,
    QuizSubmissionOut,
    QuizTimerOut,
)
from lms.schemas.assignment_submission import (
    AssignmentGradeRequest,
    AssignmentSubmissionOut,
    AssignmentSubmitRequest,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "MeResponse",
    "CourseCreate",
    "CourseOut",
    "EnrollRequest",
    "EnrollmentOut",
    "AnswersRequest",
    "QuizGradeRequest",
    "QuizGradeResponse",
    "QuizStartResponse",
    "QuizSubmissionOut",
    "QuizTimerOut",
    "AssignmentGradeRequest",
    "AssignmentSubmissionOut",
    "AssignmentSubmitRequest",
]
