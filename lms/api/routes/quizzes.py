from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lms.api.deps import get_db, get_current_user, get_current_teacher, get_current_student
from lms.models import User
from lms.schemas.quiz_submission import (
    AnswersRequest,
    QuizGradeRequest,
    QuizGradeResponse,
    QuizStartResponse,
    QuizSubmissionOut,
    QuizTimerOut,
)
from lms.services import quizzes

router = APIRouter()


def _answers(request: AnswersRequest) -> list:
    return [answer.model_dump() for answer in request.answers]


@router.post("/quizzes/{quiz_id}/start", response_model=QuizStartResponse)
def start_quiz(
    quiz_id: str,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
) -> QuizStartResponse:
    attempt = quizzes.start_quiz(db, quiz_id, current_student)
    timer = quizzes.describe_timer(attempt.submission, attempt.quiz)
    return QuizStartResponse(
        submission=QuizSubmissionOut.from_entity(attempt.submission),
        remaining_seconds=timer.remaining_seconds,
        time_expired=attempt.time_expired,
    )


@router.get("/quizzes/{quiz_id}/submissions", response_model=list[QuizSubmissionOut])
def list_submissions(
    quiz_id: str,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
):
    return [QuizSubmissionOut.from_entity(s) for s in quizzes.list_quiz_submissions(db, quiz_id, current_teacher)]


@router.get("/quiz-submissions/{submission_id}", response_model=QuizSubmissionOut)
def get_submission(
    submission_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> QuizSubmissionOut:
    submission, _ = quizzes.get_quiz_submission(db, submission_id, current_user)
    return QuizSubmissionOut.from_entity(submission)


@router.put("/quiz-submissions/{submission_id}/answers", response_model=QuizSubmissionOut)
def auto_save(
    submission_id: str,
    request: AnswersRequest,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
) -> QuizSubmissionOut:
    submission = quizzes.auto_save_answers(db, submission_id, current_student, _answers(request))
    return QuizSubmissionOut.from_entity(submission)


@router.post("/quiz-submissions/{submission_id}/submit", response_model=QuizSubmissionOut)
def submit(
    submission_id: str,
    request: AnswersRequest,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
) -> QuizSubmissionOut:
    submission = quizzes.submit_quiz(db, submission_id, current_student, _answers(request))
    return QuizSubmissionOut.from_entity(submission)


@router.post("/quiz-submissions/{submission_id}/auto-submit", response_model=QuizSubmissionOut)
def auto_submit(
    submission_id: str,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
) -> QuizSubmissionOut:
    submission = quizzes.auto_submit_quiz(db, submission_id, current_student)
    return QuizSubmissionOut.from_entity(submission)


@router.get("/quiz-submissions/{submission_id}/timer", response_model=QuizTimerOut)
def timer(
    submission_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> QuizTimerOut:
    submission, quiz = quizzes.get_quiz_submission(db, submission_id, current_user)
    info = quizzes.describe_timer(submission, quiz)
    return QuizTimerOut(
        status=info.status,
        remaining_seconds=info.remaining_seconds,
        remaining_display=info.remaining_display,
        expires_at=info.expires_at,
        is_expired=info.is_expired,
    )


@router.post("/quiz-submissions/{submission_id}/grade", response_model=QuizGradeResponse)
def grade(
    submission_id: str,
    request: QuizGradeRequest,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
) -> QuizGradeResponse:
    submission, warning = quizzes.grade_quiz_submission(
        db,
        submission_id,
        current_teacher,
        request.question_points,
        feedback=request.feedback,
        expected_version=request.version,
    )
    return QuizGradeResponse(submission=QuizSubmissionOut.from_entity(submission), warning=warning)
