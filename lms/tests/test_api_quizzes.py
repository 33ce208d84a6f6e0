from datetime import timedelta

from fastapi import status

from lms.domain.clock import utcnow
from lms.models import QuizSubmissionRecord


def _start(client, seed_data, headers):
    response = client.post(f"/quizzes/{seed_data['quiz'].id}/start", headers=headers)
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()


def _rewind(db_session, submission_id, minutes):
    record = db_session.query(QuizSubmissionRecord).filter(QuizSubmissionRecord.id == submission_id).one()
    record.started_at = utcnow() - timedelta(minutes=minutes)
    db_session.commit()


def test_start_save_and_submit(client, seed_data, student_headers):
    data = _start(client, seed_data, student_headers)
    submission_id = data["submission"]["id"]
    assert data["submission"]["status"] == "IN_PROGRESS"
    assert data["time_expired"] is False
    assert 1795 <= data["remaining_seconds"] <= 1800

    answers = {"answers": [{"question_index": 0, "answer": 1}, {"question_index": 1, "answer": "a loop repeats"}]}
    response = client.put(f"/quiz-submissions/{submission_id}/answers", json=answers, headers=student_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["answers"][1]["answer"] == "a loop repeats"

    response = client.post(f"/quiz-submissions/{submission_id}/submit", json=answers, headers=student_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "SUBMITTED"

    response = client.post(f"/quizzes/{seed_data['quiz'].id}/start", headers=student_headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "You have already submitted this quiz"


def test_start_requires_enrollment(client, seed_data, outsider_headers):
    response = client.post(f"/quizzes/{seed_data['quiz'].id}/start", headers=outsider_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_teacher_cannot_start_quiz(client, seed_data, teacher_headers):
    response = client.post(f"/quizzes/{seed_data['quiz'].id}/start", headers=teacher_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_late_submit_is_auto_submitted(client, db_session, seed_data, student_headers):
    submission_id = _start(client, seed_data, student_headers)["submission"]["id"]
    saved = {"answers": [{"question_index": 0, "answer": 0}]}
    client.put(f"/quiz-submissions/{submission_id}/answers", json=saved, headers=student_headers)
    _rewind(db_session, submission_id, 31)

    response = client.post(
        f"/quiz-submissions/{submission_id}/submit",
        json={"answers": [{"question_index": 0, "answer": 1}]},
        headers=student_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Quiz time has expired. The quiz has been auto-submitted."

    response = client.get(f"/quiz-submissions/{submission_id}", headers=student_headers)
    assert response.json()["status"] == "SUBMITTED"
    assert response.json()["answers"] == [{"question_index": 0, "answer": 0}]


def test_auto_save_after_expiry_rejected(client, db_session, seed_data, student_headers):
    submission_id = _start(client, seed_data, student_headers)["submission"]["id"]
    _rewind(db_session, submission_id, 45)
    response = client.put(
        f"/quiz-submissions/{submission_id}/answers", json={"answers": []}, headers=student_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Quiz time has expired. Answers cannot be saved."


def test_auto_submit_endpoint(client, db_session, seed_data, student_headers):
    submission_id = _start(client, seed_data, student_headers)["submission"]["id"]

    response = client.post(f"/quiz-submissions/{submission_id}/auto-submit", headers=student_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Cannot auto-submit before time expires"

    _rewind(db_session, submission_id, 30)
    response = client.post(f"/quiz-submissions/{submission_id}/auto-submit", headers=student_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "SUBMITTED"


def test_resume_after_expiry_reports_time_expired(client, db_session, seed_data, student_headers):
    submission_id = _start(client, seed_data, student_headers)["submission"]["id"]
    _rewind(db_session, submission_id, 40)
    data = _start(client, seed_data, student_headers)
    assert data["time_expired"] is True
    assert data["remaining_seconds"] == 0
    assert data["submission"]["status"] == "SUBMITTED"


def test_timer(client, db_session, seed_data, student_headers):
    submission_id = _start(client, seed_data, student_headers)["submission"]["id"]
    _rewind(db_session, submission_id, 10)
    response = client.get(f"/quiz-submissions/{submission_id}/timer", headers=student_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["is_expired"] is False
    assert 1195 <= data["remaining_seconds"] <= 1200
    assert data["remaining_display"].startswith("19:") or data["remaining_display"] == "20:00"


def test_other_student_cannot_touch_submission(client, seed_data, student_headers, outsider_headers):
    submission_id = _start(client, seed_data, student_headers)["submission"]["id"]
    response = client.post(
        f"/quiz-submissions/{submission_id}/submit", json={"answers": []}, headers=outsider_headers
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    response = client.get(f"/quiz-submissions/{submission_id}", headers=outsider_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_teacher_grades_and_regrades(client, seed_data, student_headers, teacher_headers):
    submission_id = _start(client, seed_data, student_headers)["submission"]["id"]
    client.post(f"/quiz-submissions/{submission_id}/submit", json={"answers": []}, headers=student_headers)

    response = client.post(
        f"/quiz-submissions/{submission_id}/grade",
        json={"question_points": [45, 40], "feedback": "Solid", "version": 1},
        headers=teacher_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["submission"]["grade"] == 85
    assert data["submission"]["letter_grade"] == "B"
    assert data["submission"]["version"] == 2
    assert "do not equal 100" in data["warning"]

    stale = client.post(
        f"/quiz-submissions/{submission_id}/grade",
        json={"question_points": [50, 50], "version": 1},
        headers=teacher_headers,
    )
    assert stale.status_code == status.HTTP_409_CONFLICT

    response = client.get(f"/quizzes/{seed_data['quiz'].id}/submissions", headers=teacher_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [item["grade"] for item in response.json()] == [85]


def test_grading_in_progress_attempt_is_rejected(client, seed_data, student_headers, teacher_headers):
    submission_id = _start(client, seed_data, student_headers)["submission"]["id"]
    response = client.post(
        f"/quiz-submissions/{submission_id}/grade",
        json={"question_points": [50, 50]},
        headers=teacher_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Can only grade submitted submissions"
