from datetime import datetime

import pytest

from lms.domain.assignment_submission import AssignmentSubmission, AssignmentSubmissionStatus
from lms.domain.errors import (
    ConcurrentModificationError,
    InvalidOperationError,
    InvalidStateError,
    ValidationError,
)

NOW = datetime(2026, 3, 1, 9, 0, 0)


def submitted(is_late=False):
    submission = AssignmentSubmission.create("assignment-1", "student-1", content="draft")
    submission.submit(is_late, NOW)
    return submission


def test_create_defaults():
    submission = AssignmentSubmission.create("assignment-1", "student-1")
    assert submission.status == AssignmentSubmissionStatus.NOT_SUBMITTED
    assert submission.version == 0
    assert not submission.is_submitted()


def test_required_fields():
    with pytest.raises(ValidationError, match="Assignment ID is required"):
        AssignmentSubmission.create("", "student-1")
    with pytest.raises(ValidationError, match="Version must be non-negative"):
        AssignmentSubmission.create("a", "s", version=-1)
    with pytest.raises(ValidationError, match="Graded submission must have a grade"):
        AssignmentSubmission.create("a", "s", status="GRADED")


def test_submit_records_lateness():
    submission = submitted(is_late=True)
    assert submission.status == AssignmentSubmissionStatus.SUBMITTED
    assert submission.is_late
    assert submission.submitted_at == NOW
    assert submission.version == 0


def test_submit_twice_rejected():
    submission = submitted()
    with pytest.raises(InvalidStateError, match="already been submitted"):
        submission.submit(False)


def test_resubmit_updates_timestamp_and_lateness():
    submission = submitted()
    later = datetime(2026, 3, 5, 12, 0, 0)
    submission.update_content(content="final")
    submission.resubmit(True, later)
    assert submission.content == "final"
    assert submission.submitted_at == later
    assert submission.is_late
    assert submission.version == 0


def test_resubmit_requires_submission():
    submission = AssignmentSubmission.create("assignment-1", "student-1")
    with pytest.raises(InvalidStateError):
        submission.resubmit(False)


def test_update_content_keeps_missing_fields():
    submission = AssignmentSubmission.create("a", "s", content="text", file_name="a.pdf", file_path="/x/a.pdf")
    submission.update_content(content="new text")
    assert submission.content == "new text"
    assert submission.file_name == "a.pdf"


def test_grading_locks_content():
    submission = submitted()
    submission.assign_grade(75)
    with pytest.raises(InvalidOperationError, match="Cannot update content after grading has started"):
        submission.update_content(content="sneaky")
    with pytest.raises(InvalidOperationError, match="Cannot resubmit after grading has started"):
        submission.resubmit(False)


def test_assign_grade_bumps_version():
    submission = submitted()
    submission.assign_grade(88.5, "Nice", expected_version=0)
    assert submission.status == AssignmentSubmissionStatus.GRADED
    assert submission.grade == 88.5
    assert submission.graded_at is not None
    assert submission.version == 1


def test_assign_grade_requires_submission():
    submission = AssignmentSubmission.create("a", "s")
    with pytest.raises(InvalidStateError, match="Cannot grade submission that has not been submitted"):
        submission.assign_grade(50)


def test_stale_version_leaves_entity_untouched():
    submission = submitted()
    submission.assign_grade(70, expected_version=0)
    with pytest.raises(ConcurrentModificationError, match="modified by another user"):
        submission.update_grade(95, expected_version=0)
    assert submission.grade == 70
    assert submission.version == 1


def test_update_grade():
    submission = submitted()
    submission.assign_grade(70)
    submission.update_grade(80, "Revised", expected_version=1)
    assert submission.grade == 80
    assert submission.feedback == "Revised"
    assert submission.version == 2


def test_empty_feedback_is_kept():
    submission = submitted()
    submission.assign_grade(70, "")
    assert submission.feedback == ""
    submission.update_grade(75, "")
    assert submission.feedback == ""


def test_update_grade_requires_graded():
    submission = submitted()
    with pytest.raises(InvalidStateError):
        submission.update_grade(80)


@pytest.mark.parametrize("grade", [-0.1, 101, True, "90"])
def test_invalid_grade(grade):
    submission = submitted()
    with pytest.raises(ValidationError):
        submission.assign_grade(grade)
    assert submission.status == AssignmentSubmissionStatus.SUBMITTED


def test_mark_as_late():
    submission = submitted()
    submission.mark_as_late()
    assert submission.is_late


def test_second_grader_with_stale_version_is_rejected():
    submission = AssignmentSubmission.create("assignment-1", "student-1")
    submission.submit(False)
    submission.assign_grade(85, "ok", 0)
    assert submission.version == 1
    with pytest.raises(ConcurrentModificationError, match="Submission has been modified by another user"):
        submission.assign_grade(90, "x", 0)
    assert submission.grade == 85
