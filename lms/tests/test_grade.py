import pytest

from lms.domain.errors import ValidationError
from lms.domain.grade import Grade


@pytest.mark.parametrize(
    "value, letter, passing",
    [(100, "A", True), (90, "A", True), (89.9, "B", True), (70, "C", True), (60, "D", True), (59.5, "F", False), (0, "F", False)],
)
def test_letter_and_passing(value, letter, passing):
    grade = Grade(value)
    assert grade.letter == letter
    assert grade.is_passing is passing


def test_messages():
    with pytest.raises(ValidationError, match="Grade must be a valid number"):
        Grade(float("nan"))
    with pytest.raises(ValidationError, match="Grade must be between 0 and 100"):
        Grade(100.01)
