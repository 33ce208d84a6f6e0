import random

import pytest

from lms.domain.course_code import CourseCode
from lms.domain.errors import ValidationError
from lms.services.course_codes import MAX_ATTEMPTS, CourseCodeGenerationError, CourseCodeGenerator


class FakeChecker:
    def __init__(self, taken=0):
        self.taken = taken
        self.calls = []

    def is_unique(self, code):
        self.calls.append(code)
        return len(self.calls) > self.taken


class BrokenChecker:
    def is_unique(self, code):
        raise RuntimeError("database unavailable")


def test_course_code_normalises():
    assert CourseCode.create(" abc123 ").value == "ABC123"


@pytest.mark.parametrize("code", ["", "   ", "ABC12", "ABC1234", "ABC-12", None])
def test_course_code_rejects_bad_input(code):
    with pytest.raises(ValidationError):
        CourseCode.create(code)


def test_generate_returns_valid_code():
    code = CourseCodeGenerator(FakeChecker(), rng=random.Random(42)).generate()
    assert len(code.value) == 6
    assert code.value.isalnum() and code.value.upper() == code.value


def test_generate_retries_on_collision():
    checker = FakeChecker(taken=MAX_ATTEMPTS - 1)
    CourseCodeGenerator(checker).generate()
    assert len(checker.calls) == MAX_ATTEMPTS


def test_generate_gives_up_after_max_attempts():
    checker = FakeChecker(taken=MAX_ATTEMPTS)
    with pytest.raises(CourseCodeGenerationError, match="Failed to generate unique course code after 5 attempts"):
        CourseCodeGenerator(checker).generate()
    assert len(checker.calls) == MAX_ATTEMPTS


def test_checker_errors_propagate():
    with pytest.raises(RuntimeError):
        CourseCodeGenerator(BrokenChecker()).generate()
