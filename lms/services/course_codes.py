"""Random course codes with a bounded collision retry.

36**6 (about 2.2 billion) codes make a collision rare; five attempts is a
safety margin, not a proof of uniqueness. The database unique constraint on
``courses.code`` remains the final guard.
"""
import logging
import random
from typing import Optional

from lms.domain.course_code import COURSE_CODE_LENGTH, CourseCode
from lms.domain.errors import DomainError
from lms.domain.repositories import CourseCodeChecker

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


class CourseCodeGenerationError(DomainError):
    pass


class CourseCodeGenerator:
    def __init__(self, checker: CourseCodeChecker, rng: Optional[random.Random] = None):
        self.checker = checker
        self.rng = rng or random.SystemRandom()

    def generate(self) -> CourseCode:
        for attempt in range(1, MAX_ATTEMPTS + 1):
            code = self._random_code()
            if self.checker.is_unique(code):
                return code
            logger.info(f"Course code collision on attempt {attempt}: {code}")

        raise CourseCodeGenerationError(
            f"Failed to generate unique course code after {MAX_ATTEMPTS} attempts"
        )

    def _random_code(self) -> CourseCode:
        return CourseCode.create("".join(self.rng.choice(ALPHABET) for _ in range(COURSE_CODE_LENGTH)))
