import re
from dataclasses import dataclass

from lms.domain.errors import ValidationError

COURSE_CODE_LENGTH = 6
_CODE_RE = re.compile(r"^[A-Z0-9]{6}$", re.IGNORECASE)


@dataclass(frozen=True)
class CourseCode:
    """Six uppercase alphanumeric characters identifying a course for enrollment."""

    value: str

    @classmethod
    def create(cls, code: str) -> "CourseCode":
        if not isinstance(code, str):
            raise ValidationError("Course code must be a non-empty string")
        code = code.strip()
        if not code:
            raise ValidationError("Course code cannot be empty")
        if not _CODE_RE.match(code):
            raise ValidationError("Invalid course code format. Must be 6 alphanumeric characters (A-Z, 0-9)")
        return cls(code.upper())

    def __str__(self) -> str:
        return self.value
