import math
from dataclasses import dataclass
from numbers import Real

from lms.domain.errors import ValidationError

MIN_GRADE = 0
MAX_GRADE = 100


def validate_grade_value(value) -> float:
    """Return ``value`` if it is a finite number in [0, 100], raise ValidationError otherwise."""
    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        raise ValidationError("Grade must be a valid number")
    if math.isinf(value) or value < MIN_GRADE or value > MAX_GRADE:
        raise ValidationError("Grade must be between 0 and 100")
    return value


@dataclass(frozen=True)
class Grade:
    value: float

    def __post_init__(self):
        validate_grade_value(self.value)

    @property
    def letter(self) -> str:
        if self.value >= 90:
            return "A"
        if self.value >= 80:
            return "B"
        if self.value >= 70:
            return "C"
        if self.value >= 60:
            return "D"
        return "F"

    @property
    def is_passing(self) -> bool:
        return self.value >= 60

    def __str__(self) -> str:
        return f"{self.value:g}"
