"""
Enumerations and constants for the CCRM platform.
"""

from enum import Enum
from typing import List

from .exceptions import ValidationError


class StudentStatus(Enum):
    """Registration status of a student."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Semester(Enum):
    """Academic terms a course can be offered in."""
    SPRING = "SPRING"
    SUMMER = "SUMMER"
    FALL = "FALL"


class Grade(Enum):
    """Letter grades; each value is the grade point of the letter."""
    S = 10.0
    A = 9.0
    B = 8.0
    C = 7.0
    D = 6.0
    F = 0.0

    @property
    def grade_point(self) -> float:
        return self.value

    @property
    def letter(self) -> str:
        return self.name

    @classmethod
    def from_letter(cls, letter: str) -> "Grade":
        """Parse a letter grade, ignoring case and surrounding whitespace."""
        try:
            return cls[letter.strip().upper()]
        except (KeyError, AttributeError):
            raise ValidationError(
                f"Unknown grade: {letter!r}",
                error_code="INVALID_GRADE",
                details={'allowed': cls.letters()}
            )

    @classmethod
    def letters(cls) -> List[str]:
        return [grade.name for grade in cls]

    def __str__(self) -> str:
        return self.name


class ReportFormat(Enum):
    """Supported transcript output formats."""
    TEXT = "text"
    JSON = "json"
