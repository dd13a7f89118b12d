"""
Services module containing the registry, calculators and stores.
"""

from .enrollment_service import EnrollmentRegistry, ALLOWED_CREDIT_VALUES
from .transcript_service import TranscriptCalculator, TranscriptReport, TranscriptRow
from .student_service import StudentService
from .course_service import CourseService

__all__ = [
    "EnrollmentRegistry",
    "ALLOWED_CREDIT_VALUES",
    "TranscriptCalculator",
    "TranscriptReport",
    "TranscriptRow",
    "StudentService",
    "CourseService",
]
