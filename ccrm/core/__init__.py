"""
Core module containing the entity model, enrollment rules and errors.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *
from .enrollment_policies import *

__all__ = [
    # Entities
    "Student",
    "Instructor",
    "Course",
    "Enrollment",

    # Interfaces
    "Profiled",
    "Validatable",
    "EnrollmentPolicy",

    # Policies
    "ActiveStudentPolicy",
    "DuplicateEnrollmentPolicy",
    "CreditLimitPolicy",
    "default_policies",
    "semester_credits",

    # Enums
    "StudentStatus",
    "Semester",
    "Grade",
    "ReportFormat",

    # Exceptions
    "CcrmException",
    "ValidationError",
    "ConfigurationError",
    "ResourceNotFoundError",
    "DuplicateEntityError",
    "EnrollmentError",
    "InvalidArgumentError",
    "InactiveStudentError",
    "DuplicateEnrollmentError",
    "CreditLimitExceededError",
]
