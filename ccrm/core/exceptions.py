"""
Custom exceptions for the CCRM platform.
"""

from typing import Optional, Any, Dict


class CcrmException(Exception):
    """Base exception for all CCRM-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(CcrmException):
    """Raised when data validation fails."""
    pass


class ConfigurationError(CcrmException):
    """Raised when configuration is invalid."""
    pass


class ResourceNotFoundError(CcrmException):
    """Raised when a requested resource is not found."""
    pass


class DuplicateEntityError(CcrmException):
    """Raised when attempting to create a duplicate entity."""
    pass


class EnrollmentError(CcrmException):
    """Base class for rejected enrollment operations."""
    pass


class InvalidArgumentError(EnrollmentError):
    """Raised when a missing or malformed entity is passed to the registry."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="INVALID_ARGUMENT", details=details)


class InactiveStudentError(EnrollmentError):
    """Raised when enrolling a student whose status is not ACTIVE."""

    def __init__(self, reg_no: str):
        super().__init__(
            f"Cannot enroll inactive student: {reg_no}",
            error_code="INACTIVE_STUDENT",
            details={'reg_no': reg_no}
        )
        self.reg_no = reg_no


class DuplicateEnrollmentError(EnrollmentError):
    """Raised when the student already holds an enrollment in the course."""

    def __init__(self, reg_no: str, course_code: str):
        super().__init__(
            f"Student {reg_no} is already enrolled in course {course_code}",
            error_code="DUPLICATE_ENROLLMENT",
            details={'reg_no': reg_no, 'course_code': course_code}
        )
        self.reg_no = reg_no
        self.course_code = course_code


class CreditLimitExceededError(EnrollmentError):
    """Raised when an enrollment would push semester credits over the limit."""

    def __init__(self, current_credits: int, course_credits: int, limit: int):
        super().__init__(
            "Enrollment would exceed maximum credit limit. "
            f"Current: {current_credits}, Course: {course_credits}, Limit: {limit}",
            error_code="CREDIT_LIMIT_EXCEEDED",
            details={
                'current_credits': current_credits,
                'course_credits': course_credits,
                'limit': limit
            }
        )
        self.current_credits = current_credits
        self.course_credits = course_credits
        self.limit = limit
