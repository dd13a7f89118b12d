"""
Core interfaces and abstract base classes for the CCRM platform.
"""

from abc import ABC, abstractmethod
from typing import List


class Profiled(ABC):
    """Capability for records that carry an identity profile."""

    @abstractmethod
    def get_profile(self) -> str:
        """Get a one-line description of the record's identity."""
        pass


class Validatable(ABC):
    """Interface for entities that can check their own structure."""

    @abstractmethod
    def get_validation_errors(self) -> List[str]:
        """Get the list of violated constraints; empty when valid."""
        pass

    def is_valid(self) -> bool:
        """Check whether the entity has no validation errors."""
        return not self.get_validation_errors()


class EnrollmentPolicy(ABC):
    """Abstract base class for enrollment admissibility rules."""

    @abstractmethod
    def check(self, student: 'Student', course: 'Course', ledger: List['Enrollment']) -> None:
        """Raise an EnrollmentError if the student may not take the course."""
        pass

    @abstractmethod
    def get_policy_name(self) -> str:
        """Get the name of this policy."""
        pass
