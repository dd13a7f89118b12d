from typing import List

from .entities import Course, Enrollment, Student
from .enums import Semester
from .exceptions import CreditLimitExceededError, DuplicateEnrollmentError, InactiveStudentError
from .interfaces import EnrollmentPolicy


def semester_credits(student: Student, semester: Semester, ledger: List[Enrollment]) -> int:
    """Sum the credits a student holds in one semester."""
    return sum(e.course.credits for e in ledger
               if e.student.student_id == student.student_id and e.course.semester == semester)


class ActiveStudentPolicy(EnrollmentPolicy):
    def check(self, student: Student, course: Course, ledger: List[Enrollment]) -> None:
        if not student.is_active:
            raise InactiveStudentError(student.reg_no)

    def get_policy_name(self) -> str:
        return "ActiveStudentPolicy"


class DuplicateEnrollmentPolicy(EnrollmentPolicy):
    def check(self, student: Student, course: Course, ledger: List[Enrollment]) -> None:
        if any(e.matches(student.student_id, course.course_code) for e in ledger):
            raise DuplicateEnrollmentError(student.reg_no, course.course_code)

    def get_policy_name(self) -> str:
        return "DuplicateEnrollmentPolicy"


class CreditLimitPolicy(EnrollmentPolicy):
    """Caps a student's credits per semester, the candidate course included."""

    def __init__(self, max_credits: int = 24):
        self._max_credits = max_credits

    @property
    def max_credits(self) -> int:
        return self._max_credits

    def check(self, student: Student, course: Course, ledger: List[Enrollment]) -> None:
        current = semester_credits(student, course.semester, ledger)
        if current + course.credits > self._max_credits:
            raise CreditLimitExceededError(current, course.credits, self._max_credits)

    def get_policy_name(self) -> str:
        return "CreditLimitPolicy"


def default_policies(max_credits: int = 24) -> List[EnrollmentPolicy]:
    """Policies in the order their failures take precedence."""
    return [
        ActiveStudentPolicy(),
        DuplicateEnrollmentPolicy(),
        CreditLimitPolicy(max_credits),
    ]
