"""
Enrollment registry: the enrollment ledger and its admissibility rules.
"""

import bisect
import logging
import threading
from typing import Any, Dict, List, Optional, Union

from ..config import AppConfig
from ..core.entities import Course, Enrollment, Student
from ..core.enums import Grade, Semester
from ..core.enrollment_policies import default_policies, semester_credits
from ..core.exceptions import EnrollmentError, InvalidArgumentError
from ..core.interfaces import EnrollmentPolicy

logger = logging.getLogger(__name__)

ALLOWED_CREDIT_VALUES = (1, 2, 3, 4, 5, 6)


class EnrollmentRegistry:
    """Owns every enrollment record and enforces the enrollment rules.

    Mutations and reads share one lock so the duplicate and credit-limit
    checks see the same ledger the insertion writes to.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig()
        self._enrollments: List[Enrollment] = []
        self._policies: List[EnrollmentPolicy] = default_policies(self._config.max_credits)
        self._allowed_credits = sorted(ALLOWED_CREDIT_VALUES)
        self._lock = threading.RLock()

    @property
    def max_credit_limit(self) -> int:
        return self._config.max_credits

    @property
    def policies(self) -> List[EnrollmentPolicy]:
        return list(self._policies)

    def enroll(self, student: Student, course: Course) -> Enrollment:
        """Enroll a student in a course.

        Raises InvalidArgumentError, InactiveStudentError,
        DuplicateEnrollmentError or CreditLimitExceededError; the first
        failing check wins.
        """
        self._require_entities(student, course)
        if course.credits <= 0:
            raise InvalidArgumentError(
                f"Course credits must be positive: {course.course_code}",
                details={'course_code': course.course_code, 'credits': course.credits}
            )

        with self._lock:
            try:
                for policy in self._policies:
                    policy.check(student, course, self._enrollments)
            except EnrollmentError as e:
                logger.warning("Enrollment of %s in %s rejected: %s",
                               student.reg_no, course.course_code, e.error_code)
                raise

            enrollment = Enrollment(student, course)
            self._enrollments.append(enrollment)
            student.add_enrollment(enrollment)

        logger.info("Enrolled %s in %s (%s)", student.reg_no, course.course_code, course.semester.value)
        return enrollment

    def drop(self, student: Student, course: Course) -> bool:
        """Drop a student from a course. Returns False if they were not enrolled."""
        self._require_entities(student, course)

        with self._lock:
            dropped = [e for e in self._enrollments
                       if e.matches(student.student_id, course.course_code)]
            removed = bool(dropped)
            if removed:
                self._enrollments = [e for e in self._enrollments if e not in dropped]
                for enrollment in dropped:
                    enrollment.student.remove_enrollment(course.course_code)

        if removed:
            logger.info("Dropped %s from %s", student.reg_no, course.course_code)
        return removed

    def assign_grade(self, enrollment: Enrollment, grade: Grade) -> None:
        """Set or overwrite the grade of an enrollment."""
        if enrollment is None:
            raise InvalidArgumentError("Enrollment is required")
        if not isinstance(grade, Grade):
            raise InvalidArgumentError(f"Not a grade: {grade!r}")

        with self._lock:
            previous = enrollment.grade
            enrollment.set_grade(grade)

        if previous is not None and previous != grade:
            logger.info("Regraded %s in %s: %s -> %s", enrollment.student.reg_no,
                        enrollment.course.course_code, previous.name, grade.name)
        else:
            logger.info("Graded %s in %s: %s", enrollment.student.reg_no,
                        enrollment.course.course_code, grade.name)

    @staticmethod
    def _require_entities(student: Student, course: Course) -> None:
        if student is None or course is None:
            raise InvalidArgumentError("Student and course are required")
        if not isinstance(student, Student) or not isinstance(course, Course):
            raise InvalidArgumentError(
                f"Expected a student and a course, got {type(student).__name__} and {type(course).__name__}"
            )

    def find_enrollment(self, student: Student, course: Course) -> Optional[Enrollment]:
        """Find the enrollment for a student and course, if any."""
        with self._lock:
            for enrollment in self._enrollments:
                if enrollment.matches(student.student_id, course.course_code):
                    return enrollment
            return None

    def enrollments_for(self, entity: Union[Student, Course]) -> List[Enrollment]:
        """Get the enrollments of a student or of a course, in ledger order."""
        if isinstance(entity, Student):
            return self.enrollments_for_student(entity)
        if isinstance(entity, Course):
            return self.enrollments_for_course(entity)
        raise InvalidArgumentError(f"Expected a student or a course, got {type(entity).__name__}")

    def enrollments_for_student(self, student: Student) -> List[Enrollment]:
        with self._lock:
            return [e for e in self._enrollments if e.student.student_id == student.student_id]

    def enrollments_for_course(self, course: Course) -> List[Enrollment]:
        with self._lock:
            return [e for e in self._enrollments if e.course.course_code == course.course_code]

    def all_enrollments(self) -> List[Enrollment]:
        with self._lock:
            return list(self._enrollments)

    def semester_credits(self, student: Student, semester: Semester) -> int:
        """Get the credits a student currently holds in a semester."""
        with self._lock:
            return semester_credits(student, semester, self._enrollments)

    def allowed_credit_values(self) -> List[int]:
        """Get the sorted credit values a course may carry."""
        return list(self._allowed_credits)

    def is_credit_value_allowed(self, credits: int) -> bool:
        index = bisect.bisect_left(self._allowed_credits, credits)
        return index < len(self._allowed_credits) and self._allowed_credits[index] == credits

    def get_statistics(self) -> Dict[str, Any]:
        """Get enrollment statistics."""
        with self._lock:
            graded = sum(1 for e in self._enrollments if e.is_graded)
            return {
                'total_enrollments': len(self._enrollments),
                'graded_enrollments': graded,
                'in_progress_enrollments': len(self._enrollments) - graded,
                'max_credit_limit': self.max_credit_limit,
                'active_policies': [p.get_policy_name() for p in self._policies]
            }
