"""
In-memory course catalog.
"""

import logging
import threading
from typing import Callable, List, Optional

from ..core.entities import Course, Instructor
from ..core.enums import Semester

logger = logging.getLogger(__name__)


class CourseService:
    """Keeps the course catalog, unique by course code."""

    def __init__(self):
        self._courses: List[Course] = []
        self._lock = threading.RLock()

    def add_course(self, course: Course) -> bool:
        """Add a course. Returns False for None or a duplicate code."""
        if course is None:
            return False
        with self._lock:
            if any(c.course_code == course.course_code for c in self._courses):
                return False
            self._courses.append(course)
        logger.debug("Added course %s", course.course_code)
        return True

    def find_by_code(self, course_code: str) -> Optional[Course]:
        with self._lock:
            return next((c for c in self._courses if c.course_code == course_code), None)

    def search_courses(self, predicate: Callable[[Course], bool]) -> List[Course]:
        with self._lock:
            return [c for c in self._courses if predicate(c)]

    def find_by_instructor(self, instructor: Instructor) -> List[Course]:
        return self.search_courses(
            lambda c: c.instructor is not None and c.instructor.instructor_id == instructor.instructor_id)

    def find_by_department(self, department: str) -> List[Course]:
        wanted = department.lower()
        return self.search_courses(lambda c: c.department.lower() == wanted)

    def find_by_semester(self, semester: Semester) -> List[Course]:
        return self.search_courses(lambda c: c.semester == semester)

    def get_courses_with_min_credits(self, min_credits: int) -> List[Course]:
        return self.search_courses(lambda c: c.credits >= min_credits)

    def get_courses_sorted_by_title(self) -> List[Course]:
        with self._lock:
            return sorted(self._courses, key=lambda c: c.title.lower())

    def remove_course(self, course_code: str) -> bool:
        with self._lock:
            remaining = [c for c in self._courses if c.course_code != course_code]
            removed = len(remaining) != len(self._courses)
            self._courses = remaining
            return removed

    def get_all_courses(self) -> List[Course]:
        with self._lock:
            return list(self._courses)

    def get_course_count(self) -> int:
        with self._lock:
            return len(self._courses)

    def get_total_credits(self) -> int:
        with self._lock:
            return sum(c.credits for c in self._courses)
