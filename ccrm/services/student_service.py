"""
In-memory student store.
"""

import logging
import threading
from typing import List, Optional

from ..core.entities import Student

logger = logging.getLogger(__name__)


class StudentService:
    """Keeps the registered students, unique by id and registration number."""

    def __init__(self):
        self._students: List[Student] = []
        self._lock = threading.RLock()

    def add_student(self, student: Student) -> bool:
        """Add a student. Returns False for None or a duplicate id/reg no."""
        if student is None:
            return False
        with self._lock:
            if self._is_duplicate(student):
                return False
            self._students.append(student)
        logger.debug("Added student %s", student.reg_no)
        return True

    def find_by_id(self, student_id: int) -> Optional[Student]:
        with self._lock:
            return next((s for s in self._students if s.student_id == student_id), None)

    def find_by_reg_no(self, reg_no: str) -> Optional[Student]:
        with self._lock:
            return next((s for s in self._students if s.reg_no == reg_no), None)

    def update_student(self, student: Student) -> bool:
        """Replace the stored student with the same id."""
        with self._lock:
            for index, existing in enumerate(self._students):
                if existing.student_id == student.student_id:
                    self._students[index] = student
                    return True
            return False

    def remove_student(self, student_id: int) -> bool:
        with self._lock:
            remaining = [s for s in self._students if s.student_id != student_id]
            removed = len(remaining) != len(self._students)
            self._students = remaining
            return removed

    def get_all_students(self) -> List[Student]:
        with self._lock:
            return list(self._students)

    def get_active_students(self) -> List[Student]:
        with self._lock:
            return [s for s in self._students if s.is_active]

    def get_student_count(self) -> int:
        with self._lock:
            return len(self._students)

    def _is_duplicate(self, student: Student) -> bool:
        return any(s.student_id == student.student_id or s.reg_no == student.reg_no
                   for s in self._students)
