"""
Core entities for the CCRM platform.

Students and instructors share no base class; both implement the
``Profiled`` capability so profile formatting stays polymorphic.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .enums import Grade, Semester, StudentStatus
from .interfaces import Profiled, Validatable
from .exceptions import ValidationError


def _identity(entity_id: int, full_name: str, email: str) -> str:
    return f"ID: {entity_id}, Name: {full_name}, Email: {email}"


class Student(Profiled, Validatable):
    """Student entity owning its ordered list of enrollments."""

    def __init__(self, student_id: int, full_name: str, email: str, reg_no: str,
                 status: StudentStatus = StudentStatus.ACTIVE,
                 registration_date: Optional[date] = None):
        self._student_id = student_id
        self._full_name = full_name
        self._email = email
        self._reg_no = reg_no
        self._status = status
        self._registration_date = registration_date or date.today()
        self._enrollments: List['Enrollment'] = []

    @property
    def student_id(self) -> int:
        return self._student_id

    @property
    def id(self) -> int:
        return self._student_id

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def email(self) -> str:
        return self._email

    @property
    def reg_no(self) -> str:
        return self._reg_no

    @property
    def status(self) -> StudentStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == StudentStatus.ACTIVE

    @property
    def registration_date(self) -> date:
        return self._registration_date

    @property
    def enrollments(self) -> List['Enrollment']:
        """Copy of the student's enrollments in insertion order."""
        return list(self._enrollments)

    def set_full_name(self, full_name: str) -> None:
        self._full_name = full_name

    def set_email(self, email: str) -> None:
        self._email = email

    def set_status(self, status: StudentStatus) -> None:
        self._status = status

    def activate(self) -> None:
        """Mark the student as active."""
        self._status = StudentStatus.ACTIVE

    def deactivate(self) -> None:
        """Mark the student as inactive."""
        self._status = StudentStatus.INACTIVE

    def add_enrollment(self, enrollment: 'Enrollment') -> None:
        """Append an enrollment created by the registry."""
        self._enrollments.append(enrollment)

    def remove_enrollment(self, course_code: str) -> bool:
        """Remove the enrollment for a course code. Returns True if one was removed."""
        remaining = [e for e in self._enrollments if e.course.course_code != course_code]
        removed = len(remaining) != len(self._enrollments)
        self._enrollments = remaining
        return removed

    def get_validation_errors(self) -> List[str]:
        errors = []
        if (isinstance(self._student_id, bool) or not isinstance(self._student_id, int)
                or self._student_id <= 0):
            errors.append("Student ID must be positive")
        if not self._full_name or not self._full_name.strip():
            errors.append("Student name cannot be empty")
        if not self._email or "@" not in self._email:
            errors.append("Valid email is required")
        if not self._reg_no or not self._reg_no.strip():
            errors.append("Registration number cannot be empty")
        if self._registration_date > date.today():
            errors.append("Registration date cannot be in the future")
        return errors

    def get_profile(self) -> str:
        return (f"Student Profile - {_identity(self._student_id, self._full_name, self._email)}, "
                f"Registration: {self._reg_no}, Status: {self._status.value}, "
                f"Courses: {len(self._enrollments)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert student to dictionary."""
        return {
            'student_id': self._student_id,
            'full_name': self._full_name,
            'email': self._email,
            'reg_no': self._reg_no,
            'status': self._status.value,
            'registration_date': self._registration_date.isoformat(),
            'enrollments': [e.course.course_code for e in self._enrollments]
        }

    def __str__(self) -> str:
        return (f"Student [{_identity(self._student_id, self._full_name, self._email)}, "
                f"RegNo: {self._reg_no}, Status: {self._status.value}, "
                f"Registered: {self._registration_date.isoformat()}]")

    def __repr__(self) -> str:
        return f"Student(student_id={self._student_id}, reg_no={self._reg_no!r}, status={self._status.value})"


class Instructor(Profiled):
    """Instructor record; courses only hold a reference to it."""

    def __init__(self, instructor_id: int, full_name: str, email: str, department: str):
        self._instructor_id = instructor_id
        self._full_name = full_name
        self._email = email
        self._department = department

    @property
    def instructor_id(self) -> int:
        return self._instructor_id

    @property
    def id(self) -> int:
        return self._instructor_id

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def email(self) -> str:
        return self._email

    @property
    def department(self) -> str:
        return self._department

    def set_department(self, department: str) -> None:
        self._department = department

    def get_profile(self) -> str:
        return (f"Instructor Profile - {_identity(self._instructor_id, self._full_name, self._email)}, "
                f"Department: {self._department}")

    def __str__(self) -> str:
        return f"Instructor [{_identity(self._instructor_id, self._full_name, self._email)}, Department: {self._department}]"


class Course:
    """Immutable course, validated in full at construction."""

    def __init__(self, course_code: str, title: str, credits: int, department: str,
                 semester: Semester, instructor: Optional[Instructor] = None):
        errors = []
        if not course_code or not str(course_code).strip():
            errors.append("Course code is required")
        if not title or not str(title).strip():
            errors.append("Course title is required")
        if isinstance(credits, bool) or not isinstance(credits, int) or credits <= 0:
            errors.append("Course credits must be a positive integer")
        if not department or not str(department).strip():
            errors.append("Course department is required")
        if not isinstance(semester, Semester):
            errors.append("Course semester is required")
        if errors:
            raise ValidationError(
                "Invalid course: " + "; ".join(errors),
                error_code="INVALID_COURSE",
                details={'errors': errors}
            )

        self._course_code = course_code
        self._title = title
        self._credits = credits
        self._department = department
        self._semester = semester
        self._instructor = instructor

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "Course":
        """Build a course from a mapping of named fields.

        ``semester`` may be given as a ``Semester`` or its name.
        """
        values = dict(fields)
        semester = values.get('semester')
        if isinstance(semester, str):
            try:
                values['semester'] = Semester[semester.strip().upper()]
            except KeyError:
                raise ValidationError(f"Unknown semester: {semester!r}", error_code="INVALID_COURSE")
        try:
            return cls(**values)
        except TypeError as e:
            raise ValidationError(f"Invalid course fields: {e}", error_code="INVALID_COURSE")

    @property
    def course_code(self) -> str:
        return self._course_code

    @property
    def title(self) -> str:
        return self._title

    @property
    def credits(self) -> int:
        return self._credits

    @property
    def department(self) -> str:
        return self._department

    @property
    def semester(self) -> Semester:
        return self._semester

    @property
    def instructor(self) -> Optional[Instructor]:
        return self._instructor

    def to_dict(self) -> Dict[str, Any]:
        """Convert course to dictionary."""
        return {
            'course_code': self._course_code,
            'title': self._title,
            'credits': self._credits,
            'department': self._department,
            'semester': self._semester.value,
            'instructor': self._instructor.full_name if self._instructor else None
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Course):
            return NotImplemented
        return self._course_code == other._course_code

    def __hash__(self) -> int:
        return hash(self._course_code)

    def __str__(self) -> str:
        instructor = self._instructor.full_name if self._instructor else "TBD"
        return (f"Course [{self._course_code}: {self._title}, Credits: {self._credits}, "
                f"Department: {self._department}, Semester: {self._semester.value}, "
                f"Instructor: {instructor}]")


class Enrollment:
    """Link between one student and one course, with an optional grade."""

    def __init__(self, student: Student, course: Course,
                 enrollment_date: Optional[datetime] = None):
        self._student = student
        self._course = course
        self._enrollment_date = enrollment_date or datetime.now(timezone.utc)
        self._grade: Optional[Grade] = None

    @property
    def student(self) -> Student:
        return self._student

    @property
    def course(self) -> Course:
        return self._course

    @property
    def enrollment_date(self) -> datetime:
        return self._enrollment_date

    @property
    def grade(self) -> Optional[Grade]:
        return self._grade

    @property
    def is_graded(self) -> bool:
        return self._grade is not None

    def set_grade(self, grade: Grade) -> None:
        """Set or overwrite the grade."""
        self._grade = grade

    def matches(self, student_id: int, course_code: str) -> bool:
        return self._student.student_id == student_id and self._course.course_code == course_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert enrollment to dictionary."""
        return {
            'student_id': self._student.student_id,
            'reg_no': self._student.reg_no,
            'course_code': self._course.course_code,
            'semester': self._course.semester.value,
            'credits': self._course.credits,
            'enrollment_date': self._enrollment_date.isoformat(),
            'grade': self._grade.name if self._grade else None
        }

    def __str__(self) -> str:
        grade = self._grade.name if self._grade else "Not Assigned"
        return (f"Enrollment [Student: {self._student.full_name}, Course: {self._course.course_code}, "
                f"Date: {self._enrollment_date.date().isoformat()}, Grade: {grade}]")
