from datetime import date

import pytest

from ccrm.config import AppConfig
from ccrm.core.entities import Course, Instructor, Student
from ccrm.core.enums import Semester
from ccrm.services import EnrollmentRegistry, TranscriptCalculator


def make_course(code, credits=3, semester=Semester.FALL, title=None, department="Computer Science",
                instructor=None):
    return Course(
        course_code=code,
        title=title or f"Course {code}",
        credits=credits,
        department=department,
        semester=semester,
        instructor=instructor,
    )


@pytest.fixture
def config():
    return AppConfig()


@pytest.fixture
def registry(config):
    return EnrollmentRegistry(config)


@pytest.fixture
def calculator(config):
    return TranscriptCalculator(config)


@pytest.fixture
def student():
    return Student(1, "Alice Johnson", "alice@university.edu", "2024CS001",
                   registration_date=date(2024, 8, 1))


@pytest.fixture
def other_student():
    return Student(2, "Bob Smith", "bob@university.edu", "2024CS002",
                   registration_date=date(2024, 8, 1))


@pytest.fixture
def instructor():
    return Instructor(10, "Grace Hopper", "hopper@university.edu", "Computer Science")


@pytest.fixture
def course():
    return make_course("CS101", credits=4)
