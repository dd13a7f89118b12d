"""Tests for the enrollment registry."""

import threading

import pytest

from ccrm.config import AppConfig
from ccrm.core.entities import Student
from ccrm.core.enums import Grade, Semester, StudentStatus
from ccrm.core.exceptions import (
    CreditLimitExceededError, DuplicateEnrollmentError, EnrollmentError,
    InactiveStudentError, InvalidArgumentError
)
from ccrm.services import EnrollmentRegistry

from conftest import make_course


def fill_credits(registry, student, total, semester=Semester.FALL, prefix="FILL"):
    """Enroll the student in 6- and smaller-credit courses adding up to total."""
    index = 0
    while total > 0:
        credits = min(6, total)
        registry.enroll(student, make_course(f"{prefix}{index}", credits=credits, semester=semester))
        total -= credits
        index += 1


class TestEnroll:

    def test_enroll_records_in_both_views(self, registry, student, course):
        enrollment = registry.enroll(student, course)

        by_student = registry.enrollments_for(student)
        by_course = registry.enrollments_for(course)
        assert [e.course.course_code for e in by_student] == ["CS101"]
        assert [e.student.student_id for e in by_course] == [1]
        assert student.enrollments == [enrollment]
        assert enrollment.grade is None

    def test_missing_arguments(self, registry, student, course):
        with pytest.raises(InvalidArgumentError):
            registry.enroll(None, course)
        with pytest.raises(InvalidArgumentError):
            registry.enroll(student, None)

    def test_rejects_wrong_argument_types(self, registry, student, course):
        with pytest.raises(InvalidArgumentError):
            registry.enroll(student, "CS101")
        with pytest.raises(InvalidArgumentError):
            registry.enroll("2024CS001", course)
        assert registry.all_enrollments() == []
        assert student.enrollments == []

    def test_non_positive_credits_rechecked(self, registry, student, course):
        course._credits = 0
        with pytest.raises(InvalidArgumentError):
            registry.enroll(student, course)
        assert registry.all_enrollments() == []

    def test_duplicate_is_rejected_and_ledger_unchanged(self, registry, student, course):
        registry.enroll(student, course)
        before = registry.all_enrollments()

        for _ in range(2):
            with pytest.raises(DuplicateEnrollmentError) as exc_info:
                registry.enroll(student, course)
            assert exc_info.value.reg_no == "2024CS001"
            assert exc_info.value.course_code == "CS101"

        assert registry.all_enrollments() == before
        assert len(student.enrollments) == 1

    def test_inactive_student_always_rejected(self, registry, student, course):
        registry.enroll(student, course)
        student.set_status(StudentStatus.INACTIVE)

        # inactive wins over duplicate
        with pytest.raises(InactiveStudentError):
            registry.enroll(student, course)
        with pytest.raises(InactiveStudentError):
            registry.enroll(student, make_course("CS102"))

    def test_inactive_checked_before_credit_limit(self, student):
        registry = EnrollmentRegistry(AppConfig(max_credits=4))
        student.deactivate()
        with pytest.raises(InactiveStudentError):
            registry.enroll(student, make_course("BIG", credits=6))

    def test_errors_share_a_base_class(self, registry, student, course):
        registry.enroll(student, course)
        with pytest.raises(EnrollmentError) as exc_info:
            registry.enroll(student, course)
        assert exc_info.value.error_code == "DUPLICATE_ENROLLMENT"


class TestCreditLimit:

    def test_boundary(self, registry, student):
        fill_credits(registry, student, 22)
        assert registry.semester_credits(student, Semester.FALL) == 22

        with pytest.raises(CreditLimitExceededError) as exc_info:
            registry.enroll(student, make_course("C3", credits=3))
        assert (exc_info.value.current_credits, exc_info.value.course_credits, exc_info.value.limit) == (22, 3, 24)

        registry.enroll(student, make_course("C2", credits=2))
        assert registry.semester_credits(student, Semester.FALL) == 24

        with pytest.raises(CreditLimitExceededError):
            registry.enroll(student, make_course("C1", credits=1))

    def test_limit_is_per_semester(self, registry, student):
        fill_credits(registry, student, 24)
        registry.enroll(student, make_course("SP1", credits=6, semester=Semester.SPRING))
        assert registry.semester_credits(student, Semester.SPRING) == 6

    def test_limit_is_per_student(self, registry, student, other_student):
        fill_credits(registry, student, 24)
        registry.enroll(other_student, make_course("FILL0", credits=6))

    def test_configured_limit(self, student):
        registry = EnrollmentRegistry(AppConfig(max_credits=6))
        assert registry.max_credit_limit == 6
        registry.enroll(student, make_course("A", credits=4))
        with pytest.raises(CreditLimitExceededError) as exc_info:
            registry.enroll(student, make_course("B", credits=3))
        assert exc_info.value.limit == 6

    def test_duplicate_checked_before_credit_limit(self, student):
        registry = EnrollmentRegistry(AppConfig(max_credits=4))
        course = make_course("A", credits=4)
        registry.enroll(student, course)
        with pytest.raises(DuplicateEnrollmentError):
            registry.enroll(student, course)


class TestDrop:

    def test_drop_not_enrolled(self, registry, student, course):
        registry.enroll(student, make_course("OTHER"))
        before = registry.all_enrollments()
        assert registry.drop(student, course) is False
        assert registry.all_enrollments() == before

    def test_drop_then_reenroll(self, registry, student, course):
        registry.enroll(student, course)
        assert registry.drop(student, course) is True
        assert all(e.course.course_code != "CS101" for e in registry.enrollments_for(student))
        assert student.enrollments == []

        registry.enroll(student, course)
        assert len(registry.enrollments_for(student)) == 1

    def test_drop_keeps_relative_order(self, registry, student, other_student):
        a, b, c = make_course("A"), make_course("B"), make_course("C")
        registry.enroll(student, a)
        registry.enroll(other_student, a)
        registry.enroll(student, b)
        registry.enroll(student, c)

        registry.drop(student, b)
        assert [(e.student.student_id, e.course.course_code) for e in registry.all_enrollments()] == [
            (1, "A"), (2, "A"), (1, "C")
        ]
        assert [e.course.course_code for e in student.enrollments] == ["A", "C"]

    def test_drop_only_affects_that_student(self, registry, student, other_student, course):
        registry.enroll(student, course)
        registry.enroll(other_student, course)
        registry.drop(student, course)
        assert [e.student.student_id for e in registry.enrollments_for(course)] == [2]

    def test_drop_rejects_wrong_argument_types(self, registry, student, course):
        registry.enroll(student, course)
        with pytest.raises(InvalidArgumentError):
            registry.drop(student, "CS101")
        with pytest.raises(InvalidArgumentError):
            registry.drop(1, course)
        with pytest.raises(InvalidArgumentError):
            registry.drop(None, course)
        assert len(registry.all_enrollments()) == 1

    def test_drop_by_equal_student_updates_enrolled_instance(self, registry, student, course):
        registry.enroll(student, course)
        same_id = Student(student.student_id, student.full_name, student.email, student.reg_no)
        assert registry.drop(same_id, course) is True
        assert registry.all_enrollments() == []
        assert student.enrollments == []


class TestGrades:

    def test_assign_and_reassign(self, registry, student, course):
        enrollment = registry.enroll(student, course)
        registry.assign_grade(enrollment, Grade.B)
        registry.assign_grade(enrollment, Grade.S)
        assert enrollment.grade is Grade.S

    def test_rejects_non_grade(self, registry, student, course):
        enrollment = registry.enroll(student, course)
        with pytest.raises(InvalidArgumentError):
            registry.assign_grade(enrollment, "A")
        with pytest.raises(InvalidArgumentError):
            registry.assign_grade(None, Grade.A)

    def test_find_enrollment(self, registry, student, course):
        assert registry.find_enrollment(student, course) is None
        enrollment = registry.enroll(student, course)
        assert registry.find_enrollment(student, course) is enrollment


class TestViews:

    def test_views_are_copies(self, registry, student, course):
        registry.enroll(student, course)
        registry.enrollments_for(student).clear()
        registry.enrollments_for(course).clear()
        registry.all_enrollments().clear()
        assert len(registry.all_enrollments()) == 1

    def test_enrollments_for_rejects_other_types(self, registry):
        with pytest.raises(InvalidArgumentError):
            registry.enrollments_for("CS101")

    def test_allowed_credit_values(self, registry):
        assert registry.allowed_credit_values() == [1, 2, 3, 4, 5, 6]
        assert registry.is_credit_value_allowed(1)
        assert registry.is_credit_value_allowed(6)
        assert not registry.is_credit_value_allowed(0)
        assert not registry.is_credit_value_allowed(7)

    def test_statistics(self, registry, student, course):
        enrollment = registry.enroll(student, course)
        registry.enroll(student, make_course("CS102"))
        registry.assign_grade(enrollment, Grade.A)
        stats = registry.get_statistics()
        assert stats['total_enrollments'] == 2
        assert stats['graded_enrollments'] == 1
        assert stats['in_progress_enrollments'] == 1
        assert stats['max_credit_limit'] == 24


class TestConcurrency:

    def test_concurrent_duplicate_enrollments(self, registry, student, course):
        results = []

        def worker():
            try:
                registry.enroll(student, course)
                results.append("ok")
            except DuplicateEnrollmentError:
                results.append("dup")

        threads = [threading.Thread(target=worker) for _ in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count("ok") == 1
        assert len(registry.enrollments_for(student)) == 1

    def test_concurrent_credit_limit(self, registry):
        student = Student(3, "Carol Davis", "carol@university.edu", "2024CS003")
        courses = [make_course(f"X{i}", credits=6) for i in range(10)]
        threads = [threading.Thread(target=_enroll_quietly, args=(registry, student, c)) for c in courses]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert registry.semester_credits(student, Semester.FALL) == 24


def _enroll_quietly(registry, student, course):
    try:
        registry.enroll(student, course)
    except CreditLimitExceededError:
        pass
