"""
Main entry point for the CCRM platform.
"""

import logging
from typing import Optional

from .config import AppConfig
from .core.entities import Student, Instructor, Course
from .core.enums import Grade, Semester
from .core.exceptions import EnrollmentError
from .services import EnrollmentRegistry, TranscriptCalculator, StudentService, CourseService
from .api.rest_api import CcrmRestAPI


class CcrmPlatform:
    """Main platform class that wires configuration, stores and services."""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig()
        self._students = StudentService()
        self._courses = CourseService()
        self._registry = EnrollmentRegistry(self._config)
        self._calculator = TranscriptCalculator(self._config)
        self._rest_api = CcrmRestAPI(
            self._students,
            self._courses,
            self._registry,
            self._calculator,
            title=self._config.app_name,
            version=self._config.app_version
        )

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def students(self) -> StudentService:
        return self._students

    @property
    def courses(self) -> CourseService:
        return self._courses

    @property
    def registry(self) -> EnrollmentRegistry:
        return self._registry

    @property
    def calculator(self) -> TranscriptCalculator:
        return self._calculator

    @property
    def app(self):
        return self._rest_api.app

    def create_sample_data(self):
        """Create sample data for demonstration."""
        print("Creating sample data...")

        turing = Instructor(1, "Alan Turing", "turing@university.edu", "Computer Science")
        courses = [
            Course(course_code="CS101", title="Introduction to Computer Science", credits=4,
                   department="Computer Science", semester=Semester.FALL, instructor=turing),
            Course(course_code="MA101", title="Calculus I", credits=3,
                   department="Mathematics", semester=Semester.FALL),
            Course(course_code="PH101", title="Physics I", credits=4,
                   department="Physics", semester=Semester.SPRING),
        ]
        for course in courses:
            self._courses.add_course(course)

        students = [
            Student(1, "Alice Johnson", "alice@university.edu", "2024CS001"),
            Student(2, "Bob Smith", "bob@university.edu", "2024CS002"),
        ]
        for student in students:
            self._students.add_student(student)

        print(f"✓ {self._courses.get_course_count()} courses, {self._students.get_student_count()} students")

    def run_demo(self):
        """Run a demonstration of the platform."""
        print("Running CCRM demonstration...")
        self.create_sample_data()

        alice = self._students.find_by_reg_no("2024CS001")
        bob = self._students.find_by_reg_no("2024CS002")
        cs101 = self._courses.find_by_code("CS101")
        ma101 = self._courses.find_by_code("MA101")

        print("\n=== Enrollment Demo ===")
        for student, course in [(alice, cs101), (alice, ma101), (bob, cs101), (alice, cs101)]:
            try:
                self._registry.enroll(student, course)
                print(f"Enrolled {student.reg_no} in {course.course_code}")
            except EnrollmentError as e:
                print(f"Rejected {student.reg_no} in {course.course_code}: {e.message}")

        self._registry.assign_grade(self._registry.find_enrollment(alice, cs101), Grade.A)
        self._registry.assign_grade(self._registry.find_enrollment(bob, cs101), Grade.B)

        print()
        print(self._calculator.transcript(alice))
        print(self._calculator.summary(bob))
        print(f"Enrollment statistics: {self._registry.get_statistics()}")
        print("\n✓ Demo completed")

    def start_rest_server(self, host: str = "0.0.0.0", port: int = 8000):
        """Start the REST server and block until it exits."""
        import uvicorn

        print(f"✓ REST server starting on {host}:{port}")
        print(f"  - API Docs: http://localhost:{port}/docs")
        uvicorn.run(self.app, host=host, port=port, log_level=self._config.log_level.lower())


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Campus Course Registration Management")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="REST server host")
    parser.add_argument("--port", type=int, default=8000, help="REST server port")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")
    parser.add_argument("--config", type=str, help="Configuration file path")

    args = parser.parse_args()

    config = AppConfig.load(args.config) if args.config else AppConfig()
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    platform = CcrmPlatform(config)

    try:
        if args.demo:
            platform.run_demo()
        else:
            platform.start_rest_server(args.host, args.port)
    except KeyboardInterrupt:
        print("\nShutting down...")


if __name__ == "__main__":
    main()
