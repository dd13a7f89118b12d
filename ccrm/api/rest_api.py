"""
REST API implementation for the CCRM platform using FastAPI.
"""

import threading
from typing import Optional, Dict, Any, List
from datetime import date, datetime, timezone
from pydantic import BaseModel, Field

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from ..core.entities import Student, Instructor, Course, Enrollment
from ..core.enums import Grade, ReportFormat, Semester, StudentStatus
from ..core.exceptions import (
    CcrmException, ValidationError, ResourceNotFoundError, DuplicateEntityError,
    InvalidArgumentError, InactiveStudentError, DuplicateEnrollmentError,
    CreditLimitExceededError
)
from ..services import EnrollmentRegistry, TranscriptCalculator, StudentService, CourseService


ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    ResourceNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateEntityError: status.HTTP_409_CONFLICT,
    DuplicateEnrollmentError: status.HTTP_409_CONFLICT,
    InactiveStudentError: 422,
    CreditLimitExceededError: 422,
}


# Pydantic models for API
class StudentCreate(BaseModel):
    student_id: int = Field(..., ge=1)
    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., pattern=r'^[^@]+@[^@]+$')
    reg_no: str = Field(..., min_length=1, max_length=20)
    status: str = Field("ACTIVE", pattern=r'^(ACTIVE|INACTIVE)$')
    registration_date: Optional[date] = None


class StudentStatusUpdate(BaseModel):
    status: str = Field(..., pattern=r'^(ACTIVE|INACTIVE)$')


class StudentResponse(BaseModel):
    student_id: int
    full_name: str
    email: str
    reg_no: str
    status: str
    registration_date: date
    enrollments: List[str] = []
    gpa: float


class InstructorPayload(BaseModel):
    instructor_id: int = Field(..., ge=1)
    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., pattern=r'^[^@]+@[^@]+$')
    department: str = Field(..., min_length=1, max_length=100)


class CourseCreate(BaseModel):
    course_code: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1, max_length=200)
    credits: int
    department: str = Field(..., min_length=1, max_length=100)
    semester: str = Field(..., pattern=r'^(SPRING|SUMMER|FALL)$')
    instructor: Optional[InstructorPayload] = None


class CourseResponse(BaseModel):
    course_code: str
    title: str
    credits: int
    department: str
    semester: str
    instructor: Optional[str] = None


class EnrollmentRequest(BaseModel):
    student_id: int = Field(..., ge=1)
    course_code: str = Field(..., min_length=1)


class GradeRequest(BaseModel):
    grade: str = Field(..., min_length=1, max_length=1)


class EnrollmentResponse(BaseModel):
    student_id: int
    reg_no: str
    course_code: str
    semester: str
    credits: int
    enrollment_date: datetime
    grade: Optional[str] = None


class DropResponse(BaseModel):
    dropped: bool


class GpaResponse(BaseModel):
    student_id: int
    gpa: float


class CcrmRestAPI:
    """REST API implementation for the CCRM platform."""

    def __init__(self, students: StudentService, courses: CourseService,
                 registry: EnrollmentRegistry, calculator: TranscriptCalculator,
                 title: str = "CCRM API", version: str = "1.0.0"):
        self._students = students
        self._courses = courses
        self._registry = registry
        self._calculator = calculator
        self._lock = threading.RLock()

        self.app = FastAPI(
            title=title,
            description="Campus course registration: students, courses, enrollments and transcripts",
            version=version,
            docs_url="/docs",
            redoc_url="/redoc"
        )

        self._setup_error_handlers()
        self._setup_routes()

    def _setup_error_handlers(self):
        @self.app.exception_handler(CcrmException)
        async def ccrm_error(request: Request, exc: CcrmException):
            return JSONResponse(
                status_code=self._status_for(exc),
                content={"detail": exc.message, "error_code": exc.error_code, "details": exc.details}
            )

    @staticmethod
    def _status_for(exc: CcrmException) -> int:
        for error_type in type(exc).__mro__:
            if error_type in ERROR_STATUS:
                return ERROR_STATUS[error_type]
        return status.HTTP_400_BAD_REQUEST

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": self.app.title,
                "version": self.app.version,
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Student endpoints
        @self.app.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
        async def create_student(student_data: StudentCreate):
            """Register a new student."""
            student = Student(
                student_id=student_data.student_id,
                full_name=student_data.full_name,
                email=student_data.email,
                reg_no=student_data.reg_no,
                status=StudentStatus(student_data.status),
                registration_date=student_data.registration_date
            )
            errors = student.get_validation_errors()
            if errors:
                raise ValidationError("; ".join(errors), error_code="INVALID_STUDENT",
                                      details={'errors': errors})

            with self._lock:
                if not self._students.add_student(student):
                    raise DuplicateEntityError(
                        f"Student {student.student_id}/{student.reg_no} already exists",
                        error_code="DUPLICATE_STUDENT"
                    )
            return self._student_to_response(student)

        @self.app.get("/students", response_model=List[StudentResponse])
        async def list_students(skip: int = 0, limit: int = 100):
            """List all students."""
            students = self._students.get_all_students()[skip:skip + limit]
            return [self._student_to_response(student) for student in students]

        @self.app.get("/students/{student_id}", response_model=StudentResponse)
        async def get_student(student_id: int):
            """Get a student by ID."""
            return self._student_to_response(self._get_student(student_id))

        @self.app.patch("/students/{student_id}/status", response_model=StudentResponse)
        async def update_student_status(student_id: int, update: StudentStatusUpdate):
            """Activate or deactivate a student."""
            student = self._get_student(student_id)
            with self._lock:
                student.set_status(StudentStatus(update.status))
            return self._student_to_response(student)

        # Course endpoints
        @self.app.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
        async def create_course(course_data: CourseCreate):
            """Add a course to the catalog."""
            if not self._registry.is_credit_value_allowed(course_data.credits):
                raise ValidationError(
                    f"Credits must be one of {self._registry.allowed_credit_values()}",
                    error_code="INVALID_CREDITS"
                )

            instructor = None
            if course_data.instructor is not None:
                instructor = Instructor(**course_data.instructor.model_dump())

            course = Course(
                course_code=course_data.course_code,
                title=course_data.title,
                credits=course_data.credits,
                department=course_data.department,
                semester=Semester(course_data.semester),
                instructor=instructor
            )

            with self._lock:
                if not self._courses.add_course(course):
                    raise DuplicateEntityError(
                        f"Course {course.course_code} already exists",
                        error_code="DUPLICATE_COURSE"
                    )
            return self._course_to_response(course)

        @self.app.get("/courses", response_model=List[CourseResponse])
        async def list_courses(semester: Optional[str] = None, department: Optional[str] = None):
            """List courses, optionally filtered by semester and department."""
            courses = self._courses.get_all_courses()
            if semester:
                courses = [c for c in courses if c.semester.value == semester.upper()]
            if department:
                courses = [c for c in courses if c.department.lower() == department.lower()]
            return [self._course_to_response(course) for course in courses]

        @self.app.get("/courses/{course_code}", response_model=CourseResponse)
        async def get_course(course_code: str):
            """Get a course by code."""
            return self._course_to_response(self._get_course(course_code))

        @self.app.get("/courses/{course_code}/enrollments", response_model=List[EnrollmentResponse])
        async def get_course_enrollments(course_code: str):
            """Get the enrollments of a course."""
            course = self._get_course(course_code)
            return [self._enrollment_to_response(e) for e in self._registry.enrollments_for(course)]

        # Enrollment endpoints
        @self.app.post("/enrollments", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
        async def enroll_student(enrollment_data: EnrollmentRequest):
            """Enroll a student in a course."""
            with self._lock:
                student = self._get_student(enrollment_data.student_id)
                course = self._get_course(enrollment_data.course_code)
                enrollment = self._registry.enroll(student, course)
            return self._enrollment_to_response(enrollment)

        @self.app.delete("/enrollments/{student_id}/{course_code}", response_model=DropResponse)
        async def drop_enrollment(student_id: int, course_code: str):
            """Drop a student from a course."""
            with self._lock:
                student = self._get_student(student_id)
                course = self._get_course(course_code)
                return DropResponse(dropped=self._registry.drop(student, course))

        @self.app.put("/enrollments/{student_id}/{course_code}/grade", response_model=EnrollmentResponse)
        async def assign_grade(student_id: int, course_code: str, grade_data: GradeRequest):
            """Assign or change the grade of an enrollment."""
            grade = Grade.from_letter(grade_data.grade)
            with self._lock:
                student = self._get_student(student_id)
                course = self._get_course(course_code)
                enrollment = self._registry.find_enrollment(student, course)
                if enrollment is None:
                    raise ResourceNotFoundError(
                        f"Student {student.reg_no} is not enrolled in {course.course_code}",
                        error_code="ENROLLMENT_NOT_FOUND"
                    )
                self._registry.assign_grade(enrollment, grade)
            return self._enrollment_to_response(enrollment)

        @self.app.get("/students/{student_id}/enrollments", response_model=List[EnrollmentResponse])
        async def get_student_enrollments(student_id: int):
            """Get the enrollments of a student."""
            student = self._get_student(student_id)
            return [self._enrollment_to_response(e) for e in self._registry.enrollments_for(student)]

        # Transcript endpoints
        @self.app.get("/students/{student_id}/gpa", response_model=GpaResponse)
        async def get_gpa(student_id: int):
            """Get a student's GPA."""
            student = self._get_student(student_id)
            return GpaResponse(student_id=student.student_id, gpa=self._calculator.gpa(student))

        @self.app.get("/students/{student_id}/transcript")
        async def get_transcript(student_id: int, format: str = "text"):
            """Get a student's transcript as text or JSON."""
            student = self._get_student(student_id)
            try:
                report_format = ReportFormat(format.lower())
            except ValueError:
                raise ValidationError(f"Unsupported transcript format: {format}", error_code="INVALID_FORMAT")
            if report_format == ReportFormat.JSON:
                return JSONResponse(content=self._calculator.report(student).to_dict())
            return PlainTextResponse(self._calculator.render(student, report_format))

        @self.app.get("/students/{student_id}/summary", response_class=PlainTextResponse)
        async def get_summary(student_id: int):
            """Get a student's transcript summary."""
            return PlainTextResponse(self._calculator.summary(self._get_student(student_id)))

        @self.app.get("/statistics", response_model=Dict[str, Any])
        async def get_statistics():
            """Get platform statistics."""
            stats = self._registry.get_statistics()
            stats.update({
                'students': self._students.get_student_count(),
                'courses': self._courses.get_course_count()
            })
            return stats

    def _get_student(self, student_id: int) -> Student:
        student = self._students.find_by_id(student_id)
        if student is None:
            raise ResourceNotFoundError(f"Student {student_id} not found", error_code="STUDENT_NOT_FOUND")
        return student

    def _get_course(self, course_code: str) -> Course:
        course = self._courses.find_by_code(course_code)
        if course is None:
            raise ResourceNotFoundError(f"Course {course_code} not found", error_code="COURSE_NOT_FOUND")
        return course

    def _student_to_response(self, student: Student) -> StudentResponse:
        return StudentResponse(
            student_id=student.student_id,
            full_name=student.full_name,
            email=student.email,
            reg_no=student.reg_no,
            status=student.status.value,
            registration_date=student.registration_date,
            enrollments=[e.course.course_code for e in student.enrollments],
            gpa=self._calculator.gpa(student)
        )

    @staticmethod
    def _course_to_response(course: Course) -> CourseResponse:
        return CourseResponse(
            course_code=course.course_code,
            title=course.title,
            credits=course.credits,
            department=course.department,
            semester=course.semester.value,
            instructor=course.instructor.full_name if course.instructor else None
        )

    @staticmethod
    def _enrollment_to_response(enrollment: Enrollment) -> EnrollmentResponse:
        return EnrollmentResponse(
            student_id=enrollment.student.student_id,
            reg_no=enrollment.student.reg_no,
            course_code=enrollment.course.course_code,
            semester=enrollment.course.semester.value,
            credits=enrollment.course.credits,
            enrollment_date=enrollment.enrollment_date,
            grade=enrollment.grade.name if enrollment.grade else None
        )
