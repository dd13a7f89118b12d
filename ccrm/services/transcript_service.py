"""
Transcript and GPA calculations over a student's enrollments.
"""

import json
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from ..config import AppConfig
from ..core.entities import Enrollment, Student
from ..core.enums import ReportFormat

IN_PROGRESS = "IP"

RULE = "=" * 60
SECTION_RULE = "-" * 30
TABLE_RULE = "-" * 70
ROW_FORMAT = "{:<10} {:<30} {:<8} {:<10} {:<5}\n"


@dataclass
class TranscriptRow:
    """One enrolled course as shown on a transcript."""
    course_code: str
    title: str
    credits: int
    semester: str
    grade: Optional[str] = None
    grade_point: Optional[float] = None

    @property
    def grade_label(self) -> str:
        return self.grade if self.grade is not None else IN_PROGRESS


@dataclass
class TranscriptReport:
    """Structured transcript from which the text form is rendered."""
    student_id: int
    full_name: str
    reg_no: str
    profile: str
    registration_date: date
    generated_on: date
    rows: List[TranscriptRow] = field(default_factory=list)
    total_credits: int = 0
    graded_credits: int = 0
    gpa: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['registration_date'] = self.registration_date.isoformat()
        data['generated_on'] = self.generated_on.isoformat()
        return data


def weighted_gpa(enrollments: List[Enrollment]) -> float:
    """Credit-weighted grade point average over the graded enrollments."""
    points = 0.0
    credits = 0
    for enrollment in enrollments:
        if enrollment.grade is not None:
            points += enrollment.grade.grade_point * enrollment.course.credits
            credits += enrollment.course.credits
    return points / credits if credits > 0 else 0.0


class TranscriptCalculator:
    """Derives GPA, transcripts and summaries; never mutates the student."""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig()

    def gpa(self, student: Student) -> float:
        return weighted_gpa(student.enrollments)

    def report(self, student: Student) -> TranscriptReport:
        enrollments = student.enrollments
        rows = [
            TranscriptRow(
                course_code=e.course.course_code,
                title=e.course.title,
                credits=e.course.credits,
                semester=e.course.semester.value,
                grade=e.grade.name if e.grade else None,
                grade_point=e.grade.grade_point if e.grade else None,
            )
            for e in enrollments
        ]
        return TranscriptReport(
            student_id=student.student_id,
            full_name=student.full_name,
            reg_no=student.reg_no,
            profile=student.get_profile(),
            registration_date=student.registration_date,
            generated_on=date.today(),
            rows=rows,
            total_credits=sum(row.credits for row in rows),
            graded_credits=sum(row.credits for row in rows if row.grade is not None),
            gpa=weighted_gpa(enrollments),
        )

    def transcript(self, student: Student) -> str:
        """Generate the full transcript as text."""
        report = self.report(student)
        fmt = self._config.strftime_format

        lines = [
            RULE + "\n",
            "OFFICIAL TRANSCRIPT\n",
            f"{self._config.app_name}\n",
            RULE + "\n\n",
            "STUDENT INFORMATION:\n",
            SECTION_RULE + "\n",
            f"Student Profile: {report.profile}\n",
            f"Registration Date: {report.registration_date.strftime(fmt)}\n",
            f"Generated On: {report.generated_on.strftime(fmt)}\n\n",
            "ENROLLED COURSES:\n",
            SECTION_RULE + "\n",
        ]

        if not report.rows:
            lines.append("No courses enrolled.\n")
        else:
            lines.append(ROW_FORMAT.format("CODE", "TITLE", "CREDITS", "SEMESTER", "GRADE"))
            lines.append(TABLE_RULE + "\n")
            for row in report.rows:
                lines.append(ROW_FORMAT.format(row.course_code, row.title, row.credits,
                                               row.semester, row.grade_label))
            lines.append(TABLE_RULE + "\n")
            lines.append(f"Total Credits Enrolled: {report.total_credits}\n")
            lines.append(f"Graded Credits: {report.graded_credits}\n")
            lines.append(f"Cumulative GPA: {report.gpa:.2f}\n")

        lines.append("\n" + RULE + "\n")
        lines.append("End of Transcript\n")
        lines.append(RULE + "\n")
        return "".join(lines)

    def summary(self, student: Student) -> str:
        """Generate a short transcript summary."""
        return (
            "TRANSCRIPT SUMMARY\n"
            + "-" * 20 + "\n"
            + f"Student: {student.full_name}\n"
            + f"Reg No: {student.reg_no}\n"
            + f"Total Courses: {len(student.enrollments)}\n"
            + f"GPA: {self.gpa(student):.2f}\n"
        )

    def render(self, student: Student, report_format: ReportFormat = ReportFormat.TEXT) -> str:
        if report_format == ReportFormat.JSON:
            return json.dumps(self.report(student).to_dict(), indent=2)
        return self.transcript(student)
