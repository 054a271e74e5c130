from datetime import date
from typing import Literal, NamedTuple

from pydantic import BaseModel, Field

from app.models.course import CourseType
from app.models.exam import TimeCode

RosterOrder = Literal["roll_number", "name", "semester", "id"]
ExamSource = Literal["regular", "open", "supplementary"]


class CourseOffering(BaseModel):
    """One (course, program) pair with an exam in the requested slot."""

    course_id: str
    course_name: str
    semester: int
    course_type: CourseType
    exam_id: str
    program_id: str
    program_name: str


class ExamCatalog(BaseModel):
    open_courses: list[CourseOffering] = Field(default_factory=list)
    non_open_courses: list[CourseOffering] = Field(default_factory=list)

    def all_courses(self) -> list[CourseOffering]:
        return [*self.open_courses, *self.non_open_courses]

    def exam_ids(self) -> list[str]:
        seen: dict[str, None] = {}
        for course in self.all_courses():
            seen.setdefault(course.exam_id)
        return list(seen)


class RosterEntry(BaseModel):
    """A seat-taker. Course fields are filled by the roster query or by cohort matching."""

    id: str
    name: str
    roll_number: str
    semester: int
    program_id: str
    program_name: str
    open_course_id: str | None = None
    supplementary: bool = False

    course_semester: int | None = None
    course_name: str | None = None
    course_id: str | None = None
    exam_id: str | None = None
    course_type: CourseType | None = None

    model_config = {"from_attributes": True}

    @property
    def matched(self) -> bool:
        return self.course_id is not None


class CohortKey(NamedTuple):
    course_id: str
    # Only set for common courses, where each program seats separately.
    program_id: str | None = None


class SeatingPlan(BaseModel):
    cohorts: list[list[RosterEntry]]
    total_students: int
    unassigned: list[RosterEntry] = Field(default_factory=list)


class SeatCell(BaseModel):
    occupied: bool = False
    exam: str | None = None
    regno: str | None = None


class SeatingClass(BaseModel):
    id: str
    floor: int
    block_id: str
    block_name: str
    seats: int
    seating_matrix: list[list[SeatCell]]
    exams: list[str] = Field(default_factory=list)


class SeatingMatrix(BaseModel):
    classes: list[SeatingClass]
    total_seats: int


class SeatTally(BaseModel):
    total_empty_seats: int = 0
    total_assigned_seats: int = 0


class UpcomingExam(BaseModel):
    exam_id: str
    course_id: str
    course_name: str
    course_type: CourseType
    semester: int
    exam_date: date
    time_code: TimeCode
    # Why the student sits it: own program and semester, elective, or retake.
    source: ExamSource


class StudentExams(BaseModel):
    student_id: str
    from_date: date
    exams: list[UpcomingExam] = Field(default_factory=list)
