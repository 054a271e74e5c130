"""Read-side queries the seating pipeline runs against the relational store.

Nothing here catches ``SQLAlchemyError``; the calling service wraps it with
a message naming the lookup that failed.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from sqlalchemy import ColumnElement, Select, and_, or_, select
from sqlalchemy.orm import Session, selectinload

from app.models.course import Course, CourseType, course_programs
from app.models.exam import Exam, ExamSlot, TimeCode
from app.models.program import Program
from app.models.room import Block, Room
from app.models.student import Student, Supplementary
from app.schemas.seating import ExamSource, RosterEntry, UpcomingExam

STUDENT_ORDER_COLUMNS = {
    "roll_number": Student.roll_number,
    "name": Student.name,
    "semester": Student.semester,
    "id": Student.id,
}

TIME_CODE_ORDER = {TimeCode.FN: 0, TimeCode.AN: 1}


@dataclass(frozen=True)
class ProgramSemesterFilter:
    program_id: str
    semester: int

    def clause(self) -> ColumnElement[bool]:
        return and_(Student.program_id == self.program_id, Student.semester == self.semester)


@dataclass(frozen=True)
class OpenCourseFilter:
    open_course_id: str
    semester: int

    def clause(self) -> ColumnElement[bool]:
        return and_(Student.open_course_id == self.open_course_id, Student.semester == self.semester)


StudentFilter = ProgramSemesterFilter | OpenCourseFilter


@dataclass(frozen=True)
class RoomRow:
    id: str
    floor: int
    rows: int
    cols: int
    seats: int
    block_id: str
    block_name: str


def find_courses(db: Session, exam_date: date, time_code: TimeCode) -> list[tuple[Course, str]]:
    """Courses with an exam in the slot, paired with that exam's id."""
    rows = db.execute(
        select(Course, Exam.id)
        .join(Exam, Exam.course_id == Course.id)
        .join(ExamSlot, ExamSlot.id == Exam.slot_id)
        .where(ExamSlot.exam_date == exam_date, ExamSlot.time_code == time_code)
        .options(selectinload(Course.programs))
        .order_by(Course.name.asc(), Course.id.asc(), Exam.id.asc())
    ).all()

    courses: list[tuple[Course, str]] = []
    seen: set[str] = set()
    for course, exam_id in rows:
        if course.id in seen:
            continue
        seen.add(course.id)
        courses.append((course, exam_id))
    return courses


def find_rooms(db: Session) -> list[RoomRow]:
    seats = (Room.rows * Room.cols).label("seats")
    rows = db.execute(
        select(Room.id, Room.floor, Room.rows, Room.cols, seats, Block.id, Block.name)
        .join(Block, Block.id == Room.block_id)
        .where(Room.is_available.is_(True))
        .order_by(Block.name.asc(), Room.floor.asc(), Room.id.asc())
    ).all()
    return [
        RoomRow(
            id=room_id,
            floor=floor,
            rows=row_count,
            cols=col_count,
            seats=seat_count,
            block_id=block_id,
            block_name=block_name,
        )
        for room_id, floor, row_count, col_count, seat_count, block_id, block_name in rows
    ]


def _student_order(order_by: str):
    column = STUDENT_ORDER_COLUMNS[order_by]
    return (column.asc(), Student.id.asc())


def find_students(db: Session, filters: Sequence[StudentFilter], order_by: str) -> list[RosterEntry]:
    if not filters:
        return []
    rows = db.execute(
        select(Student, Program.name)
        .join(Program, Program.id == Student.program_id)
        .where(or_(*(item.clause() for item in filters)))
        .order_by(*_student_order(order_by))
    ).all()
    return [
        RosterEntry(
            id=student.id,
            name=student.name,
            roll_number=student.roll_number,
            semester=student.semester,
            program_id=student.program_id,
            program_name=program_name,
            open_course_id=student.open_course_id,
        )
        for student, program_name in rows
    ]


def find_supplementary_students(db: Session, exam_ids: Iterable[str], order_by: str) -> list[RosterEntry]:
    exam_ids = list(exam_ids)
    if not exam_ids:
        return []
    rows = db.execute(
        select(Student, Program.name, Supplementary.exam_id, Course.id, Course.type, Course.name)
        .join(Supplementary, Supplementary.student_id == Student.id)
        .join(Exam, Exam.id == Supplementary.exam_id)
        .join(Course, Course.id == Exam.course_id)
        .join(Program, Program.id == Student.program_id)
        .where(Supplementary.exam_id.in_(exam_ids))
        .order_by(*_student_order(order_by), Supplementary.exam_id.asc())
    ).all()
    return [
        RosterEntry(
            id=student.id,
            name=student.name,
            roll_number=student.roll_number,
            semester=student.semester,
            program_id=student.program_id,
            program_name=program_name,
            open_course_id=student.open_course_id,
            supplementary=True,
            exam_id=exam_id,
            course_id=course_id,
            course_type=course_type,
            course_name=course_name,
        )
        for student, program_name, exam_id, course_id, course_type, course_name in rows
    ]


def find_upcoming_exams(db: Session, student_id: str, from_date: date) -> list[UpcomingExam] | None:
    """Exams on or after ``from_date`` that the student sits, or ``None`` for an unknown student.

    Regular exams come from the courses linked to the student's program at
    their current semester. Open courses are left out there and only count
    through ``open_course_id``. Supplementary retakes are
    listed regardless of semester. An exam reachable by several paths is
    reported once, under the first of regular, open, supplementary.
    """
    student = db.get(Student, student_id)
    if student is None:
        return None

    def exams_from(start):
        return (
            select(
                Exam.id,
                Course.id,
                Course.name,
                Course.type,
                Course.semester,
                ExamSlot.exam_date,
                ExamSlot.time_code,
            )
            .select_from(Exam)
            .join(Course, Course.id == Exam.course_id)
            .join(ExamSlot, ExamSlot.id == Exam.slot_id)
            .where(ExamSlot.exam_date >= start)
        )

    queries: list[tuple[ExamSource, Select]] = [
        (
            "regular",
            exams_from(from_date)
            .join(course_programs, course_programs.c.course_id == Course.id)
            .where(
                course_programs.c.program_id == student.program_id,
                Course.semester == student.semester,
                Course.type != CourseType.open,
            ),
        ),
    ]
    if student.open_course_id:
        queries.append(("open", exams_from(from_date).where(Course.id == student.open_course_id)))
    queries.append(
        (
            "supplementary",
            exams_from(from_date)
            .join(Supplementary, Supplementary.exam_id == Exam.id)
            .where(Supplementary.student_id == student.id),
        )
    )

    exams: dict[str, UpcomingExam] = {}
    for source, statement in queries:
        for exam_id, course_id, course_name, course_type, semester, exam_date, time_code in db.execute(statement):
            exams.setdefault(
                exam_id,
                UpcomingExam(
                    exam_id=exam_id,
                    course_id=course_id,
                    course_name=course_name,
                    course_type=course_type,
                    semester=semester,
                    exam_date=exam_date,
                    time_code=time_code,
                    source=source,
                ),
            )
    return sorted(
        exams.values(),
        key=lambda item: (item.exam_date, TIME_CODE_ORDER[item.time_code], item.course_name, item.exam_id),
    )
