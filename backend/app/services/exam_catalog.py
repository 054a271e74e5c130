from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DataAccessError, SeatingError
from app.db.queries import find_courses
from app.models.course import CourseType
from app.models.exam import TimeCode
from app.schemas.seating import CourseOffering, ExamCatalog

logger = logging.getLogger(__name__)


def resolve_exam_catalog(db: Session, exam_date: date | None, time_code: TimeCode | str | None) -> ExamCatalog:
    """Split the courses examined in one sitting into open and non-open offerings.

    Each course yields one offering per linked program. Open courses are
    kept apart because their students are found by open-course id rather
    than by program and semester.
    """
    if exam_date is None or time_code is None:
        raise SeatingError("Both date and time_code are required")
    try:
        time_code = TimeCode(time_code)
    except ValueError as exc:
        raise SeatingError(f"Unknown time code {time_code!r}") from exc

    try:
        courses = find_courses(db, exam_date, time_code)
    except SQLAlchemyError as exc:
        raise DataAccessError(f"Error fetching exams: {exc}") from exc

    catalog = ExamCatalog()
    for course, exam_id in courses:
        target = catalog.open_courses if course.type == CourseType.open else catalog.non_open_courses
        for program in course.programs:
            target.append(
                CourseOffering(
                    course_id=course.id,
                    course_name=course.name,
                    semester=course.semester,
                    course_type=course.type,
                    exam_id=exam_id,
                    program_id=program.id,
                    program_name=program.name,
                )
            )

    logger.info(
        "Resolved %d open and %d non-open offerings for %s %s",
        len(catalog.open_courses),
        len(catalog.non_open_courses),
        exam_date.isoformat(),
        time_code.value,
    )
    return catalog
