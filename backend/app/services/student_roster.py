from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DataAccessError, SeatingError
from app.db.queries import (
    STUDENT_ORDER_COLUMNS,
    OpenCourseFilter,
    ProgramSemesterFilter,
    StudentFilter,
    find_students,
    find_supplementary_students,
)
from app.schemas.seating import ExamCatalog, RosterEntry

logger = logging.getLogger(__name__)


def roster_filters(catalog: ExamCatalog) -> list[StudentFilter]:
    filters: dict[StudentFilter, None] = {}
    for course in catalog.non_open_courses:
        filters.setdefault(ProgramSemesterFilter(program_id=course.program_id, semester=course.semester))
    for course in catalog.open_courses:
        filters.setdefault(OpenCourseFilter(open_course_id=course.course_id, semester=course.semester))
    return list(filters)


def fetch_students(db: Session, catalog: ExamCatalog, order_by: str = "roll_number") -> list[RosterEntry]:
    """Regular examinees followed by supplementary retakers.

    The two lists are concatenated as-is, so a student sitting one course
    normally and retaking another appears once per course. Ordering by
    ``order_by`` holds within each list, not across the boundary.
    """
    if order_by not in STUDENT_ORDER_COLUMNS:
        raise SeatingError(
            f"Unsupported roster order {order_by!r}",
            details={"allowed": sorted(STUDENT_ORDER_COLUMNS)},
        )

    try:
        students = find_students(db, roster_filters(catalog), order_by)
        supplementary_students = find_supplementary_students(db, catalog.exam_ids(), order_by)
    except SQLAlchemyError as exc:
        raise DataAccessError(f"Error fetching students: {exc}") from exc

    logger.info(
        "Fetched %d regular and %d supplementary examinees",
        len(students),
        len(supplementary_students),
    )
    return [*students, *supplementary_students]
