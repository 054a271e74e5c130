from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.models.exam import TimeCode
from app.schemas.seating import SeatingPlan
from app.services.cohorts import group_students, match_students
from app.services.exam_catalog import resolve_exam_catalog
from app.services.student_roster import fetch_students

logger = logging.getLogger(__name__)


def build_seating_plan(
    db: Session,
    exam_date: date,
    time_code: TimeCode | str,
    order_by: str | None = None,
) -> SeatingPlan | None:
    """Build the ordered cohorts for one sitting.

    Returns ``None`` when any step fails; the failure is logged here and
    callers should show an empty state.
    """
    order_by = order_by or get_settings().default_roster_order
    try:
        catalog = resolve_exam_catalog(db, exam_date, time_code)
        students = fetch_students(db, catalog, order_by=order_by)
        total_students = len(students)

        match_students(students, catalog.all_courses())
        grouped = group_students(students)
    except Exception:
        logger.exception("Unable to build seating plan for %s %s", exam_date, time_code)
        return None

    logger.info(
        "Built %d cohort(s) for %d student(s), %d unassigned",
        len(grouped.cohorts),
        total_students,
        len(grouped.unassigned),
    )
    return SeatingPlan(
        cohorts=grouped.cohorts,
        total_students=total_students,
        unassigned=grouped.unassigned,
    )
