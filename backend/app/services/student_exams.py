from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DataAccessError, ResourceNotFoundError
from app.db.queries import find_upcoming_exams
from app.schemas.seating import StudentExams

logger = logging.getLogger(__name__)


def list_upcoming_exams(db: Session, student_id: str, from_date: date | None = None) -> StudentExams:
    """Exams a student still has to sit, earliest sitting first."""
    from_date = from_date or date.today()
    try:
        exams = find_upcoming_exams(db, student_id, from_date)
    except SQLAlchemyError as exc:
        raise DataAccessError(f"Error fetching upcoming exams: {exc}") from exc
    if exams is None:
        raise ResourceNotFoundError("Student", student_id)

    logger.info("Student %s has %d exam(s) from %s", student_id, len(exams), from_date.isoformat())
    return StudentExams(student_id=student_id, from_date=from_date, exams=exams)
