from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.exceptions import AppError
from app.models.exam import TimeCode
from app.schemas.seating import (
    ExamCatalog,
    RosterOrder,
    SeatingClass,
    SeatingMatrix,
    SeatingPlan,
    SeatTally,
    StudentExams,
)
from app.services.exam_catalog import resolve_exam_catalog
from app.services.room_matrix import load_seating_matrix
from app.services.seat_count import tally_seats
from app.services.seating_plan import build_seating_plan
from app.services.student_exams import list_upcoming_exams

router = APIRouter()


@router.get("/catalog", response_model=ExamCatalog)
def get_exam_catalog(
    exam_date: date = Query(alias="date"),
    time_code: TimeCode = Query(),
    db: Session = Depends(get_db),
) -> ExamCatalog:
    return resolve_exam_catalog(db, exam_date, time_code)


@router.get("/plan", response_model=SeatingPlan)
def get_seating_plan(
    exam_date: date = Query(alias="date"),
    time_code: TimeCode = Query(),
    order_by: RosterOrder | None = Query(default=None),
    db: Session = Depends(get_db),
) -> SeatingPlan:
    plan = build_seating_plan(db, exam_date, time_code, order_by=order_by)
    if plan is None:
        raise AppError(
            "Unable to build seating plan",
            status_code=503,
            details={"date": exam_date.isoformat(), "time_code": time_code.value},
        )
    return plan


@router.get("/matrix", response_model=SeatingMatrix)
def get_seating_matrix(db: Session = Depends(get_db)) -> SeatingMatrix:
    return load_seating_matrix(db)


@router.post("/tally", response_model=SeatTally)
def post_seat_tally(classes: list[SeatingClass]) -> SeatTally:
    return tally_seats(classes)


@router.get("/students/{student_id}/exams", response_model=StudentExams)
def get_upcoming_exams(
    student_id: str,
    from_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
) -> StudentExams:
    return list_upcoming_exams(db, student_id, from_date)
