import uuid
from datetime import date, datetime
from enum import Enum

from sqlalchemy import Date, DateTime, Enum as SAEnum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.db.base import Base
from app.models.course import Course


class TimeCode(str, Enum):
    FN = "FN"  # forenoon
    AN = "AN"  # afternoon


class ExamSlot(Base):
    __tablename__ = "exam_slots"
    __table_args__ = (UniqueConstraint("date", "time_code", name="uq_exam_slots_date_time_code"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    exam_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    time_code: Mapped[TimeCode] = mapped_column(SAEnum(TimeCode, name="time_code"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Exam(Base):
    __tablename__ = "exams"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    slot_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("exam_slots.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    course: Mapped[Course] = relationship()
    slot: Mapped[ExamSlot] = relationship()
