from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Connection

import app.models  # noqa: F401
from app.core.config import get_settings
from app.db.base import Base
from app.db.session import engine

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "programs": {"id", "name"},
    "courses": {"id", "name", "semester", "type"},
    "course_programs": {"course_id", "program_id"},
    "exam_slots": {"id", "date", "time_code"},
    "exams": {"id", "course_id", "slot_id"},
    "students": {"id", "name", "roll_number", "semester", "program_id", "open_course_id"},
    "supplementaries": {"id", "student_id", "exam_id"},
    "blocks": {"id", "name"},
    "rooms": {"id", "floor", "block_id", "rows", "cols", "is_available"},
}


def find_missing_schema(connection: Connection) -> tuple[list[str], dict[str, list[str]]]:
    inspector = inspect(connection)
    table_names = set(inspector.get_table_names())
    missing_tables: list[str] = []
    missing_columns: dict[str, list[str]] = {}
    for table_name, required in REQUIRED_COLUMNS.items():
        if table_name not in table_names:
            missing_tables.append(table_name)
            continue
        existing = {item["name"] for item in inspector.get_columns(table_name)}
        missing = sorted(required - existing)
        if missing:
            missing_columns[table_name] = missing
    return sorted(missing_tables), missing_columns


def ensure_schema() -> None:
    settings = get_settings()
    try:
        if settings.auto_create_schema:
            Base.metadata.create_all(bind=engine)
        with engine.connect() as connection:
            missing_tables, missing_columns = find_missing_schema(connection)
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Seating schema bootstrap failed")
        raise RuntimeError("Seating schema bootstrap failed") from exc

    if missing_tables:
        logger.warning("Missing seating tables: %s (run alembic upgrade head)", ", ".join(missing_tables))
    for table_name, columns in missing_columns.items():
        logger.warning("Table %s is missing columns: %s", table_name, ", ".join(columns))
