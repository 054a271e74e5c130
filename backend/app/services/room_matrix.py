from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DataAccessError
from app.db.queries import find_rooms
from app.schemas.seating import SeatCell, SeatingClass, SeatingMatrix

logger = logging.getLogger(__name__)


def empty_grid(rows: int, cols: int) -> list[list[SeatCell]]:
    return [[SeatCell() for _ in range(cols)] for _ in range(rows)]


def load_seating_matrix(db: Session) -> SeatingMatrix:
    """Expand every available room into an empty ``rows x cols`` seat grid."""
    try:
        rooms = find_rooms(db)
    except SQLAlchemyError as exc:
        logger.exception("Error generating seating matrix")
        raise DataAccessError(f"Error loading rooms: {exc}") from exc

    classes: list[SeatingClass] = []
    total_seats = 0
    for room in rooms:
        total_seats += room.seats
        classes.append(
            SeatingClass(
                id=room.id,
                floor=room.floor,
                block_id=room.block_id,
                block_name=room.block_name,
                seats=room.seats,
                seating_matrix=empty_grid(room.rows, room.cols),
            )
        )

    logger.info("Loaded %d available rooms with %d seats", len(classes), total_seats)
    return SeatingMatrix(classes=classes, total_seats=total_seats)
