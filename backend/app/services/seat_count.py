from __future__ import annotations

from collections.abc import Iterable
from itertools import chain

from app.schemas.seating import SeatingClass, SeatTally


def tally_seats(classes: Iterable[SeatingClass]) -> SeatTally:
    tally = SeatTally()
    cells = chain.from_iterable(row for item in classes for row in item.seating_matrix)
    for cell in cells:
        if cell.occupied:
            tally.total_assigned_seats += 1
        else:
            tally.total_empty_seats += 1
    return tally
