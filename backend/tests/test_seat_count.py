from app.schemas.seating import SeatCell, SeatingClass
from app.services.room_matrix import empty_grid
from app.services.seat_count import tally_seats


def make_class(room_id, rows, cols, occupied=0):
    grid = empty_grid(rows, cols)
    cells = [cell for row in grid for cell in row]
    for cell in cells[:occupied]:
        cell.occupied = True
        cell.exam = "exam-1"
        cell.regno = "CS001"
    return SeatingClass(
        id=room_id,
        floor=0,
        block_id="b1",
        block_name="Main Block",
        seats=rows * cols,
        seating_matrix=grid,
    )


def test_partially_occupied_room():
    tally = tally_seats([make_class("r1", 3, 4, occupied=5)])

    assert tally.total_assigned_seats == 5
    assert tally.total_empty_seats == 7


def test_empty_grids_are_all_free():
    classes = [make_class("r1", 3, 4), make_class("r2", 2, 5)]

    tally = tally_seats(classes)

    assert tally.total_assigned_seats == 0
    assert tally.total_empty_seats == 22


def test_counts_add_up_to_room_seats():
    classes = [make_class("r1", 3, 4, occupied=12), make_class("r2", 6, 5, occupied=17), make_class("r3", 1, 1)]

    tally = tally_seats(classes)

    assert tally.total_assigned_seats + tally.total_empty_seats == sum(item.seats for item in classes)
    assert tally.total_assigned_seats == 29


def test_no_rooms():
    tally = tally_seats([])

    assert tally.total_assigned_seats == 0
    assert tally.total_empty_seats == 0


def test_uneven_rows_are_counted_cell_by_cell():
    seating_class = SeatingClass(
        id="r1",
        floor=0,
        block_id="b1",
        block_name="Main Block",
        seats=3,
        seating_matrix=[[SeatCell(occupied=True)], [SeatCell(), SeatCell()]],
    )

    tally = tally_seats([seating_class])

    assert (tally.total_assigned_seats, tally.total_empty_seats) == (1, 2)
