from datetime import date
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import DataAccessError, ResourceNotFoundError
from app.models.course import CourseType
from app.models.exam import TimeCode
from app.services.student_exams import list_upcoming_exams
from factories import EXAM_DATE, add_course, add_program, add_students, add_supplementary


@pytest.fixture
def timetable(db_session):
    cs = add_program(db_session, "Computer Science")
    me = add_program(db_session, "Mechanical")
    add_course(db_session, "Algorithms", 5, CourseType.common, [cs, me])
    add_course(db_session, "Compilers", 5, CourseType.supplementary, [cs], time_code=TimeCode.FN)
    add_course(db_session, "Networks", 5, CourseType.common, [cs], exam_date=date(2023, 10, 20))
    add_course(db_session, "Physics", 3, CourseType.common, [cs])
    add_course(db_session, "Photography", 5, CourseType.open, [cs], exam_date=date(2023, 10, 28))
    film, _ = add_course(db_session, "Film Studies", 5, CourseType.open, [me], exam_date=date(2023, 10, 27))
    _, retake_exam = add_course(db_session, "Data Structures", 3, CourseType.common, [cs], exam_date=date(2023, 10, 26))
    (student,) = add_students(db_session, "CS", 1, cs, 5, open_course=film)
    add_supplementary(db_session, student, retake_exam)
    db_session.commit()
    return {"student": student, "programs": (cs, me)}


def test_regular_open_and_supplementary_exams_are_listed_in_sitting_order(db_session, timetable):
    result = list_upcoming_exams(db_session, timetable["student"].id, EXAM_DATE)

    assert result.student_id == timetable["student"].id
    assert result.from_date == EXAM_DATE
    assert [(item.course_name, item.source) for item in result.exams] == [
        ("Compilers", "regular"),
        ("Algorithms", "regular"),
        ("Data Structures", "supplementary"),
        ("Film Studies", "open"),
    ]
    assert [item.time_code for item in result.exams[:2]] == [TimeCode.FN, TimeCode.AN]
    assert result.exams[3].exam_date == date(2023, 10, 27)
    assert result.exams[3].course_type == CourseType.open


def test_exams_before_the_start_date_are_dropped(db_session, timetable):
    result = list_upcoming_exams(db_session, timetable["student"].id, date(2023, 10, 26))

    assert [item.course_name for item in result.exams] == ["Data Structures", "Film Studies"]


def test_earlier_start_date_includes_past_sittings(db_session, timetable):
    result = list_upcoming_exams(db_session, timetable["student"].id, date(2023, 10, 1))

    assert result.exams[0].course_name == "Networks"


def test_unelected_open_course_of_own_program_is_not_listed(db_session, timetable):
    result = list_upcoming_exams(db_session, timetable["student"].id, EXAM_DATE)

    assert "Photography" not in {item.course_name for item in result.exams}


def test_retake_of_a_regular_exam_is_listed_once(db_session, timetable):
    cs, _ = timetable["programs"]
    (student,) = add_students(db_session, "DUP", 1, cs, 5)
    _, exam = add_course(db_session, "Operating Systems", 5, CourseType.common, [cs], exam_date=date(2023, 10, 30))
    add_supplementary(db_session, student, exam)
    db_session.commit()

    result = list_upcoming_exams(db_session, student.id, EXAM_DATE)

    rows = [item for item in result.exams if item.exam_id == exam.id]
    assert len(rows) == 1
    assert rows[0].source == "regular"


def test_student_without_exams_gets_empty_list(db_session, timetable):
    _, me = timetable["programs"]
    (student,) = add_students(db_session, "ME", 1, me, 8)
    db_session.commit()

    result = list_upcoming_exams(db_session, student.id, EXAM_DATE)

    assert result.exams == []


def test_unknown_student_is_not_found(db_session):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        list_upcoming_exams(db_session, "missing-id", EXAM_DATE)

    assert exc_info.value.status_code == 404


def test_query_failure_is_wrapped():
    db = MagicMock()
    db.get.side_effect = OperationalError("SELECT", {}, Exception("timeout"))

    with pytest.raises(DataAccessError) as exc_info:
        list_upcoming_exams(db, "student-1", EXAM_DATE)

    assert exc_info.value.message.startswith("Error fetching upcoming exams:")
