from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from app.models.course import CourseType
from app.schemas.seating import CohortKey, CourseOffering, RosterEntry

logger = logging.getLogger(__name__)

UNASSIGNED_LOG_LIMIT = 20


@dataclass
class GroupedCohorts:
    cohorts: list[list[RosterEntry]] = field(default_factory=list)
    unassigned: list[RosterEntry] = field(default_factory=list)


def _first_seen_index(courses: Sequence[CourseOffering]):
    by_program: dict[tuple[str, int], tuple[int, CourseOffering]] = {}
    by_open_course: dict[tuple[str, int], tuple[int, CourseOffering]] = {}
    for position, course in enumerate(courses):
        by_program.setdefault((course.program_id, course.semester), (position, course))
        if course.course_type == CourseType.open:
            by_open_course.setdefault((course.course_id, course.semester), (position, course))
    return by_program, by_open_course


def match_students(students: list[RosterEntry], courses: Sequence[CourseOffering]) -> list[RosterEntry]:
    """Attach a course and exam to every student that does not have one yet.

    The first course in ``courses`` whose program and semester match wins.
    An open course also matches students enrolled in it through
    ``open_course_id``. Students with no match are left untouched.
    """
    by_program, by_open_course = _first_seen_index(courses)

    for student in students:
        if student.course_id:
            continue
        candidates = [by_program.get((student.program_id, student.semester))]
        if student.open_course_id:
            candidates.append(by_open_course.get((student.open_course_id, student.semester)))
        hits = [hit for hit in candidates if hit is not None]
        if not hits:
            continue
        _, course = min(hits, key=lambda hit: hit[0])
        student.course_semester = course.semester
        student.course_name = course.course_name
        student.course_id = course.course_id
        student.exam_id = course.exam_id
        student.course_type = course.course_type
    return students


def cohort_key(student: RosterEntry) -> CohortKey:
    if student.course_type == CourseType.common:
        return CohortKey(course_id=student.course_id, program_id=student.program_id)
    return CohortKey(course_id=student.course_id)


def group_students(students: Sequence[RosterEntry]) -> GroupedCohorts:
    """Split matched students into cohorts, largest first.

    Common courses are split per program. Students without a course are
    returned in ``unassigned`` instead of being grouped.
    """
    groups: dict[CohortKey, list[RosterEntry]] = {}
    unassigned: list[RosterEntry] = []
    for student in students:
        if not student.matched:
            unassigned.append(student)
            continue
        groups.setdefault(cohort_key(student), []).append(student)

    if unassigned:
        shown = ", ".join(student.roll_number for student in unassigned[:UNASSIGNED_LOG_LIMIT])
        more = len(unassigned) - UNASSIGNED_LOG_LIMIT
        logger.warning(
            "%d student(s) matched no scheduled course: %s%s",
            len(unassigned),
            shown,
            f" and {more} more" if more > 0 else "",
        )

    # sorted() is stable, so equal-sized cohorts keep first-seen order.
    cohorts = sorted(groups.values(), key=len, reverse=True)
    return GroupedCohorts(cohorts=cohorts, unassigned=unassigned)
