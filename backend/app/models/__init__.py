from app.models.course import Course, CourseType, course_programs  # noqa: F401
from app.models.exam import Exam, ExamSlot, TimeCode  # noqa: F401
from app.models.program import Program  # noqa: F401
from app.models.room import Block, Room  # noqa: F401
from app.models.student import Student, Supplementary  # noqa: F401
