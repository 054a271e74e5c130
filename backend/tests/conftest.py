import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "true")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.api.deps import get_db  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models.course import CourseType  # noqa: E402
from factories import add_course, add_program, add_students  # noqa: E402


@pytest.fixture()
def session_factory():
    engine = create_engine(  # isolated in-memory DB per test
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def scenario_b(db_session):
    """Open course X for P1 and common course Y for P1 and P2 in the same sitting."""
    p1 = add_program(db_session, "Computer Science")
    p2 = add_program(db_session, "Electronics")
    course_x, exam_x = add_course(db_session, "Operations Research", 5, CourseType.open, [p1])
    course_y, exam_y = add_course(db_session, "Discrete Mathematics", 3, CourseType.common, [p1, p2])
    add_students(db_session, "CSX", 5, p1, 5, open_course=course_x)
    add_students(db_session, "CSY", 3, p1, 3)
    add_students(db_session, "ECY", 2, p2, 3)
    db_session.commit()
    return {
        "programs": (p1, p2),
        "courses": (course_x, course_y),
        "exams": (exam_x, exam_y),
    }
