import logging

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from app.db import bootstrap


def _raise_error(message: str):
    raise RuntimeError(message)


def _memory_engine():
    return create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def test_missing_schema_is_reported_table_by_table():
    engine = _memory_engine()
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE programs (id VARCHAR(36) PRIMARY KEY)"))

    with engine.connect() as connection:
        missing_tables, missing_columns = bootstrap.find_missing_schema(connection)

    assert "rooms" in missing_tables
    assert "programs" not in missing_tables
    assert missing_columns == {"programs": ["name"]}


def test_schema_is_created_when_enabled(monkeypatch):
    engine = _memory_engine()
    monkeypatch.setattr(bootstrap, "engine", engine)
    monkeypatch.setattr(bootstrap.get_settings(), "auto_create_schema", True)

    bootstrap.ensure_schema()

    with engine.connect() as connection:
        assert bootstrap.find_missing_schema(connection) == ([], {})


def test_missing_tables_are_logged_when_creation_disabled(monkeypatch, caplog):
    monkeypatch.setattr(bootstrap, "engine", _memory_engine())
    monkeypatch.setattr(bootstrap.get_settings(), "auto_create_schema", False)

    with caplog.at_level(logging.WARNING, logger="app.db.bootstrap"):
        bootstrap.ensure_schema()

    assert "Missing seating tables" in caplog.text


def test_schema_bootstrap_raises_on_failure(monkeypatch):
    monkeypatch.setattr(bootstrap.get_settings(), "auto_create_schema", True)
    monkeypatch.setattr(bootstrap.Base.metadata, "create_all", lambda bind: _raise_error("disk full"))

    with pytest.raises(RuntimeError, match="Seating schema bootstrap failed"):
        bootstrap.ensure_schema()
