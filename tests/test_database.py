"""
Tests for database utilities: sessions, retries and health checks.
"""

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

import database
from database import get_session, health_check, retry_with_backoff
from models import Organization


def test_health_check(engine):
    status = health_check(engine)

    assert status == {"connected": True, "dialect": "sqlite", "error": None}


def test_get_session_uses_process_engine(engine):
    with get_session() as session:
        session.add(Organization(name="Gamma Mining"))
        session.commit()

    with get_session(engine) as session:
        names = [org.name for org in session.exec(select(Organization)).all()]

    assert names == ["Gamma Mining"]


def test_get_session_rolls_back_on_error(engine):
    with pytest.raises(RuntimeError):
        with get_session(engine) as session:
            session.add(Organization(name="Rolled Back"))
            session.flush()
            raise RuntimeError("boom")

    with get_session(engine) as session:
        assert session.exec(select(Organization)).all() == []


def test_retry_with_backoff_retries_operational_errors(monkeypatch):
    monkeypatch.setattr(database.time, "sleep", lambda seconds: None)
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        return "ok"

    assert retry_with_backoff(flaky) == "ok"
    assert len(attempts) == 3


def test_retry_with_backoff_gives_up(monkeypatch):
    delays = []
    monkeypatch.setattr(database.time, "sleep", delays.append)

    def always_down():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    with pytest.raises(OperationalError):
        retry_with_backoff(always_down, max_retries=3, base_delay=0.5)

    assert delays == [0.5, 1.0]


def test_retry_with_backoff_does_not_retry_other_errors():
    attempts = []

    def broken():
        attempts.append(1)
        raise ValueError("bad input")

    with pytest.raises(ValueError):
        retry_with_backoff(broken)

    assert len(attempts) == 1
