from __future__ import annotations

from sqlmodel import Session

from score_engine.db import session as db_session


def test_engine_built_once_from_settings(monkeypatch):
    monkeypatch.setenv("SCORE_DATABASE_URL", "sqlite://")
    monkeypatch.setattr(db_session, "_engine", None)

    engine = db_session.get_engine()

    assert str(engine.url) == "sqlite://"
    assert db_session.get_engine() is engine

    with db_session.create_session() as session:
        assert isinstance(session, Session)
        assert session.get_bind() is engine
