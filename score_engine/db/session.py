from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from score_engine.config.runtime import get_settings

_engine: Engine | None = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_engine(get_settings().database_url)
    return _engine


def create_session() -> Session:
    return Session(get_engine())
