"""Score profile, tournament and stage tables."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ScoreProfileRow(SQLModel, table=True):
    __tablename__ = "score_profiles"

    id: str = Field(primary_key=True)
    name: str = Field(index=True)
    description: str | None = None

    definition_jsonb: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSONDocument, nullable=False),
    )

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, index=True)


class TournamentRow(SQLModel, table=True):
    __tablename__ = "tournaments"

    id: str = Field(primary_key=True)
    name: str = ""
    score_profile_id: str | None = Field(default=None, foreign_key="score_profiles.id", index=True)


class TournamentStageRow(SQLModel, table=True):
    __tablename__ = "tournament_stages"

    id: str = Field(primary_key=True)
    tournament_id: str | None = Field(default=None, foreign_key="tournaments.id", index=True)
    name: str = ""
    score_profile_id: str | None = Field(default=None, foreign_key="score_profiles.id", index=True)
