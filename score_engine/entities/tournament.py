"""Tournament and stage records, reduced to what profile resolution reads."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Tournament:
    id: str
    name: str = ""
    score_profile_id: str | None = None


@dataclass
class TournamentStage:
    id: str
    tournament_id: str | None = None
    name: str = ""
    score_profile_id: str | None = None   # overrides the tournament's profile
