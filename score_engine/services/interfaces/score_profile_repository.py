from __future__ import annotations

from abc import ABC, abstractmethod

from score_engine.entities.profile import ScoreProfile
from score_engine.entities.tournament import Tournament, TournamentStage


class ScoreProfileRepository(ABC):
    @abstractmethod
    def fetch_profile(self, profile_id: str) -> ScoreProfile | None:
        raise NotImplementedError

    @abstractmethod
    def fetch_stage(self, stage_id: str) -> TournamentStage | None:
        raise NotImplementedError

    @abstractmethod
    def fetch_tournament(self, tournament_id: str) -> Tournament | None:
        raise NotImplementedError

    @abstractmethod
    def save_profile(self, profile: ScoreProfile) -> None:
        raise NotImplementedError
