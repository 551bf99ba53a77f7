"""Profile resolver: stage → applicable score profile → score calculation.

A stage's own profile wins; otherwise the parent tournament's profile
applies. With neither, scoring cannot start; that is reported as a failure
result for the caller, not as an engine error.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from score_engine.entities.profile import ScoreProfile
from score_engine.entities.score import CalculationResult, ScoreFailure, ScoreInput, ValidationOutcome
from score_engine.services.interfaces.score_profile_repository import ScoreProfileRepository
from score_engine.services.score_calculator import calculate_match_score, validate_score_input

NO_PROFILE_FOR_SCORING = (
    "No score profile assigned to this stage or tournament. "
    "Score profiles must be configured before entering detailed scores."
)
NO_PROFILE_FOR_VALIDATION = (
    "No score profile assigned to this stage or tournament. Cannot validate score input."
)


class ScoreProfileResolver:
    def __init__(self, repository: ScoreProfileRepository):
        self.repository = repository
        self.logger = logging.getLogger(__name__)

    def resolve_for_stage(self, stage_id: str) -> ScoreProfile | None:
        stage = self.repository.fetch_stage(stage_id)
        if stage is None:
            self.logger.debug("stage %s not found", stage_id)
            return None

        if stage.score_profile_id:
            return self.repository.fetch_profile(stage.score_profile_id)

        if stage.tournament_id:
            tournament = self.repository.fetch_tournament(stage.tournament_id)
            if tournament is not None and tournament.score_profile_id:
                return self.repository.fetch_profile(tournament.score_profile_id)

        return None

    def calculate_score_for_stage(
        self, stage_id: str, score_input: ScoreInput | Mapping[str, Any]
    ) -> CalculationResult:
        profile = self.resolve_for_stage(stage_id)
        if profile is None:
            self.logger.info("no score profile for stage %s", stage_id)
            return ScoreFailure(error=NO_PROFILE_FOR_SCORING)
        return calculate_match_score(profile.definition, score_input)

    def validate_score_for_stage(
        self, stage_id: str, score_input: ScoreInput | Mapping[str, Any]
    ) -> ValidationOutcome:
        profile = self.resolve_for_stage(stage_id)
        if profile is None:
            return ValidationOutcome(valid=False, errors=[NO_PROFILE_FOR_VALIDATION])
        return validate_score_input(profile.definition, score_input)
