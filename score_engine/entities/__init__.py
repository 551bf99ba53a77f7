from score_engine.entities.profile import (
    BonusScope,
    BooleanPart,
    CooperativeBonus,
    NumberPart,
    Part,
    PenaltyDirection,
    PenaltyRule,
    PenaltyTarget,
    ScoreProfile,
    ScoreProfileDefinition,
)
from score_engine.entities.score import (
    CalculationResult,
    PartScore,
    PenaltyScore,
    ScoreBreakdown,
    ScoreFailure,
    ScoreInput,
    ScoreSuccess,
    ValidationOutcome,
)
from score_engine.entities.tournament import Tournament, TournamentStage

__all__ = [
    "BonusScope",
    "BooleanPart",
    "CalculationResult",
    "CooperativeBonus",
    "NumberPart",
    "Part",
    "PartScore",
    "PenaltyDirection",
    "PenaltyRule",
    "PenaltyScore",
    "PenaltyTarget",
    "ScoreBreakdown",
    "ScoreFailure",
    "ScoreInput",
    "ScoreProfile",
    "ScoreProfileDefinition",
    "ScoreSuccess",
    "Tournament",
    "TournamentStage",
    "ValidationOutcome",
]
