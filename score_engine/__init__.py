"""Score profile evaluation engine for tournament match results."""
from score_engine.services.score_calculator import (
    calculate_match_score,
    check_profile,
    validate_score_input,
)

__all__ = ["calculate_match_score", "check_profile", "validate_score_input"]
