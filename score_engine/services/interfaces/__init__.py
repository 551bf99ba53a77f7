from score_engine.services.interfaces.score_profile_repository import ScoreProfileRepository

__all__ = ["ScoreProfileRepository"]
