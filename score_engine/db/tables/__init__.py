from score_engine.db.tables.profiles import ScoreProfileRow, TournamentRow, TournamentStageRow

__all__ = ["ScoreProfileRow", "TournamentRow", "TournamentStageRow"]
