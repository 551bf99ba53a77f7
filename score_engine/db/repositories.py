from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from score_engine.db.tables import ScoreProfileRow, TournamentRow, TournamentStageRow
from score_engine.entities.profile import ScoreProfile, ScoreProfileDefinition
from score_engine.entities.tournament import Tournament, TournamentStage
from score_engine.services.interfaces.score_profile_repository import ScoreProfileRepository


class DBScoreProfileRepository(ScoreProfileRepository):
    def __init__(self, session: Session):
        self._session = session

    def rollback(self) -> None:
        self._session.rollback()

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError:
            self.rollback()
            raise

    # ── profiles ──

    def fetch_profile(self, profile_id: str) -> ScoreProfile | None:
        row = self._session.get(ScoreProfileRow, profile_id)
        return self._profile_to_domain(row) if row else None

    def fetch_all_profiles(self) -> list[ScoreProfile]:
        rows = self._session.exec(
            select(ScoreProfileRow).order_by(ScoreProfileRow.updated_at.desc())
        ).all()
        return [self._profile_to_domain(row) for row in rows]

    def save_profile(self, profile: ScoreProfile) -> None:
        existing = self._session.get(ScoreProfileRow, profile.id)
        row = self._profile_to_row(profile)

        if existing is None:
            self._session.add(row)
        else:
            existing.name = row.name
            existing.description = row.description
            existing.definition_jsonb = row.definition_jsonb
            existing.updated_at = datetime.now(timezone.utc)

        self._commit()

    # ── tournaments and stages ──

    def fetch_tournament(self, tournament_id: str) -> Tournament | None:
        row = self._session.get(TournamentRow, tournament_id)
        if row is None:
            return None
        return Tournament(id=row.id, name=row.name, score_profile_id=row.score_profile_id)

    def save_tournament(self, tournament: Tournament) -> None:
        existing = self._session.get(TournamentRow, tournament.id)
        row = TournamentRow(
            id=tournament.id,
            name=tournament.name,
            score_profile_id=tournament.score_profile_id,
        )
        if existing is None:
            self._session.add(row)
        else:
            existing.name = row.name
            existing.score_profile_id = row.score_profile_id
        self._commit()

    def fetch_stage(self, stage_id: str) -> TournamentStage | None:
        row = self._session.get(TournamentStageRow, stage_id)
        if row is None:
            return None
        return TournamentStage(
            id=row.id,
            tournament_id=row.tournament_id,
            name=row.name,
            score_profile_id=row.score_profile_id,
        )

    def save_stage(self, stage: TournamentStage) -> None:
        existing = self._session.get(TournamentStageRow, stage.id)
        row = TournamentStageRow(
            id=stage.id,
            tournament_id=stage.tournament_id,
            name=stage.name,
            score_profile_id=stage.score_profile_id,
        )
        if existing is None:
            self._session.add(row)
        else:
            existing.tournament_id = row.tournament_id
            existing.name = row.name
            existing.score_profile_id = row.score_profile_id
        self._commit()

    @staticmethod
    def _profile_to_domain(row: ScoreProfileRow) -> ScoreProfile:
        return ScoreProfile(
            id=row.id,
            name=row.name,
            description=row.description,
            definition=ScoreProfileDefinition.model_validate(row.definition_jsonb),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _profile_to_row(profile: ScoreProfile) -> ScoreProfileRow:
        return ScoreProfileRow(
            id=profile.id,
            name=profile.name.strip(),
            description=profile.description.strip() if profile.description else None,
            definition_jsonb=profile.definition.model_dump(mode="json", by_alias=True, exclude_none=True),
            created_at=profile.created_at,
            updated_at=datetime.now(timezone.utc),
        )
