"""initial schema: score profiles, tournaments, stages

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "score_profiles",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("definition_jsonb", _JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_score_profiles_name", "score_profiles", ["name"])
    op.create_index("ix_score_profiles_created_at", "score_profiles", ["created_at"])
    op.create_index("ix_score_profiles_updated_at", "score_profiles", ["updated_at"])

    op.create_table(
        "tournaments",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, server_default=""),
        sa.Column("score_profile_id", sa.String(), sa.ForeignKey("score_profiles.id"), nullable=True),
    )
    op.create_index("ix_tournaments_score_profile_id", "tournaments", ["score_profile_id"])

    op.create_table(
        "tournament_stages",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("tournament_id", sa.String(), sa.ForeignKey("tournaments.id"), nullable=True),
        sa.Column("name", sa.String(), nullable=False, server_default=""),
        sa.Column("score_profile_id", sa.String(), sa.ForeignKey("score_profiles.id"), nullable=True),
    )
    op.create_index("ix_tournament_stages_tournament_id", "tournament_stages", ["tournament_id"])
    op.create_index("ix_tournament_stages_score_profile_id", "tournament_stages", ["score_profile_id"])


def downgrade() -> None:
    op.drop_table("tournament_stages")
    op.drop_table("tournaments")
    op.drop_table("score_profiles")
