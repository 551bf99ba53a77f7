"""Score profile definition: the versioned scoring config authored by admins.

Persisted as a JSON document on the score profile record, using camelCase
keys (``totalFormula``, ``pointsPerUnit`` ...). Models accept either the
camelCase alias or the Python attribute name and are frozen: the engine only
ever reads a definition.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from score_engine.config.runtime import get_settings


TOTAL_PENALTIES_SELF = "TOTAL_PENALTIES_SELF"
TOTAL_PENALTIES_OPPONENT = "TOTAL_PENALTIES_OPPONENT"
NET_PENALTIES = "NET_PENALTIES"

# formula symbols reserved for penalty aggregates
PENALTY_SYMBOLS = (TOTAL_PENALTIES_SELF, TOTAL_PENALTIES_OPPONENT, NET_PENALTIES)


class BonusScope(StrEnum):
    ALL_TEAMS = "ALL_TEAMS"
    PER_TEAM = "PER_TEAM"


class PenaltyTarget(StrEnum):
    SELF = "SELF"
    OPPONENT = "OPPONENT"


class PenaltyDirection(StrEnum):
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"


_MODEL_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
    extra="ignore",
)


class CooperativeBonus(BaseModel):
    """Reward for a part achieved by every team of an alliance-sized group."""

    model_config = _MODEL_CONFIG

    required_team_count: Literal[2, 4]
    bonus_points: int = Field(ge=1)
    applies_to: BonusScope
    description: str | None = Field(default=None, max_length=500)


class NumberPart(BaseModel):
    model_config = _MODEL_CONFIG

    type: Literal["NUMBER"] = "NUMBER"
    id: str = Field(min_length=1, max_length=64)
    label: str = Field(min_length=1, max_length=180)
    description: str | None = Field(default=None, max_length=500)
    points_per_unit: int | float = Field(ge=0)
    max_value: int | None = Field(default=None, ge=0)
    cooperative_bonus: CooperativeBonus | None = None


class BooleanPart(BaseModel):
    model_config = _MODEL_CONFIG

    type: Literal["BOOLEAN"] = "BOOLEAN"
    id: str = Field(min_length=1, max_length=64)
    label: str = Field(min_length=1, max_length=180)
    description: str | None = Field(default=None, max_length=500)
    true_points: int | float = Field(ge=0)
    cooperative_bonus: CooperativeBonus | None = None


Part = Annotated[Union[NumberPart, BooleanPart], Field(discriminator="type")]


class PenaltyRule(BaseModel):
    model_config = _MODEL_CONFIG

    id: str = Field(min_length=1, max_length=64)
    label: str = Field(min_length=1, max_length=180)
    description: str | None = Field(default=None, max_length=500)
    points: int = Field(ge=0)
    target: PenaltyTarget
    direction: PenaltyDirection


class ScoreProfileDefinition(BaseModel):
    model_config = _MODEL_CONFIG

    version: int = Field(default=1, ge=1)
    parts: tuple[Part, ...] = Field(min_length=1)
    penalties: tuple[PenaltyRule, ...] = ()
    total_formula: str = Field(min_length=1)
    notes: str | None = Field(default=None, max_length=1000)

    @field_validator("total_formula")
    @classmethod
    def _formula_within_length(cls, value: str) -> str:
        limit = get_settings().max_formula_length
        if len(value) > limit:
            raise ValueError(f"totalFormula must be at most {limit} characters")
        if not value.strip():
            raise ValueError("totalFormula must not be blank")
        return value

    @model_validator(mode="after")
    def _ids_unique(self) -> "ScoreProfileDefinition":
        for kind, items in (("part", self.parts), ("penalty", self.penalties)):
            seen: set[str] = set()
            for item in items:
                if item.id in seen:
                    raise ValueError(f"duplicate {kind} id {item.id!r}")
                seen.add(item.id)
        for part in self.parts:
            if part.id in PENALTY_SYMBOLS:
                raise ValueError(f"part id {part.id!r} is reserved for penalty totals")
        return self

    def part(self, part_id: str) -> NumberPart | BooleanPart | None:
        for part in self.parts:
            if part.id == part_id:
                return part
        return None

    def penalty(self, penalty_id: str) -> PenaltyRule | None:
        for rule in self.penalties:
            if rule.id == penalty_id:
                return rule
        return None


@dataclass
class ScoreProfile:
    """A named, persisted score profile record."""
    id: str
    name: str
    definition: ScoreProfileDefinition
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

