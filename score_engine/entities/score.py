"""Per-evaluation contracts: the score input payload and the result shapes."""
from __future__ import annotations

from typing import Any, Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from score_engine.entities.profile import PenaltyDirection, PenaltyTarget
from score_engine.errors import ErrorKind, ScoringError

Number = Union[int, float]


class ScoreInput(BaseModel):
    """Raw values submitted for one team-side of one match.

    Values are kept as submitted; type checks belong to the part scorer so a
    mismatch is reported against the part rather than as a payload error.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    parts: dict[str, Any] = Field(default_factory=dict)
    penalties: dict[str, Any] = Field(default_factory=dict)
    # part id → raw value of every team in that part's cooperating group
    cooperative: dict[str, tuple[Any, ...]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _normalize_list_form(cls, data: Any) -> Any:
        """Accept ``[{partId, value}]`` / ``[{penaltyId, count}]`` lists."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if isinstance(data.get("parts"), list):
            data["parts"] = _entries_to_mapping(data["parts"], "partId", "value", "part")
        if isinstance(data.get("penalties"), list):
            data["penalties"] = _entries_to_mapping(data["penalties"], "penaltyId", "count", "penalty")
        if isinstance(data.get("cooperative"), list):
            data["cooperative"] = _entries_to_mapping(data["cooperative"], "partId", "values", "cooperative")
        return data


def _entries_to_mapping(entries: list[Any], key_field: str, value_field: str, label: str) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for entry in entries:
        if not isinstance(entry, dict) or key_field not in entry:
            raise ValueError(f"{label} entries must be objects with a {key_field!r} field")
        key = entry[key_field]
        if not isinstance(key, str):
            raise ValueError(f"{label} entry {key_field!r} must be a string, got {type(key).__name__}")
        if key in mapping:
            raise ValueError(f"duplicate {label} entry {key!r}")
        mapping[key] = entry.get(value_field)
    return mapping


_RESULT_CONFIG = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class PartScore(BaseModel):
    model_config = _RESULT_CONFIG

    value: Any
    points: Number
    bonus: Number = 0
    total: Number


class PenaltyScore(BaseModel):
    model_config = _RESULT_CONFIG

    count: int
    target: PenaltyTarget
    direction: PenaltyDirection
    total_points: int  # signed by direction


class ScoreBreakdown(BaseModel):
    model_config = _RESULT_CONFIG

    parts: dict[str, PartScore] = Field(default_factory=dict)
    penalties: dict[str, PenaltyScore] = Field(default_factory=dict)
    total_penalties_self: int = 0
    total_penalties_opponent: int = 0
    net_penalties: int = 0
    symbols: dict[str, Number] = Field(default_factory=dict)
    formula_value: Number = 0
    final_score: int = 0
    profile_version: int = 1


class ScoreSuccess(BaseModel):
    model_config = _RESULT_CONFIG

    success: Literal[True] = True
    score: int
    breakdown: ScoreBreakdown
    opponent_score_adjustment: int = 0

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ScoreFailure(BaseModel):
    model_config = _RESULT_CONFIG

    success: Literal[False] = False
    error: str
    errors: list[str] = Field(default_factory=list)
    kinds: list[ErrorKind] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, error: str, errors: Sequence[ScoringError]) -> "ScoreFailure":
        return cls(
            error=error,
            errors=[str(e) for e in errors],
            kinds=[e.kind for e in errors],
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, include={"success", "error", "errors"})


CalculationResult = Union[ScoreSuccess, ScoreFailure]


class ValidationOutcome(BaseModel):
    model_config = _RESULT_CONFIG

    valid: bool
    errors: list[str] = Field(default_factory=list)
    kinds: list[ErrorKind] = Field(default_factory=list)
