"""Score calculator: profile definition + score input → total and breakdown.

1. validate part inputs (missing / unknown / wrong type) and cooperative groups
2. score parts and cooperative bonuses
3. aggregate penalties
4. build the symbol table and evaluate the profile's total formula

Every validation problem from steps 1–3 is collected and reported together;
formula errors short-circuit. Failures are returned as ``ScoreFailure``
values, never raised, and a failure never carries a partial score.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any, Mapping

from pydantic import ValidationError

from score_engine.config.runtime import RuntimeSettings, get_settings
from score_engine.entities.profile import PENALTY_SYMBOLS, ScoreProfileDefinition
from score_engine.entities.score import (
    CalculationResult,
    PartScore,
    ScoreBreakdown,
    ScoreFailure,
    ScoreInput,
    ScoreSuccess,
    ValidationOutcome,
)
from score_engine.errors import (
    FormulaError,
    InvalidDefinition,
    InvalidInput,
    MalformedFormula,
    MissingPartInput,
    ScoringError,
    UnknownPartId,
    UnknownSymbol,
)
from score_engine.formula import evaluate, parse, referenced_symbols
from score_engine.scoring import aggregate_penalties, check_occurrences, is_achieved, resolve_bonus, score_part

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*", re.ASCII)


class _BoundaryError(Exception):
    def __init__(self, failure: ScoreFailure):
        super().__init__(failure.error)
        self.failure = failure


def _payload_errors(exc: ValidationError, error_cls: type[ScoringError]) -> list[ScoringError]:
    errors: list[ScoringError] = []
    for item in exc.errors():
        location = ".".join(str(part) for part in item["loc"]) or "payload"
        errors.append(error_cls(f"{location}: {item['msg']}"))
    return errors


def _as_definition(definition: ScoreProfileDefinition | Mapping[str, Any]) -> ScoreProfileDefinition:
    if isinstance(definition, ScoreProfileDefinition):
        return definition
    try:
        return ScoreProfileDefinition.model_validate(definition)
    except ValidationError as exc:
        raise _BoundaryError(ScoreFailure.from_errors(
            "Invalid score profile definition", _payload_errors(exc, InvalidDefinition),
        )) from exc


def _as_input(score_input: ScoreInput | Mapping[str, Any]) -> ScoreInput:
    if isinstance(score_input, ScoreInput):
        return score_input
    try:
        return ScoreInput.model_validate(score_input)
    except ValidationError as exc:
        raise _BoundaryError(ScoreFailure.from_errors(
            "Invalid score input", _payload_errors(exc, InvalidInput),
        )) from exc


def _score_parts(
    definition: ScoreProfileDefinition, score_input: ScoreInput
) -> tuple[dict[str, PartScore], list[ScoringError]]:
    errors: list[ScoringError] = []

    for part in definition.parts:
        if part.id not in score_input.parts:
            errors.append(MissingPartInput(f"part {part.id!r} ({part.label}) has no score input"))
    for part_id in score_input.parts:
        if definition.part(part_id) is None:
            errors.append(UnknownPartId(f"part {part_id!r} is not defined by the profile"))
    for part_id in score_input.cooperative:
        part = definition.part(part_id)
        if part is None:
            errors.append(UnknownPartId(f"cooperative group given for undefined part {part_id!r}"))
        elif part.cooperative_bonus is None:
            errors.append(UnknownPartId(
                f"cooperative group given for part {part_id!r} ({part.label}), which has no cooperative bonus"
            ))

    scores: dict[str, PartScore] = {}
    for part in definition.parts:
        if part.id not in score_input.parts:
            continue
        raw_value = score_input.parts[part.id]

        points = bonus = None
        try:
            points = score_part(part, raw_value)
        except ScoringError as exc:
            errors.append(exc)

        if part.cooperative_bonus is None:
            bonus = 0
        else:
            team_values = score_input.cooperative.get(part.id, ())
            try:
                bonus = resolve_bonus(part, part.cooperative_bonus, team_values)
            except ScoringError as exc:
                errors.append(exc)

        if points is None or bonus is None:
            continue
        # the evaluated team is part of its own group
        if not is_achieved(part, raw_value):
            bonus = 0
        scores[part.id] = PartScore(value=raw_value, points=points, bonus=bonus, total=points + bonus)

    return scores, errors


def _within_range(value: int | float) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def finalize_score(value: int | float, clamp_negative: bool = True) -> int:
    """Round half away from zero; optionally clamp at zero."""
    rounded = math.floor(abs(value) + 0.5)
    if value < 0:
        rounded = -rounded
    if clamp_negative:
        return max(0, rounded)
    return rounded


def calculate_match_score(
    definition: ScoreProfileDefinition | Mapping[str, Any],
    score_input: ScoreInput | Mapping[str, Any],
    settings: RuntimeSettings | None = None,
) -> CalculationResult:
    """Score one team-side of one match against a score profile."""
    settings = settings or get_settings()
    try:
        profile = _as_definition(definition)
        values = _as_input(score_input)
    except _BoundaryError as exc:
        logger.debug("score payload rejected: %s", exc.failure.errors)
        return exc.failure

    parts, errors = _score_parts(profile, values)
    errors.extend(check_occurrences(profile.penalties, values.penalties))
    if errors:
        logger.debug(
            "score validation failed for profile v%d with %d error(s)", profile.version, len(errors),
        )
        return ScoreFailure.from_errors("Validation failed", errors)

    penalties = aggregate_penalties(profile.penalties, values.penalties)

    symbols: dict[str, int | float] = {part_id: score.total for part_id, score in parts.items()}
    symbols.update(penalties.symbols())

    try:
        formula_value = evaluate(profile.total_formula, symbols)
        if not _within_range(formula_value):
            raise MalformedFormula("formula value out of range")
    except FormulaError as exc:
        logger.debug("formula evaluation failed for profile v%d: %s", profile.version, exc)
        return ScoreFailure.from_errors(str(exc), [exc])

    score = finalize_score(formula_value, clamp_negative=settings.clamp_negative_scores)

    breakdown = ScoreBreakdown(
        parts=parts,
        penalties=penalties.applied,
        total_penalties_self=penalties.self_total,
        total_penalties_opponent=penalties.opponent_total,
        net_penalties=penalties.net,
        symbols=symbols,
        formula_value=formula_value,
        final_score=score,
        profile_version=profile.version,
    )
    return ScoreSuccess(
        score=score,
        breakdown=breakdown,
        opponent_score_adjustment=penalties.opponent_total,
    )


def validate_score_input(
    definition: ScoreProfileDefinition | Mapping[str, Any],
    score_input: ScoreInput | Mapping[str, Any],
) -> ValidationOutcome:
    """Check a score input against a profile without evaluating the formula."""
    try:
        profile = _as_definition(definition)
        values = _as_input(score_input)
    except _BoundaryError as exc:
        return ValidationOutcome(valid=False, errors=exc.failure.errors, kinds=exc.failure.kinds)

    _, errors = _score_parts(profile, values)
    errors.extend(check_occurrences(profile.penalties, values.penalties))
    return ValidationOutcome(
        valid=not errors,
        errors=[str(e) for e in errors],
        kinds=[e.kind for e in errors],
    )


def check_profile(definition: ScoreProfileDefinition | Mapping[str, Any]) -> list[str]:
    """Static problems with a profile: unparsable formula, dangling symbols.

    Meant for save time; an empty list means every formula symbol resolves.
    """
    try:
        profile = _as_definition(definition)
    except _BoundaryError as exc:
        return exc.failure.errors

    problems: list[str] = []
    for part in profile.parts:
        if not _IDENTIFIER_RE.fullmatch(part.id):
            problems.append(
                f"part {part.id!r} cannot be referenced by the formula: not a valid identifier"
            )

    try:
        tree = parse(profile.total_formula)
    except MalformedFormula as exc:
        problems.append(str(exc))
        return problems

    known = {part.id for part in profile.parts} | set(PENALTY_SYMBOLS)
    for name in referenced_symbols(tree):
        if name not in known:
            problems.append(str(UnknownSymbol(name)))
    return problems
