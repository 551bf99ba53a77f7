"""Cooperative bonus resolution across an alliance-sized group of teams.

A part is "achieved" by a team when it contributed anything to it: a
non-zero count for number parts, ``True`` for boolean parts. The bonus is
all-or-nothing: every team in the group must achieve the part.
"""
from __future__ import annotations

from typing import Any, Sequence

from score_engine.entities.profile import BonusScope, BooleanPart, CooperativeBonus, NumberPart
from score_engine.errors import CooperativeGroupSizeMismatch, InvalidPartValue
from score_engine.scoring.parts import validate_part_value


def is_achieved(part: NumberPart | BooleanPart, raw_value: Any) -> bool:
    if isinstance(part, NumberPart):
        return raw_value > 0
    if isinstance(part, BooleanPart):
        return raw_value is True
    raise TypeError(f"unsupported part type {type(part).__name__}")


def resolve_bonus(
    part: NumberPart | BooleanPart,
    bonus: CooperativeBonus,
    team_values: Sequence[Any],
) -> int:
    """Bonus points attributed to the evaluated team's own breakdown."""
    if len(team_values) != bonus.required_team_count:
        raise CooperativeGroupSizeMismatch(
            f"part {part.id!r} cooperative bonus needs values for "
            f"{bonus.required_team_count} teams, got {len(team_values)}"
        )

    for index, value in enumerate(team_values, start=1):
        try:
            validate_part_value(part, value)
        except InvalidPartValue as exc:
            raise InvalidPartValue(f"cooperative team {index}: {exc.message}") from exc

    if not all(is_achieved(part, value) for value in team_values):
        return 0

    if bonus.applies_to is BonusScope.ALL_TEAMS:
        # one shared award; each match side is scored on its own, so the
        # evaluated side carries the full amount
        return bonus.bonus_points
    if bonus.applies_to is BonusScope.PER_TEAM:
        return bonus.bonus_points
    raise ValueError(f"unsupported bonus scope {bonus.applies_to!r}")
