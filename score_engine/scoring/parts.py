"""Part scorer: raw achieved value → points for one scoring part."""
from __future__ import annotations

import math
import sys
from typing import Any

from score_engine.entities.profile import BooleanPart, NumberPart
from score_engine.errors import InvalidPartValue


def _describe(part: NumberPart | BooleanPart) -> str:
    return f"part {part.id!r} ({part.label})"


def validate_part_value(part: NumberPart | BooleanPart, raw_value: Any) -> None:
    """Raise InvalidPartValue unless ``raw_value`` fits the part's variant."""
    if isinstance(part, NumberPart):
        # bool is an int subclass, but a checkbox is not a count
        if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
            raise InvalidPartValue(
                f"{_describe(part)} must be a number, got {type(raw_value).__name__}"
            )
        if isinstance(raw_value, float) and not math.isfinite(raw_value):
            raise InvalidPartValue(f"{_describe(part)} must be a finite number")
        if isinstance(raw_value, int) and abs(raw_value) > sys.float_info.max:
            raise InvalidPartValue(f"{_describe(part)} is out of range")
        if raw_value < 0:
            raise InvalidPartValue(f"{_describe(part)} cannot be negative, got {raw_value}")
        return

    if isinstance(part, BooleanPart):
        if not isinstance(raw_value, bool):
            raise InvalidPartValue(
                f"{_describe(part)} must be a boolean, got {type(raw_value).__name__}"
            )
        return

    raise TypeError(f"unsupported part type {type(part).__name__}")


def effective_units(part: NumberPart, raw_value: int | float) -> int | float:
    """Raw unit count capped at ``maxValue`` when the part has one."""
    if part.max_value is None:
        return raw_value
    return min(raw_value, part.max_value)


def score_part(part: NumberPart | BooleanPart, raw_value: Any) -> int | float:
    validate_part_value(part, raw_value)

    if isinstance(part, NumberPart):
        return effective_units(part, raw_value) * part.points_per_unit
    return part.true_points if raw_value else 0
