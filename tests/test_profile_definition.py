"""Tests for the score profile definition model."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from score_engine.config.runtime import reset_cache
from score_engine.entities.profile import (
    BonusScope,
    BooleanPart,
    NumberPart,
    ScoreProfileDefinition,
)


def _definition(**overrides):
    payload = {
        "version": 2,
        "parts": [
            {"id": "auto", "label": "Autonomous", "type": "NUMBER", "pointsPerUnit": 5, "maxValue": 10},
            {
                "id": "climb",
                "label": "Climb",
                "type": "BOOLEAN",
                "truePoints": 20,
                "cooperativeBonus": {"requiredTeamCount": 2, "bonusPoints": 10, "appliesTo": "PER_TEAM"},
            },
        ],
        "penalties": [
            {"id": "foul", "label": "Foul", "points": 5, "target": "OPPONENT", "direction": "ADD"},
        ],
        "totalFormula": "auto + climb + TOTAL_PENALTIES_OPPONENT",
    }
    payload.update(overrides)
    return payload


class TestScoreProfileDefinition:
    def test_parses_camel_case_document(self):
        definition = ScoreProfileDefinition.model_validate(_definition())

        assert definition.version == 2
        auto, climb = definition.parts
        assert isinstance(auto, NumberPart)
        assert auto.max_value == 10
        assert isinstance(climb, BooleanPart)
        assert climb.cooperative_bonus.applies_to is BonusScope.PER_TEAM
        assert definition.penalty("foul").points == 5
        assert definition.part("climb") is climb
        assert definition.part("missing") is None

    def test_accepts_attribute_names(self):
        definition = ScoreProfileDefinition(
            parts=[NumberPart(id="auto", label="Autonomous", points_per_unit=1)],
            total_formula="auto",
        )
        assert definition.version == 1
        assert definition.penalties == ()

    def test_unknown_keys_ignored(self):
        definition = ScoreProfileDefinition.model_validate(_definition(calculatedAt="2024-01-01"))
        assert definition.total_formula.startswith("auto")

    def test_dump_uses_camel_case(self):
        dumped = ScoreProfileDefinition.model_validate(_definition()).model_dump(
            mode="json", by_alias=True, exclude_none=True,
        )
        assert dumped["totalFormula"] == "auto + climb + TOTAL_PENALTIES_OPPONENT"
        assert dumped["parts"][0]["pointsPerUnit"] == 5
        assert dumped["parts"][1]["cooperativeBonus"]["requiredTeamCount"] == 2
        assert ScoreProfileDefinition.model_validate(dumped) == ScoreProfileDefinition.model_validate(_definition())

    def test_frozen(self):
        definition = ScoreProfileDefinition.model_validate(_definition())
        with pytest.raises(ValidationError):
            definition.total_formula = "1"

    def test_parts_required(self):
        with pytest.raises(ValidationError):
            ScoreProfileDefinition.model_validate(_definition(parts=[]))

    def test_duplicate_part_ids(self):
        parts = _definition()["parts"]
        with pytest.raises(ValidationError, match="duplicate part id 'auto'"):
            ScoreProfileDefinition.model_validate(_definition(parts=[parts[0], parts[0]]))

    def test_duplicate_penalty_ids(self):
        foul = _definition()["penalties"][0]
        with pytest.raises(ValidationError, match="duplicate penalty id 'foul'"):
            ScoreProfileDefinition.model_validate(_definition(penalties=[foul, foul]))

    def test_reserved_part_id(self):
        part = {"id": "NET_PENALTIES", "label": "Net", "type": "NUMBER", "pointsPerUnit": 1}
        with pytest.raises(ValidationError, match="reserved"):
            ScoreProfileDefinition.model_validate(_definition(parts=[part]))

    def test_unknown_part_type(self):
        part = {"id": "auto", "label": "Autonomous", "type": "TEXT"}
        with pytest.raises(ValidationError):
            ScoreProfileDefinition.model_validate(_definition(parts=[part]))

    @pytest.mark.parametrize("bonus", [
        {"requiredTeamCount": 3, "bonusPoints": 10, "appliesTo": "PER_TEAM"},
        {"requiredTeamCount": 2, "bonusPoints": 0, "appliesTo": "PER_TEAM"},
        {"requiredTeamCount": 2, "bonusPoints": 10, "appliesTo": "SOME_TEAMS"},
    ])
    def test_invalid_cooperative_bonus(self, bonus):
        part = {"id": "climb", "label": "Climb", "type": "BOOLEAN", "truePoints": 20, "cooperativeBonus": bonus}
        with pytest.raises(ValidationError):
            ScoreProfileDefinition.model_validate(_definition(parts=[part]))

    @pytest.mark.parametrize("part", [
        {"id": "auto", "label": "Autonomous", "type": "NUMBER", "pointsPerUnit": -1},
        {"id": "auto", "label": "Autonomous", "type": "NUMBER", "pointsPerUnit": 1, "maxValue": -1},
        {"id": "climb", "label": "Climb", "type": "BOOLEAN", "truePoints": -5},
        {"id": "", "label": "Empty", "type": "BOOLEAN", "truePoints": 5},
    ])
    def test_invalid_part_fields(self, part):
        with pytest.raises(ValidationError):
            ScoreProfileDefinition.model_validate(_definition(parts=[part], totalFormula="1"))

    def test_negative_penalty_points(self):
        rule = {"id": "foul", "label": "Foul", "points": -5, "target": "OPPONENT", "direction": "ADD"}
        with pytest.raises(ValidationError):
            ScoreProfileDefinition.model_validate(_definition(penalties=[rule]))

    @pytest.mark.parametrize("formula", ["", "   "])
    def test_blank_formula(self, formula):
        with pytest.raises(ValidationError):
            ScoreProfileDefinition.model_validate(_definition(totalFormula=formula))

    def test_formula_length_limit(self, monkeypatch):
        ScoreProfileDefinition.model_validate(_definition(totalFormula=" + ".join(["auto"] * 100)))

        monkeypatch.setenv("SCORE_MAX_FORMULA_LENGTH", "20")
        reset_cache()
        with pytest.raises(ValidationError, match="at most 20 characters"):
            ScoreProfileDefinition.model_validate(_definition())
