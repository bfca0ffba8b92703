"""Progression state machine tests."""

import pytest

from growing_together.core.progression import (
    ADULT_AGE,
    STAGE_THRESHOLDS,
    LifeStage,
    advance_turn,
    is_terminal,
    stage_for_age,
    stage_image_url,
)


class TestStageForAge:
    @pytest.mark.parametrize(
        "age,stage",
        [
            (0, LifeStage.INFANT),
            (1, LifeStage.TODDLER),
            (2, LifeStage.TODDLER),
            (3, LifeStage.PRESCHOOL),
            (5, LifeStage.PRESCHOOL),
            (6, LifeStage.ELEMENTARY),
            (12, LifeStage.ELEMENTARY),
            (13, LifeStage.TEEN),
            (17, LifeStage.TEEN),
            (18, LifeStage.ADULT),
            (45, LifeStage.ADULT),
        ],
    )
    def test_table_lookup(self, age, stage):
        assert stage_for_age(age) is stage

    def test_negative_age_rejected(self):
        with pytest.raises(ValueError):
            stage_for_age(-1)

    def test_thresholds_ascending_and_cover_every_stage(self):
        bounds = [bound for bound, _ in STAGE_THRESHOLDS]
        assert bounds == sorted(bounds)
        assert [stage for _, stage in STAGE_THRESHOLDS] == list(LifeStage)
        assert ADULT_AGE == 18


class TestAdvanceTurn:
    @pytest.mark.parametrize(
        "age,stage,expected",
        [
            (0, LifeStage.INFANT, (1, LifeStage.TODDLER)),
            (2, LifeStage.TODDLER, (3, LifeStage.PRESCHOOL)),
            (5, LifeStage.PRESCHOOL, (6, LifeStage.ELEMENTARY)),
            (12, LifeStage.ELEMENTARY, (13, LifeStage.TEEN)),
            (17, LifeStage.TEEN, (18, LifeStage.ADULT)),
        ],
    )
    def test_stage_boundaries(self, age, stage, expected):
        assert advance_turn(age, stage) == expected

    def test_within_stage(self):
        assert advance_turn(7, LifeStage.ELEMENTARY) == (8, LifeStage.ELEMENTARY)

    @pytest.mark.parametrize("age", [18, 19, 30, 99])
    def test_adult_is_terminal_and_idempotent(self, age):
        assert advance_turn(age, LifeStage.ADULT) == (age, LifeStage.ADULT)
        assert advance_turn(*advance_turn(age, LifeStage.ADULT)) == (age, LifeStage.ADULT)

    def test_stage_is_derived_from_age_not_input(self):
        """A mismatched incoming stage cannot leak into the result."""
        assert advance_turn(4, LifeStage.TEEN) == (5, LifeStage.PRESCHOOL)

    def test_full_childhood_takes_eighteen_turns(self):
        age, stage = 0, LifeStage.INFANT
        turns = 0
        while not is_terminal(stage):
            age, stage = advance_turn(age, stage)
            turns += 1
        assert (age, stage, turns) == (18, LifeStage.ADULT, 18)


class TestStageMetadata:
    def test_labels(self):
        assert LifeStage.INFANT.label == "Infant (0-1 yr)"
        assert LifeStage.TEEN.label == "Teenager (13-18 yrs)"
        assert LifeStage.ADULT.label == "Young Adult (18+ yrs)"

    def test_only_adult_is_terminal(self):
        assert [s for s in LifeStage if is_terminal(s)] == [LifeStage.ADULT]

    def test_every_stage_has_an_image(self):
        for stage in LifeStage:
            assert stage_image_url(stage).startswith("https://")
        assert "schoolchild" in stage_image_url(LifeStage.ELEMENTARY)
