"""
Tests for the ease / tolerance tables.
"""
import pytest

from vesti.fit.schema import Category, EasePreset, Zone
from vesti.fit.tables import (
    BASE_TOLERANCE,
    EASE_TABLE,
    HIP_PERFECT_MAX,
    ease_for,
    ease_value,
    hip_perfect_max,
    tolerance_for,
)


class TestEaseTable:

    def test_pants_waist_is_perfect_ceiling(self):
        assert ease_value(Category.PANTS, EasePreset.REGULAR, Zone.WAIST) == 3.0
        assert ease_value(Category.PANTS, EasePreset.SLIM, Zone.WAIST) < 3.0
        assert ease_value(Category.PANTS, EasePreset.OVERSIZE, Zone.WAIST) > 3.0

    def test_upper_presets_are_ordered(self):
        for zone in (Zone.SHOULDERS, Zone.CHEST, Zone.WAIST):
            slim = ease_value(Category.UPPER, EasePreset.SLIM, zone)
            regular = ease_value(Category.UPPER, EasePreset.REGULAR, zone)
            oversize = ease_value(Category.UPPER, EasePreset.OVERSIZE, zone)
            assert slim <= regular < oversize

    def test_shoes_are_all_zero(self):
        for preset in EasePreset:
            assert all(v == 0 for v in ease_for(Category.SHOES, preset).values())

    def test_missing_preset_falls_back_to_regular(self):
        assert ease_for(Category.PANTS, "baggy") == ease_for(Category.PANTS, EasePreset.REGULAR)

    def test_missing_zone_uses_default(self):
        assert ease_value(Category.PANTS, EasePreset.REGULAR, Zone.CHEST) == 0.0
        assert ease_value(Category.PANTS, EasePreset.REGULAR, Zone.CHEST, default=None) is None

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            EASE_TABLE[Category.UPPER] = {}

    def test_nested_levels_are_read_only(self):
        with pytest.raises(TypeError):
            EASE_TABLE[Category.UPPER][EasePreset.REGULAR] = {}
        with pytest.raises(TypeError):
            ease_for(Category.UPPER, EasePreset.REGULAR)[Zone.CHEST] = 99.0
        with pytest.raises(TypeError):
            BASE_TOLERANCE[Category.UPPER][Zone.CHEST] = 1.0
        with pytest.raises(TypeError):
            HIP_PERFECT_MAX[EasePreset.REGULAR] = 0.0
        assert ease_value(Category.UPPER, EasePreset.REGULAR, Zone.CHEST) == 4.0
        assert tolerance_for(Category.UPPER, Zone.CHEST) == 4.0

    @pytest.mark.parametrize("preset, shoulders, chest", [
        (EasePreset.SLIM, 0.0, 1.0),
        (EasePreset.REGULAR, 2.0, 4.0),
        (EasePreset.OVERSIZE, 4.0, 8.0),
    ])
    def test_upper_shoulder_and_chest_ease(self, preset, shoulders, chest):
        assert ease_value(Category.UPPER, preset, Zone.SHOULDERS) == shoulders
        assert ease_value(Category.UPPER, preset, Zone.CHEST) == chest


class TestTolerances:

    def test_upper_tolerances(self):
        assert tolerance_for(Category.UPPER, Zone.SHOULDERS) == 2.0
        assert tolerance_for(Category.UPPER, Zone.CHEST) == 4.0
        assert tolerance_for(Category.UPPER, Zone.TORSO_LENGTH) == 3.0

    def test_non_upper_has_no_table(self):
        assert tolerance_for(Category.PANTS, Zone.WAIST) == 0.0

    def test_hip_ceiling(self):
        assert hip_perfect_max(EasePreset.SLIM) == 3.0
        assert hip_perfect_max(EasePreset.REGULAR) == 2.0
        assert hip_perfect_max(EasePreset.OVERSIZE) == 2.0
