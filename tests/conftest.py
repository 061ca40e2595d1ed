"""
Pytest configuration and shared fixtures for the fit engine tests.
"""
import pytest

from vesti.config.settings import FitSettings, get_settings
from vesti.fit.schema import Garment, Measurements


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached; every test starts from the environment defaults."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> FitSettings:
    return FitSettings()


# ============================================================================
# Fixtures: body measurements
# ============================================================================

@pytest.fixture
def upper_body() -> Measurements:
    return Measurements(shoulders=44, chest=96, waist=82, torso_length=52)


@pytest.fixture
def pants_body() -> Measurements:
    return Measurements(waist=80, leg_length=102)


@pytest.fixture
def foot() -> Measurements:
    return Measurements(foot_length=26.5)


# ============================================================================
# Fixtures: garment factories
# ============================================================================

@pytest.fixture
def make_pants():
    def _make(waist=82, leg_length=0, hip=0, elasticity=0, preset="regular", size="40"):
        return Garment(
            id=f"pants-{size}",
            size_label=size,
            category="pants",
            measures=Measurements(waist=waist, leg_length=leg_length, hip=hip),
            elasticity=elasticity,
            ease_preset=preset,
        )
    return _make


@pytest.fixture
def make_shirt():
    # Perfect match for upper_body under the regular preset
    def _make(shoulders=44, chest=96, waist=82, torso_length=52, preset="regular", size="M"):
        return Garment(
            id=f"shirt-{size}",
            size_label=size,
            category="remera",
            measures=Measurements(
                shoulders=shoulders, chest=chest, waist=waist, torso_length=torso_length
            ),
            ease_preset=preset,
        )
    return _make


@pytest.fixture
def make_shoe():
    def _make(foot_length=27, size="42"):
        return Garment(
            id=f"shoe-{size}",
            size_label=size,
            category="zapatillas",
            measures=Measurements(foot_length=foot_length),
        )
    return _make
