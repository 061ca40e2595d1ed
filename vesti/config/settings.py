"""
Tunable fit constants, loaded with pydantic-settings.

Umbrales sin respaldo de tabla de talles (tolerancia de calzado, corte de
cadera crítica) se configuran por entorno con prefijo VESTI_, por ejemplo:

    VESTI_SHOE_LENGTH_TOLERANCE=0.8
    VESTI_HIP_CRITICAL_DELTA=-4
"""

from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from vesti.core.logging import get_logger

logger = get_logger(__name__)


class FitSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VESTI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Fit thresholds (cm)
    # ==========================================================================
    shoe_length_tolerance: float = Field(default=0.6, ge=0, description="Max extra foot length still Perfecto")
    hip_critical_delta: float = Field(default=-5.0, description="Hip delta below which pants always size up")
    pants_leg_tolerance: float = Field(default=2.0, ge=0, description="Symmetric leg-length band")
    pants_default_perfect_max: float = Field(default=3.0, ge=0, description="Waist ceiling when the ease table has none")

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = Field(default="INFO", description="Minimum log level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")


@lru_cache()
def get_settings() -> FitSettings:
    """
    Cached settings instance. Call get_settings.cache_clear() after changing env.

    Un valor inválido en el entorno no corta el cálculo de calce: se avisa
    y se usan los valores por defecto.
    """
    try:
        return FitSettings()
    except ValidationError as e:
        logger.warning("invalid_fit_settings", errors=e.errors(include_url=False))
        return FitSettings.model_construct()
