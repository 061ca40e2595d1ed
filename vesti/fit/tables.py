"""
Ease / Tolerance Tables

Datos estáticos de sólo lectura. Valores en cm.

EASE_TABLE: holgura por perfil de calce que se suma a la medida efectiva de
la prenda antes de compararla con el cuerpo. En pants, el valor de cintura
es directamente el techo de "Perfecto". En shoes todo es 0: el algoritmo de
calzado usa una tolerancia absoluta fija.

BASE_TOLERANCE: banda simétrica por zona para upper. Pants y shoes usan
bandas propias (ver fit_calculator).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

from vesti.fit.schema import Category, EasePreset, Zone


# ──────────────────────────────────────────────
# Ease table (category × preset → zone → cm)
# ──────────────────────────────────────────────

def _freeze(table: Any) -> Any:
    """Congela todos los niveles de una tabla anidada."""
    if isinstance(table, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in table.items()})
    return table


# Hombros y pecho: holgura original del widget. Cintura y largo de torso: propias.
EASE_TABLE = _freeze({
    Category.UPPER: {
        EasePreset.SLIM:     {Zone.SHOULDERS: 0.0, Zone.CHEST: 1.0, Zone.WAIST: 0.0, Zone.TORSO_LENGTH: 0.0},
        EasePreset.REGULAR:  {Zone.SHOULDERS: 2.0, Zone.CHEST: 4.0, Zone.WAIST: 2.0, Zone.TORSO_LENGTH: 0.0},
        EasePreset.OVERSIZE: {Zone.SHOULDERS: 4.0, Zone.CHEST: 8.0, Zone.WAIST: 6.0, Zone.TORSO_LENGTH: 2.0},
    },
    Category.PANTS: {
        EasePreset.SLIM:     {Zone.WAIST: 2.0},
        EasePreset.REGULAR:  {Zone.WAIST: 3.0},
        EasePreset.OVERSIZE: {Zone.WAIST: 5.0},
    },
    Category.SHOES: {
        EasePreset.SLIM:     {Zone.FOOT_LENGTH: 0.0},
        EasePreset.REGULAR:  {Zone.FOOT_LENGTH: 0.0},
        EasePreset.OVERSIZE: {Zone.FOOT_LENGTH: 0.0},
    },
})

# ──────────────────────────────────────────────
# Base tolerance (upper only)
# ──────────────────────────────────────────────

BASE_TOLERANCE = _freeze({
    Category.UPPER: {
        Zone.SHOULDERS: 2.0,
        Zone.CHEST: 4.0,
        Zone.WAIST: 4.0,
        Zone.TORSO_LENGTH: 3.0,
    },
})

# Techo de "Perfecto" para cadera en pants
HIP_PERFECT_MAX = _freeze({EasePreset.SLIM: 3.0})
HIP_PERFECT_MAX_DEFAULT = 2.0


def ease_for(category: Category, preset: EasePreset) -> Mapping[Zone, float]:
    """Holgura por zona; si el preset no existe para la categoría, usa regular."""
    by_preset = EASE_TABLE.get(category, {})
    return by_preset.get(preset) or by_preset.get(EasePreset.REGULAR, {})


def ease_value(category: Category, preset: EasePreset, zone: Zone,
               default: Optional[float] = 0.0) -> Optional[float]:
    return ease_for(category, preset).get(zone, default)


def tolerance_for(category: Category, zone: Zone) -> float:
    return BASE_TOLERANCE.get(category, {}).get(zone, 0.0)


def hip_perfect_max(preset: EasePreset) -> float:
    return HIP_PERFECT_MAX.get(preset, HIP_PERFECT_MAX_DEFAULT)
