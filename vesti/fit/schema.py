"""
Vesti Fit Engine — Core Data Schemas

Medidas del cuerpo, medidas de la prenda, resultado de calce y recomendación.
Todos los registros son inmutables: se crean por cálculo y nunca se mutan.
La coerción de entradas vive acá para que el motor sea una función total.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

import numpy as np

from vesti.core.logging import get_logger

logger = get_logger(__name__)


# ──────────────────────────────────────────────
# Enums
# ──────────────────────────────────────────────

class Category(str, Enum):
    UPPER = "upper"
    PANTS = "pants"
    SHOES = "shoes"


class EasePreset(str, Enum):
    SLIM = "slim"
    REGULAR = "regular"
    OVERSIZE = "oversize"

    @classmethod
    def resolve(cls, raw: Any) -> "EasePreset":
        """Preset desconocido o ausente → regular."""
        if isinstance(raw, cls):
            return raw
        key = str(raw or "").strip().lower()
        for preset in cls:
            if preset.value == key:
                return preset
        if key:
            logger.debug("ease_preset_defaulted", requested=key, preset=cls.REGULAR.value)
        return cls.REGULAR


class Zone(str, Enum):
    SHOULDERS = "hombros"
    CHEST = "pecho"
    WAIST = "cintura"
    HIP = "cadera"
    TORSO_LENGTH = "largoTorso"
    LEG_LENGTH = "largoPierna"
    FOOT_LENGTH = "pieLargo"


class WidthStatus(str, Enum):
    PERFECTO = "Perfecto"
    AJUSTADO = "Ajustado"
    HOLGADO = "Holgado"


class LengthStatus(str, Enum):
    CORTO = "Corto"
    PERFECTO = "Perfecto"
    LARGO = "Largo"


class RecommendationTag(str, Enum):
    OK = "OK"
    SIZE_UP = "SIZE_UP"
    SIZE_DOWN = "SIZE_DOWN"
    CHECK_LENGTH = "CHECK_LENGTH"


# ──────────────────────────────────────────────
# Numeric helpers
# ──────────────────────────────────────────────

def to_number(value: Any) -> float:
    """
    Parser numérico tolerante. Acepta coma o punto como separador decimal.
    Cualquier valor inválido o no finito → 0.0. Nunca lanza.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


_CENTS = Decimal("0.01")


def round_delta(value: float) -> float:
    """Redondeo half-away-from-zero a 2 decimales (1.005 → 1.01)."""
    # round(.., 10) limpia el ruido de la resta en punto flotante antes de cuantizar
    exact = Decimal(repr(round(to_number(value), 10)))
    try:
        return float(exact.quantize(_CENTS, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # magnitudes fuera de la precisión del contexto decimal
        return float(exact)


def elasticity_fraction(pct: Any) -> float:
    """Porcentaje de elasticidad (0–100) → fracción en [0, 1]."""
    return float(np.clip(to_number(pct) / 100.0, 0.0, 1.0))


# ──────────────────────────────────────────────
# Data Classes
# ──────────────────────────────────────────────

# Alias aceptados al construir desde un mapping (nombres de zona del widget)
_MEASUREMENT_ALIASES = {
    "hombros": "shoulders",
    "pecho": "chest",
    "cintura": "waist",
    "cadera": "hip",
    "largoTorso": "torso_length",
    "largoPierna": "leg_length",
    "pie_largo": "foot_length",
    "pieLargo": "foot_length",
}


@dataclass(frozen=True)
class Measurements:
    """Medidas del cuerpo o de la prenda, en cm. Inválido o negativo → 0."""
    shoulders: float = 0.0
    chest: float = 0.0
    waist: float = 0.0
    torso_length: float = 0.0
    leg_length: float = 0.0
    foot_length: float = 0.0
    hip: float = 0.0  # opcional: 0 = sin dato

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, max(0.0, to_number(getattr(self, f.name))))

    @classmethod
    def coerce(cls, obj: Any) -> "Measurements":
        if isinstance(obj, cls):
            return obj
        if not isinstance(obj, Mapping):
            return cls()
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, val in obj.items():
            name = _MEASUREMENT_ALIASES.get(key, key)
            if name in known:
                values[name] = val
        return cls(**values)

    def get(self, zone: Zone) -> float:
        return getattr(self, _ZONE_FIELDS[zone])


_ZONE_FIELDS = {
    Zone.SHOULDERS: "shoulders",
    Zone.CHEST: "chest",
    Zone.WAIST: "waist",
    Zone.HIP: "hip",
    Zone.TORSO_LENGTH: "torso_length",
    Zone.LEG_LENGTH: "leg_length",
    Zone.FOOT_LENGTH: "foot_length",
}


@dataclass(frozen=True)
class Garment:
    """Prenda evaluada: una variante de talle de un producto."""
    id: str = ""
    size_label: str = ""
    category: str = Category.UPPER.value  # canónica o texto libre
    brand: Optional[str] = None
    measures: Measurements = field(default_factory=Measurements)
    elasticity: float = 0.0  # porcentaje 0–100
    ease_preset: str = EasePreset.REGULAR.value

    @classmethod
    def coerce(cls, obj: Any) -> "Garment":
        if isinstance(obj, cls):
            return obj
        if not isinstance(obj, Mapping):
            return cls()

        def pick(*keys, default=None):
            for k in keys:
                if obj.get(k) is not None:
                    return obj[k]
            return default

        category = pick("category", "categoria", default=Category.UPPER.value)
        preset = pick("ease_preset", "easePreset", default=EasePreset.REGULAR.value)
        brand = pick("brand")
        return cls(
            id=str(pick("id", default="")),
            size_label=str(pick("size_label", "sizeLabel", default="")),
            category=category.value if isinstance(category, Enum) else str(category),
            brand=str(brand) if brand is not None else None,
            measures=Measurements.coerce(pick("measures", "measurements")),
            elasticity=to_number(pick("elasticity", "stretch_pct", "stretchPct")),
            ease_preset=preset.value if isinstance(preset, Enum) else str(preset),
        )


@dataclass(frozen=True)
class ZoneFit:
    """Veredicto de una zona. delta = prenda efectiva − cuerpo (positivo = suelto/largo)."""
    zone: Zone
    status: Any  # WidthStatus | LengthStatus
    delta: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "zone": getattr(self.zone, "value", self.zone),
            "status": str(getattr(self.status, "value", self.status)),
            "delta": self.delta,
        }


@dataclass(frozen=True)
class FitResult:
    """Resultado del cálculo de calce para una prenda."""
    category: Category
    overall: WidthStatus
    widths: List[ZoneFit] = field(default_factory=list)
    lengths: List[ZoneFit] = field(default_factory=list)
    debug: Dict[str, Any] = field(default_factory=dict)  # sólo diagnóstico

    def width(self, zone: Zone) -> Optional[ZoneFit]:
        return next((z for z in self.widths if z.zone == zone), None)

    def length(self, zone: Zone) -> Optional[ZoneFit]:
        return next((z for z in self.lengths if z.zone == zone), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "overall": self.overall.value,
            "widths": [z.to_dict() for z in self.widths],
            "lengths": [z.to_dict() for z in self.lengths],
            "debug": dict(self.debug),
        }


@dataclass(frozen=True)
class Recommendation:
    tag: RecommendationTag
    title: str
    message: str
    suggested_size: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag": self.tag.value,
            "title": self.title,
            "message": self.message,
            "suggestedSize": self.suggested_size,
        }


@dataclass(frozen=True)
class SizeReport:
    """Mejor variante entre varios talles de un mismo producto."""
    garment: Garment
    fit: FitResult
    recommendation: Recommendation
    all_sizes: Dict[str, RecommendationTag] = field(default_factory=dict)
