"""
Category Normalizer

Mapea etiquetas libres de categoría (cualquier idioma o variante de tienda)
a una de las tres categorías canónicas: upper / pants / shoes.

Clasificador explícito: cada categoría tiene su tabla de sinónimos exactos
y un conjunto de fragmentos que alcanzan por sí solos. Todo lo demás es upper.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, FrozenSet, Tuple

from vesti.core.logging import get_logger
from vesti.fit.schema import Category

logger = get_logger(__name__)


# ──────────────────────────────────────────────
# Synonym tables
# ──────────────────────────────────────────────

PANTS_SYNONYMS: FrozenSet[str] = frozenset({
    "pants", "pant", "trousers", "bottom", "bottoms",
    "jean", "jeans", "denim", "chino", "chinos", "joggers", "jogger",
    "leggings", "calzas", "cargo", "shorts", "short", "bermuda", "bermudas",
    "pantalon", "pantalón", "pantalones", "jogging", "babucha", "joggineta",
})
PANTS_FRAGMENTS: Tuple[str, ...] = ("pants",)

SHOES_SYNONYMS: FrozenSet[str] = frozenset({
    "shoes", "shoe", "footwear", "sneaker", "sneakers", "boot", "boots",
    "sandal", "sandals", "loafers", "calzado", "zapatilla", "zapatillas",
    "zapato", "zapatos", "bota", "botas", "botin", "botín", "botines",
    "sandalia", "sandalias", "ojotas", "mocasines",
})
SHOES_FRAGMENTS: Tuple[str, ...] = ("shoe",)

# Documental: estas etiquetas caen en upper igual que cualquier desconocida
UPPER_SYNONYMS: FrozenSet[str] = frozenset({
    "upper", "top", "tops", "shirt", "t-shirt", "tshirt", "tee", "hoodie",
    "sweater", "jacket", "coat", "blouse", "remera", "camisa", "buzo",
    "campera", "chaqueta", "blusa", "abrigo", "chomba",
})


def _matches(label: str, synonyms: FrozenSet[str], fragments: Tuple[str, ...]) -> bool:
    return label in synonyms or any(frag in label for frag in fragments)


def normalize_category(raw: Any) -> Category:
    """
    Etiqueta libre → categoría canónica. Función total e idempotente.

    >>> normalize_category(" Pantalón ")
    <Category.PANTS: 'pants'>
    """
    if isinstance(raw, Enum):
        raw = raw.value
    label = str(raw).strip().lower() if raw is not None else ""

    if _matches(label, PANTS_SYNONYMS, PANTS_FRAGMENTS):
        return Category.PANTS
    if _matches(label, SHOES_SYNONYMS, SHOES_FRAGMENTS):
        return Category.SHOES
    if label and label not in UPPER_SYNONYMS:
        logger.debug("category_defaulted_to_upper", raw=label)
    return Category.UPPER
