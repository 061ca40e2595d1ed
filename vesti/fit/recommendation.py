"""
Recommendation Decider

Reduce un FitResult a una única acción (tag) con título y mensaje.

Reglas por categoría:
- PANTS: decide la cintura; largo de pierna escala OK → CHECK_LENGTH;
         cadera crítica (delta < hip_critical_delta) fuerza SIZE_UP siempre.
- SHOES: decide el largo de pie.
- UPPER: deciden hombros y pecho; cintura y largo de torso sólo advierten.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from vesti.config.settings import FitSettings, get_settings
from vesti.core.logging import get_logger
from vesti.fit.category import normalize_category
from vesti.fit.fit_calculator import compute_fit
from vesti.fit.schema import (
    Category,
    FitResult,
    Garment,
    LengthStatus,
    Recommendation,
    RecommendationTag,
    SizeReport,
    WidthStatus,
    Zone,
    ZoneFit,
    to_number,
)

logger = get_logger(__name__)

Tag = RecommendationTag


# ──────────────────────────────────────────────
# Texts
# ──────────────────────────────────────────────

ZONE_NAMES = {
    Zone.SHOULDERS: "Hombros",
    Zone.CHEST: "Pecho",
    Zone.WAIST: "Cintura",
    Zone.HIP: "Cadera",
    Zone.TORSO_LENGTH: "Largo de torso",
    Zone.LEG_LENGTH: "Largo de pierna",
    Zone.FOOT_LENGTH: "Largo del pie",
}

TITLES = {
    Tag.OK: "Calce recomendado · Talle {size}",
    Tag.SIZE_UP: "Probá un talle más · Talle actual {size}",
    Tag.SIZE_DOWN: "Probá un talle menos · Talle actual {size}",
    Tag.CHECK_LENGTH: "Revisá el largo · Talle {size}",
}
REVIEW_TITLE = "Revisá antes de comprar · Talle {size}"

PANTS_MESSAGES = {
    Tag.OK: "La cintura calza bien para tus medidas.",
    Tag.SIZE_UP: "La cintura queda ajustada: probá un talle más.",
    Tag.SIZE_DOWN: "La cintura queda holgada: si preferís un calce más al cuerpo, probá un talle menos.",
    Tag.CHECK_LENGTH: "La cintura calza bien, pero el largo podría no ser ideal. Revisalo antes de comprar.",
}
HIP_CRITICAL_MESSAGE = "La cadera queda muy ajustada: te recomendamos un talle más."

SHOES_MESSAGES = {
    Tag.OK: "El largo del pie calza bien con este número.",
    Tag.SIZE_UP: "El calzado queda corto para tu pie: probá un número más.",
    Tag.SIZE_DOWN: "Sobra largo en el calzado: si lo preferís justo, probá un número menos.",
}

UPPER_MESSAGES = {
    Tag.OK: "Hombros y pecho calzan bien para tus medidas.",
    Tag.SIZE_UP: "Vemos {zones} al límite o ajustado: probá un talle más.",
    Tag.SIZE_DOWN: "Vemos holgura en {zones}: si preferís un calce más al cuerpo, probá un talle menos.",
}
UPPER_REVIEW_MESSAGE = "Hombros y pecho calzan bien, pero revisá antes de comprar: {zones}."

KEY_ZONES = {
    Category.SHOES: "Zona clave: Largo del pie",
    Category.PANTS: "Zona clave: Cintura",
    Category.UPPER: "Zonas clave: Pecho y hombros",
}

ALPHA_SIZES = ["XS", "S", "M", "L", "XL", "2XL", "3XL", "4XL"]
_ALPHA_ALIASES = {"XXL": "2XL", "XXXL": "3XL", "XXXXL": "4XL"}
_NUMERIC_LABEL = re.compile(r"-?\d+(?:[.,]\d+)?")


# ──────────────────────────────────────────────
# Label helpers
# ──────────────────────────────────────────────

def display_size_label(raw: Any) -> str:
    """Etiqueta visible del talle. 'Default Title' / 'Default' / vacío → 'Único'."""
    label = str(raw).strip() if raw is not None else ""
    if not label or label.lower() in ("default title", "default"):
        return "Único"
    return label


def suggest_size_label(label: Any, tag: Any) -> str:
    """Talle sugerido a partir del actual y el tag (un talle más / menos)."""
    current = display_size_label(label)
    if tag not in (Tag.SIZE_UP, Tag.SIZE_DOWN):
        return current
    step = 1 if tag == Tag.SIZE_UP else -1

    if _NUMERIC_LABEL.fullmatch(current):
        return f"{float(current.replace(',', '.')) + step:g}"

    alpha = current.upper()
    alpha = _ALPHA_ALIASES.get(alpha, alpha)
    if alpha in ALPHA_SIZES:
        idx = min(max(ALPHA_SIZES.index(alpha) + step, 0), len(ALPHA_SIZES) - 1)
        return ALPHA_SIZES[idx]

    return "un talle más" if step > 0 else "un talle menos"


def key_zones_label(category: Any) -> str:
    return KEY_ZONES[normalize_category(category)]


def _zone_clause(z: ZoneFit) -> str:
    status = str(getattr(z.status, "value", z.status))
    return f"{ZONE_NAMES[z.zone]}: {status} ({to_number(z.delta):+g} cm)"


def _join_zones(names: Sequence[str]) -> str:
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + " y " + names[-1]


def _has_text(value: Any) -> bool:
    return value is not None and str(getattr(value, "value", value)).strip() != ""


def _flagged(zones: Iterable[Optional[ZoneFit]]) -> List[ZoneFit]:
    return [z for z in zones if z is not None and z.status != "Perfecto"]


_LENGTH_ZONES = (Zone.TORSO_LENGTH, Zone.LEG_LENGTH, Zone.FOOT_LENGTH)


def _zone(fit: FitResult, zone: Zone) -> Optional[ZoneFit]:
    """Zona del FitResult con status y delta normalizados (acepta strings)."""
    found = fit.length(zone) if zone in _LENGTH_ZONES else fit.width(zone)
    if found is None:
        return None
    statuses = LengthStatus if zone in _LENGTH_ZONES else WidthStatus
    raw = str(getattr(found.status, "value", found.status))
    status = next((s for s in statuses if s.value == raw), statuses.PERFECTO)
    return ZoneFit(zone, status, to_number(found.delta))


# ──────────────────────────────────────────────
# Per-category deciders
# ──────────────────────────────────────────────

_WIDTH_TAGS = {WidthStatus.AJUSTADO: Tag.SIZE_UP, WidthStatus.HOLGADO: Tag.SIZE_DOWN}
_LENGTH_TAGS = {LengthStatus.CORTO: Tag.SIZE_UP, LengthStatus.LARGO: Tag.SIZE_DOWN}


def _decide_pants(fit: FitResult, size: str, settings: FitSettings) -> Tuple[Tag, str, str]:
    waist = _zone(fit, Zone.WAIST)
    hip = _zone(fit, Zone.HIP)
    leg = _zone(fit, Zone.LEG_LENGTH)

    tag = _WIDTH_TAGS.get(waist.status, Tag.OK) if waist else Tag.OK
    if tag == Tag.OK and leg is not None and leg.status != LengthStatus.PERFECTO:
        tag = Tag.CHECK_LENGTH

    hip_critical = hip is not None and hip.delta < settings.hip_critical_delta
    if hip_critical:
        tag = Tag.SIZE_UP
        headline = HIP_CRITICAL_MESSAGE
    else:
        headline = PANTS_MESSAGES[tag]

    # Cada cláusula aparece una sola vez, sólo si su zona no es Perfecto
    details = [_zone_clause(z) for z in _flagged([waist, hip, leg])]
    message = headline if not details else f"{headline} Detalle: {'; '.join(details)}."
    return tag, TITLES[tag].format(size=size), message


def _decide_shoes(fit: FitResult, size: str, settings: FitSettings) -> Tuple[Tag, str, str]:
    foot = _zone(fit, Zone.FOOT_LENGTH)
    tag = _LENGTH_TAGS.get(foot.status, Tag.OK) if foot else Tag.OK
    message = SHOES_MESSAGES[tag]
    if foot is not None and tag != Tag.OK:
        message = f"{message} Detalle: {_zone_clause(foot)}."
    return tag, TITLES[tag].format(size=size), message


def _decide_upper(fit: FitResult, size: str, settings: FitSettings) -> Tuple[Tag, str, str]:
    decisive = [_zone(fit, Zone.SHOULDERS), _zone(fit, Zone.CHEST)]
    advisory = [_zone(fit, Zone.WAIST), _zone(fit, Zone.TORSO_LENGTH)]

    tight = [z for z in decisive if z is not None and z.status == WidthStatus.AJUSTADO]
    loose = [z for z in decisive if z is not None and z.status == WidthStatus.HOLGADO]
    if tight:
        tag, flagged = Tag.SIZE_UP, tight
    elif loose:
        tag, flagged = Tag.SIZE_DOWN, loose
    else:
        tag, flagged = Tag.OK, []

    if tag != Tag.OK:
        names = _join_zones([ZONE_NAMES[z.zone].lower() for z in flagged])
        return tag, TITLES[tag].format(size=size), UPPER_MESSAGES[tag].format(zones=names)

    warnings = _flagged(advisory)
    if warnings:
        zones = _join_zones([_zone_clause(z) for z in warnings])
        return tag, REVIEW_TITLE.format(size=size), UPPER_REVIEW_MESSAGE.format(zones=zones)
    return tag, TITLES[tag].format(size=size), UPPER_MESSAGES[tag]


DECIDERS: Dict[Category, Callable[[FitResult, str, FitSettings], Tuple[Tag, str, str]]] = {
    Category.PANTS: _decide_pants,
    Category.SHOES: _decide_shoes,
    Category.UPPER: _decide_upper,
}


# ──────────────────────────────────────────────
# Entry points
# ──────────────────────────────────────────────

def make_recommendation(
    category: Any = None,
    garment: Any = None,
    fit: Optional[FitResult] = None,
    settings: Optional[FitSettings] = None,
) -> Recommendation:
    """
    FitResult → Recommendation. Nunca lanza.

    La categoría se vuelve a normalizar: la indicada, o la de la prenda,
    o la del propio FitResult.
    """
    settings = settings or get_settings()
    candidates = [
        category,
        Garment.coerce(garment).category if garment is not None else None,
        getattr(fit, "category", None),
    ]
    resolved = normalize_category(next((c for c in candidates if _has_text(c)), None))
    garment = Garment.coerce(garment)

    if not isinstance(fit, FitResult):
        fit = FitResult(category=resolved, overall=WidthStatus.PERFECTO)

    size = display_size_label(garment.size_label)
    tag, title, message = DECIDERS[resolved](fit, size, settings)
    logger.debug("recommendation_made", category=resolved.value, tag=tag.value, size=size)
    return Recommendation(
        tag=tag,
        title=title,
        message=message,
        suggested_size=suggest_size_label(size, tag),
    )


_TAG_RANK = {Tag.OK: 0, Tag.CHECK_LENGTH: 1, Tag.SIZE_DOWN: 2, Tag.SIZE_UP: 3}

_DECISIVE_ZONES = {
    Category.PANTS: (Zone.WAIST,),
    Category.SHOES: (Zone.FOOT_LENGTH,),
    Category.UPPER: (Zone.SHOULDERS, Zone.CHEST),
}


def _decisive_distance(fit: FitResult) -> float:
    zones = _DECISIVE_ZONES[fit.category]
    return sum(abs(z.delta) for z in fit.widths + fit.lengths if z.zone in zones)


def recommend_size(
    user: Any,
    garments: Iterable[Any],
    category: Any = None,
    settings: Optional[FitSettings] = None,
) -> Optional[SizeReport]:
    """
    Evalúa todas las variantes de talle de un producto y elige la mejor.

    Orden: OK < CHECK_LENGTH < SIZE_DOWN < SIZE_UP; a igual tag gana el
    menor desvío absoluto en las zonas decisorias, después el orden de catálogo.

    Returns:
        SizeReport de la mejor variante, o None si no hay variantes.
    """
    settings = settings or get_settings()
    scored = []
    for order, raw in enumerate(garments):
        garment = Garment.coerce(raw)
        fit = compute_fit(user, garment, settings=settings)
        rec = make_recommendation(category=category, garment=garment, fit=fit, settings=settings)
        scored.append(((_TAG_RANK[rec.tag], _decisive_distance(fit), order), garment, fit, rec))

    if not scored:
        return None

    _, garment, fit, rec = min(scored, key=lambda item: item[0])
    all_sizes = {display_size_label(g.size_label): r.tag for _, g, _, r in scored}
    logger.debug("size_recommended", size=display_size_label(garment.size_label),
                 tag=rec.tag.value, candidates=len(scored))
    return SizeReport(garment=garment, fit=fit, recommendation=rec, all_sizes=all_sizes)
