"""
Fit Calculator — zone-by-zone fit per canonical category

Compara medidas del cuerpo contra la prenda y produce un FitResult.
Un algoritmo por categoría, elegido por tabla de despacho:

- PANTS: decisoria cintura (techo de Perfecto = holgura del preset),
         cadera opcional, largo de pierna como advertencia.
- SHOES: sólo largo de pie, tolerancia absoluta.
- UPPER: hombros / pecho / cintura con banda simétrica, más largo de torso.

delta = medida efectiva de la prenda − medida del cuerpo (positivo = sobra).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from vesti.config.settings import FitSettings, get_settings
from vesti.fit.category import normalize_category
from vesti.fit.schema import (
    Category,
    EasePreset,
    FitResult,
    Garment,
    LengthStatus,
    Measurements,
    WidthStatus,
    Zone,
    ZoneFit,
    elasticity_fraction,
    round_delta,
)
from vesti.fit.tables import ease_for, ease_value, hip_perfect_max, tolerance_for


UPPER_WIDTH_ZONES = (Zone.SHOULDERS, Zone.CHEST, Zone.WAIST)


# ──────────────────────────────────────────────
# Classification rules
# ──────────────────────────────────────────────

def _width_with_ceiling(delta: float, perfect_max: float) -> WidthStatus:
    """< 0 → Ajustado, [0, perfect_max] → Perfecto, mayor → Holgado."""
    if delta < 0:
        return WidthStatus.AJUSTADO
    if delta > perfect_max:
        return WidthStatus.HOLGADO
    return WidthStatus.PERFECTO


def _width_symmetric(delta: float, tolerance: float) -> WidthStatus:
    if delta < -tolerance:
        return WidthStatus.AJUSTADO
    if delta > tolerance:
        return WidthStatus.HOLGADO
    return WidthStatus.PERFECTO


def _length_symmetric(delta: float, tolerance: float) -> LengthStatus:
    if delta < -tolerance:
        return LengthStatus.CORTO
    if delta > tolerance:
        return LengthStatus.LARGO
    return LengthStatus.PERFECTO


def _both_present(garment_value: float, user_value: float) -> bool:
    return garment_value > 0 and user_value > 0


# ──────────────────────────────────────────────
# Per-category algorithms
# ──────────────────────────────────────────────

def _fit_pants(user: Measurements, garment: Garment, preset: EasePreset,
               stretch: float, settings: FitSettings, debug: Dict[str, Any]) -> FitResult:
    g = garment.measures

    delta_waist = round_delta(g.waist * (1 + stretch) - user.waist)
    perfect_max = ease_value(Category.PANTS, preset, Zone.WAIST, default=None)
    if perfect_max is None:
        perfect_max = settings.pants_default_perfect_max
    waist_status = _width_with_ceiling(delta_waist, perfect_max)
    widths = [ZoneFit(Zone.WAIST, waist_status, delta_waist)]
    debug.update(perfect_max=perfect_max, delta_waist=delta_waist)

    # Sin datos de largo no se inventa una alerta
    if _both_present(g.leg_length, user.leg_length):
        delta_leg = round_delta(g.leg_length - user.leg_length)
        leg_status = _length_symmetric(delta_leg, settings.pants_leg_tolerance)
    else:
        delta_leg, leg_status = 0.0, LengthStatus.PERFECTO
    lengths = [ZoneFit(Zone.LEG_LENGTH, leg_status, delta_leg)]
    debug["delta_leg"] = delta_leg

    if _both_present(g.hip, user.hip):
        delta_hip = round_delta(g.hip * (1 + stretch) - user.hip)
        hip_max = hip_perfect_max(preset)
        widths.append(ZoneFit(Zone.HIP, _width_with_ceiling(delta_hip, hip_max), delta_hip))
        debug.update(hip_perfect_max=hip_max, delta_hip=delta_hip)

    return FitResult(
        category=Category.PANTS,
        overall=waist_status,
        widths=widths,
        lengths=lengths,
        debug=debug,
    )


def _fit_shoes(user: Measurements, garment: Garment, preset: EasePreset,
               stretch: float, settings: FitSettings, debug: Dict[str, Any]) -> FitResult:
    delta = round_delta(garment.measures.foot_length - user.foot_length)
    if delta < 0:
        status = LengthStatus.CORTO
    elif delta <= settings.shoe_length_tolerance:
        status = LengthStatus.PERFECTO
    else:
        status = LengthStatus.LARGO

    # Señal visual derivada: el calzado no tiene zonas de ancho
    overall = {
        LengthStatus.CORTO: WidthStatus.AJUSTADO,
        LengthStatus.LARGO: WidthStatus.HOLGADO,
    }.get(status, WidthStatus.PERFECTO)
    debug.update(tolerance=settings.shoe_length_tolerance, delta_foot=delta)

    return FitResult(
        category=Category.SHOES,
        overall=overall,
        widths=[],
        lengths=[ZoneFit(Zone.FOOT_LENGTH, status, delta)],
        debug=debug,
    )


def _fit_upper(user: Measurements, garment: Garment, preset: EasePreset,
               stretch: float, settings: FitSettings, debug: Dict[str, Any]) -> FitResult:
    g = garment.measures
    ease = ease_for(Category.UPPER, preset)

    widths: List[ZoneFit] = []
    for zone in UPPER_WIDTH_ZONES:
        garment_value, user_value = g.get(zone), user.get(zone)
        # cintura es advertencia: sin ambos datos queda Perfecto
        if zone == Zone.WAIST and not _both_present(garment_value, user_value):
            widths.append(ZoneFit(zone, WidthStatus.PERFECTO, 0.0))
            continue
        effective = garment_value * (1 + stretch) + ease.get(zone, 0.0)
        delta = round_delta(effective - user_value)
        widths.append(ZoneFit(zone, _width_symmetric(delta, tolerance_for(Category.UPPER, zone)), delta))

    if _both_present(g.torso_length, user.torso_length):
        delta_torso = round_delta(
            g.torso_length + ease.get(Zone.TORSO_LENGTH, 0.0) - user.torso_length
        )
        torso_status = _length_symmetric(
            delta_torso, tolerance_for(Category.UPPER, Zone.TORSO_LENGTH)
        )
    else:
        delta_torso, torso_status = 0.0, LengthStatus.PERFECTO
    lengths = [ZoneFit(Zone.TORSO_LENGTH, torso_status, delta_torso)]

    statuses = {z.status for z in widths}
    if WidthStatus.AJUSTADO in statuses:
        overall = WidthStatus.AJUSTADO
    elif WidthStatus.HOLGADO in statuses:
        overall = WidthStatus.HOLGADO
    else:
        overall = WidthStatus.PERFECTO

    debug["deltas"] = {z.zone.value: z.delta for z in widths + lengths}
    return FitResult(
        category=Category.UPPER,
        overall=overall,
        widths=widths,
        lengths=lengths,
        debug=debug,
    )


FitAlgorithm = Callable[..., FitResult]

FIT_ALGORITHMS: Dict[Category, FitAlgorithm] = {
    Category.PANTS: _fit_pants,
    Category.SHOES: _fit_shoes,
    Category.UPPER: _fit_upper,
}


# ──────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────

def compute_fit(user: Any, garment: Any, settings: Optional[FitSettings] = None) -> FitResult:
    """
    Calce de una prenda para un usuario.

    Args:
        user: Measurements del cuerpo (o mapping equivalente)
        garment: Garment (o mapping equivalente)
        settings: umbrales configurables; por defecto get_settings()

    Returns:
        FitResult con zonas de ancho y de largo. Nunca lanza: entradas
        inválidas se convierten a 0 / valores por defecto.
    """
    settings = settings or get_settings()
    user = Measurements.coerce(user)
    garment = Garment.coerce(garment)
    if not isinstance(garment.measures, Measurements):
        garment = replace(garment, measures=Measurements.coerce(garment.measures))

    category = normalize_category(garment.category)
    preset = EasePreset.resolve(garment.ease_preset)
    stretch = elasticity_fraction(garment.elasticity)
    debug: Dict[str, Any] = {
        "raw_category": garment.category,
        "preset": preset.value,
        "requested_preset": garment.ease_preset,
        "elasticity": stretch,
    }
    return FIT_ALGORITHMS[category](user, garment, preset, stretch, settings, debug)
