"""
Vesti Fit Engine — vesti.fit package
"""

from vesti.fit.schema import (
    Category,
    EasePreset,
    FitResult,
    Garment,
    LengthStatus,
    Measurements,
    Recommendation,
    RecommendationTag,
    SizeReport,
    WidthStatus,
    Zone,
    ZoneFit,
)
from vesti.fit.category import normalize_category
from vesti.fit.fit_calculator import compute_fit
from vesti.fit.recommendation import (
    display_size_label,
    key_zones_label,
    make_recommendation,
    recommend_size,
    suggest_size_label,
)
