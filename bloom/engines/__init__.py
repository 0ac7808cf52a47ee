"""
Growth analysis and prediction engines.
"""

from .analysis import (
    calculate_velocity,
    calculate_nutrition_score,
    analyze_growth_pattern,
    analyze_percentile_trends,
)
from .predictor import predict_growth, get_growth_status, confidence_score
from .reminders import expand_schedule

__all__ = [
    "calculate_velocity",
    "calculate_nutrition_score",
    "analyze_growth_pattern",
    "analyze_percentile_trends",
    "predict_growth",
    "get_growth_status",
    "confidence_score",
    "expand_schedule",
]
