"""
Data models for Bloom.
"""

from .growth import (
    GrowthPattern,
    PercentileTrend,
    GrowthStatus,
    GrowthLog,
    NutrientIntake,
    NutritionLog,
    GrowthVelocity,
    NutritionAnalysis,
    GrowthPatternAnalysis,
    PercentileTrendAnalysis,
    PredictionFactors,
    GrowthPrediction,
    GrowthStatusReport,
)
from .reminder import MedicationSchedule, MedicationReminder

__all__ = [
    "GrowthPattern",
    "PercentileTrend",
    "GrowthStatus",
    "GrowthLog",
    "NutrientIntake",
    "NutritionLog",
    "GrowthVelocity",
    "NutritionAnalysis",
    "GrowthPatternAnalysis",
    "PercentileTrendAnalysis",
    "PredictionFactors",
    "GrowthPrediction",
    "GrowthStatusReport",
    "MedicationSchedule",
    "MedicationReminder",
]
