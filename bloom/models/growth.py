"""
Core data models for Bloom growth tracking.

These Pydantic models define the measurements the engine reads and the
analyses and forecasts it produces. Inputs come from the persistence
layer; outputs are handed to the caller for display.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

_TIMESTAMP = TypeAdapter(datetime)


def _to_date(value: Any) -> Any:
    """Accept ISO timestamps (e.g. a row's created_at) where a date is expected."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return _TIMESTAMP.validate_python(value).date()
    return value


# =============================================================================
# ENUMS
# =============================================================================


class GrowthPattern(str, Enum):
    STEADY = "steady"
    VARIABLE = "variable"
    CONCERNING = "concerning"


class PercentileTrend(str, Enum):
    STABLE = "stable"
    INCREASING = "increasing"
    DECREASING = "decreasing"


class GrowthStatus(str, Enum):
    NORMAL = "normal"
    MONITOR = "monitor"
    CONCERN = "concern"


# =============================================================================
# INPUT RECORDS
# =============================================================================


class GrowthLog(BaseModel):
    """A single anthropometric measurement of a child."""
    date: date
    weight_kg: float | None = None
    height_cm: float | None = None
    head_cm: float | None = None

    parse_date = field_validator("date", mode="before")(_to_date)


class NutrientIntake(BaseModel):
    """Daily nutrient intake reported in a nutrition log."""
    model_config = ConfigDict(populate_by_name=True)

    calories: float | None = None
    protein: float | None = None
    calcium: float | None = None
    iron: float | None = None
    vitamin_d: float | None = Field(None, alias="vitaminD")


class NutritionLog(BaseModel):
    """A day of nutrition tracking."""
    log_date: date
    daily_nutrient_intake: NutrientIntake | None = None
    deficiencies: list[str] | None = None

    parse_date = field_validator("log_date", mode="before")(_to_date)


# =============================================================================
# ANALYSES
# =============================================================================


class GrowthVelocity(BaseModel):
    """Rate of change per month for each measurement."""
    model_config = ConfigDict(frozen=True)

    weight_velocity: float = 0.0  # kg per month
    height_velocity: float = 0.0  # cm per month
    head_velocity: float = 0.0  # cm per month


class NutritionAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    calorie_intake: float = 0.0
    deficiencies: list[str] = Field(default_factory=list)
    nutrition_score: float = Field(0.5, ge=0, le=1)


class GrowthPatternAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    growth_pattern: GrowthPattern = GrowthPattern.STEADY
    trend_score: float = Field(0.5, ge=0, le=1)


class PercentileTrendAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    weight_trend: PercentileTrend = PercentileTrend.STABLE
    height_trend: PercentileTrend = PercentileTrend.STABLE
    head_trend: PercentileTrend = PercentileTrend.STABLE
    percentile_score: float = Field(0.5, ge=0, le=1)


# =============================================================================
# OUTPUTS
# =============================================================================


class PredictionFactors(BaseModel):
    """The analyses a forecast's confidence score was blended from."""
    model_config = ConfigDict(frozen=True)

    nutrition: NutritionAnalysis
    consistency: GrowthPatternAnalysis
    percentile_tracking: PercentileTrendAnalysis


class GrowthPrediction(BaseModel):
    """Forecast measurements and percentiles for one future month."""
    model_config = ConfigDict(frozen=True)

    date: date
    # None when the measurement has never been recorded
    weight_kg: float | None
    height_cm: float | None
    head_cm: float | None
    weight_percentile: float = Field(ge=0, le=100)
    height_percentile: float = Field(ge=0, le=100)
    head_percentile: float = Field(ge=0, le=100)
    confidence_score: float = Field(ge=0, le=1)
    factors: PredictionFactors
    adjusted_prediction: bool = False
    recommendations: list[str] = Field(default_factory=list)


class GrowthStatusReport(BaseModel):
    """Clinical-style status of a single forecast."""
    status: GrowthStatus
    recommendations: list[str]
