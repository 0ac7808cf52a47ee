"""
Growth analyses feeding the prediction engine.

Each analysis is a pure function of its inputs. Missing or insufficient
data never raises; it resolves to a documented neutral default (zero
velocity, 0.5 scores, "steady"/"stable" classifications).
"""

from __future__ import annotations

import logging
from datetime import date

import numpy as np

from knowledge.growth import calculate_percentiles
from bloom.engines.dates import age_in_months, months_between, trailing_window_start
from bloom.models import (
    GrowthLog,
    GrowthPattern,
    GrowthPatternAnalysis,
    GrowthVelocity,
    NutritionAnalysis,
    NutritionLog,
    PercentileTrend,
    PercentileTrendAnalysis,
)

logger = logging.getLogger(__name__)

VELOCITY_WINDOW_MONTHS = 3

LOW_CALORIE_THRESHOLD = 1500
DEFICIENCY_PENALTY = 0.1
LOW_CALORIE_PENALTY = 0.2

# Population std dev of consecutive deltas (kg, cm)
VARIABLE_WEIGHT_STD = 0.5
VARIABLE_HEIGHT_STD = 2.0
CONCERNING_WEIGHT_STD = 1.0
CONCERNING_HEIGHT_STD = 4.0

# Percentile points of movement still counted as tracking the same channel
STABLE_PERCENTILE_CHANGE = 5
DECREASING_PENALTY = 0.3
DISPROPORTIONATE_GAIN_PENALTY = 0.2


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def sort_logs(logs: list[GrowthLog]) -> list[GrowthLog]:
    """Return the logs in ascending date order."""
    return sorted(logs, key=lambda log: log.date)


def _window_velocity(recent: list[GrowthLog], field: str) -> float:
    known = [log for log in recent if getattr(log, field) is not None]
    if len(known) < 2:
        return 0.0
    first, last = known[0], known[-1]
    months = months_between(first.date, last.date)
    return (getattr(last, field) - getattr(first, field)) / months


def latest_value(logs: list[GrowthLog], field: str) -> float | None:
    """Most recent recorded value of a measurement, or None if never recorded."""
    for log in reversed(sort_logs(logs)):
        value = getattr(log, field)
        if value is not None:
            return value
    return None


def calculate_velocity(logs: list[GrowthLog]) -> GrowthVelocity:
    """
    Calculate growth velocity from the trailing three months of logs.

    The window ends on the latest log date. For each measurement, velocity
    is the change between the first and last log in the window that record
    it, divided by the calendar months between them (floored at one month).

    Args:
        logs: Growth logs in any order

    Returns:
        GrowthVelocity in units per month; all zero with fewer than 2 logs
    """
    if len(logs) < 2:
        return GrowthVelocity()

    ordered = sort_logs(logs)
    window_start = trailing_window_start(ordered[-1].date, VELOCITY_WINDOW_MONTHS)
    recent = [log for log in ordered if log.date >= window_start]

    logger.debug("Velocity window %s..%s: %d logs", window_start, ordered[-1].date, len(recent))

    return GrowthVelocity(
        weight_velocity=_window_velocity(recent, "weight_kg"),
        height_velocity=_window_velocity(recent, "height_cm"),
        head_velocity=_window_velocity(recent, "head_cm"),
    )


def calculate_nutrition_score(nutrition_logs: list[NutritionLog]) -> NutritionAnalysis:
    """
    Summarise nutrition logs into calorie intake, deficiencies and a score.

    No logs means "unknown", which scores a neutral 0.5 rather than bad.
    Average calories only count logs that report calories. The score
    starts at 1, loses 0.1 per distinct deficiency and another 0.2 when
    average calories are under 1500.
    """
    if not nutrition_logs:
        return NutritionAnalysis(calorie_intake=0.0, deficiencies=[], nutrition_score=0.5)

    total_calories = 0.0
    logs_with_calories = 0
    deficiencies: list[str] = []

    for log in nutrition_logs:
        intake = log.daily_nutrient_intake
        if intake is not None and intake.calories:
            total_calories += intake.calories
            logs_with_calories += 1
        for deficiency in log.deficiencies or []:
            if deficiency not in deficiencies:
                deficiencies.append(deficiency)

    calorie_intake = total_calories / logs_with_calories if logs_with_calories else 0.0

    score = 1.0
    score -= len(deficiencies) * DEFICIENCY_PENALTY
    if calorie_intake < LOW_CALORIE_THRESHOLD:
        score -= LOW_CALORIE_PENALTY

    return NutritionAnalysis(
        calorie_intake=calorie_intake,
        deficiencies=deficiencies,
        nutrition_score=_clamp01(score),
    )


def _change_std(ordered: list[GrowthLog], field: str) -> float:
    values = [getattr(log, field) for log in ordered if getattr(log, field) is not None]
    if len(values) < 2:
        return 0.0
    return float(np.std(np.diff(values)))


def analyze_growth_pattern(logs: list[GrowthLog]) -> GrowthPatternAnalysis:
    """
    Classify how consistent growth has been between measurements.

    Uses the population standard deviation of consecutive weight and
    height changes. Thresholds are absolute and calibrated for infant
    kg/cm units.
    """
    if len(logs) < 2:
        return GrowthPatternAnalysis(growth_pattern=GrowthPattern.STEADY, trend_score=0.5)

    ordered = sort_logs(logs)
    weight_std = _change_std(ordered, "weight_kg")
    height_std = _change_std(ordered, "height_cm")

    pattern = GrowthPattern.STEADY
    trend_score = 1.0
    if weight_std > VARIABLE_WEIGHT_STD or height_std > VARIABLE_HEIGHT_STD:
        pattern = GrowthPattern.VARIABLE
        trend_score = 0.7
    if weight_std > CONCERNING_WEIGHT_STD or height_std > CONCERNING_HEIGHT_STD:
        pattern = GrowthPattern.CONCERNING
        trend_score = 0.4

    logger.debug(
        "Growth pattern %s (weight sd=%.3f, height sd=%.3f)",
        pattern.value, weight_std, height_std,
    )
    return GrowthPatternAnalysis(growth_pattern=pattern, trend_score=trend_score)


def _trend(values: list[float]) -> PercentileTrend:
    if len(values) < 2:
        return PercentileTrend.STABLE
    change = values[-1] - values[0]
    if abs(change) < STABLE_PERCENTILE_CHANGE:
        return PercentileTrend.STABLE
    return PercentileTrend.INCREASING if change > 0 else PercentileTrend.DECREASING


def analyze_percentile_trends(logs: list[GrowthLog], birth_date: date) -> PercentileTrendAnalysis:
    """
    Check whether the child is tracking along their percentile channels.

    A drop in weight or height percentile costs 0.3. Weight percentile
    rising while height holds costs 0.2 (disproportionate gain). The two
    checks run independently, but a rising weight with steady height
    never co-occurs with a falling trend, so the lowest score is 0.7.
    """
    if len(logs) < 2:
        return PercentileTrendAnalysis(percentile_score=0.5)

    weight, height, head = [], [], []
    for log in sort_logs(logs):
        p = calculate_percentiles(
            age_in_months(birth_date, log.date),
            weight_kg=log.weight_kg,
            height_cm=log.height_cm,
            head_cm=log.head_cm,
        )
        # Unrecorded measurements place at 0 and would read as a drop
        if log.weight_kg is not None:
            weight.append(p.weight)
        if log.height_cm is not None:
            height.append(p.height)
        if log.head_cm is not None:
            head.append(p.head)

    weight_trend = _trend(weight)
    height_trend = _trend(height)
    head_trend = _trend(head)

    score = 1.0
    if PercentileTrend.DECREASING in (weight_trend, height_trend):
        score -= DECREASING_PENALTY
    if weight_trend == PercentileTrend.INCREASING and height_trend == PercentileTrend.STABLE:
        score -= DISPROPORTIONATE_GAIN_PENALTY

    return PercentileTrendAnalysis(
        weight_trend=weight_trend,
        height_trend=height_trend,
        head_trend=head_trend,
        percentile_score=_clamp01(score),
    )
