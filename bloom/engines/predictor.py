"""
Growth prediction engine.

Projects a child's weight, length and head circumference forward from
their recent growth velocity, tempers the projection with known risk
factors (nutritional deficiencies, low calorie intake, unstable growth)
and places each projected month on the WHO reference curves.
"""

from __future__ import annotations

import logging
from datetime import date

from knowledge.growth import calculate_percentiles
from bloom.engines.analysis import (
    LOW_CALORIE_THRESHOLD,
    analyze_growth_pattern,
    analyze_percentile_trends,
    calculate_nutrition_score,
    calculate_velocity,
    latest_value,
    sort_logs,
)
from bloom.engines.dates import add_months, age_in_months, trailing_window_start
from bloom.models import (
    GrowthLog,
    GrowthPattern,
    GrowthPatternAnalysis,
    GrowthPrediction,
    GrowthStatus,
    GrowthStatusReport,
    NutritionAnalysis,
    NutritionLog,
    PercentileTrend,
    PercentileTrendAnalysis,
    PredictionFactors,
)

logger = logging.getLogger(__name__)

NUTRITION_WINDOW_MONTHS = 3

# Confidence blend; growth consistency carries the most weight
NUTRITION_WEIGHT = 0.3
TREND_WEIGHT = 0.4
PERCENTILE_WEIGHT = 0.3

DEFICIENCY_WEIGHT_ADJUSTMENT = 0.95
DEFICIENCY_HEIGHT_ADJUSTMENT = 0.97
LOW_CALORIE_WEIGHT_ADJUSTMENT = 0.93
VARIABLE_WEIGHT_ADJUSTMENT = 0.98
VARIABLE_HEIGHT_ADJUSTMENT = 0.99

_STATUS_RANK = {
    GrowthStatus.NORMAL: 0,
    GrowthStatus.MONITOR: 1,
    GrowthStatus.CONCERN: 2,
}


def confidence_score(
    nutrition: NutritionAnalysis,
    pattern: GrowthPatternAnalysis,
    trends: PercentileTrendAnalysis,
) -> float:
    """Blend the three analysis scores into a single [0, 1] confidence."""
    score = (
        nutrition.nutrition_score * NUTRITION_WEIGHT
        + pattern.trend_score * TREND_WEIGHT
        + trends.percentile_score * PERCENTILE_WEIGHT
    )
    return max(0.0, min(1.0, score))


def _adjustments(
    nutrition: NutritionAnalysis,
    pattern: GrowthPatternAnalysis,
) -> tuple[float, float, float]:
    """Velocity multipliers for (weight, height, head)."""
    weight = 1.0
    height = 1.0
    head = 1.0

    if nutrition.deficiencies:
        weight *= DEFICIENCY_WEIGHT_ADJUSTMENT
        height *= DEFICIENCY_HEIGHT_ADJUSTMENT
    if nutrition.calorie_intake < LOW_CALORIE_THRESHOLD:
        weight *= LOW_CALORIE_WEIGHT_ADJUSTMENT

    if pattern.growth_pattern == GrowthPattern.VARIABLE:
        weight *= VARIABLE_WEIGHT_ADJUSTMENT
        height *= VARIABLE_HEIGHT_ADJUSTMENT

    return weight, height, head


def _recommendations(
    nutrition: NutritionAnalysis,
    pattern: GrowthPatternAnalysis,
    trends: PercentileTrendAnalysis,
) -> list[str]:
    recommendations = []
    if nutrition.deficiencies:
        recommendations.append(
            f"Address nutritional deficiencies: {', '.join(nutrition.deficiencies)}"
        )
    if pattern.growth_pattern == GrowthPattern.VARIABLE:
        recommendations.append("Monitor growth more frequently due to variable growth pattern")
    if trends.weight_trend == PercentileTrend.DECREASING:
        recommendations.append("Consider dietary adjustments to support healthy weight gain")
    return recommendations


def _project(last: float | None, velocity: float, months: int, adjustment: float) -> float | None:
    if last is None:
        return None
    return last + velocity * months * adjustment


def _round(value: float | None, digits: int) -> float | None:
    return round(value, digits) if value is not None else None


def predict_growth(
    logs: list[GrowthLog],
    birth_date: date,
    nutrition_logs: list[NutritionLog] | None = None,
    months: int = 3,
    today: date | None = None,
) -> list[GrowthPrediction]:
    """
    Forecast growth for the coming months.

    Args:
        logs: Historical growth logs, any order
        birth_date: The child's date of birth
        nutrition_logs: Nutrition logs; only those from the three months
            before `today` are scored
        months: Number of future months to forecast
        today: Reference date for the nutrition window (defaults to today)

    Returns:
        One GrowthPrediction per forecast month in chronological order,
        or an empty list when there are no logs
    """
    if not logs:
        return []

    today = today or date.today()
    ordered = sort_logs(logs)
    last = ordered[-1]
    last_weight = latest_value(ordered, "weight_kg")
    last_height = latest_value(ordered, "height_cm")
    last_head = latest_value(ordered, "head_cm")

    since = trailing_window_start(today, NUTRITION_WINDOW_MONTHS)
    recent_nutrition = [log for log in nutrition_logs or [] if log.log_date >= since]

    velocity = calculate_velocity(ordered)
    nutrition = calculate_nutrition_score(recent_nutrition)
    pattern = analyze_growth_pattern(ordered)
    trends = analyze_percentile_trends(ordered, birth_date)
    confidence = confidence_score(nutrition, pattern, trends)

    factors = PredictionFactors(
        nutrition=nutrition,
        consistency=pattern,
        percentile_tracking=trends,
    )
    weight_adj, height_adj, head_adj = _adjustments(nutrition, pattern)
    adjusted = (weight_adj, height_adj, head_adj) != (1.0, 1.0, 1.0)
    recommendations = _recommendations(nutrition, pattern, trends)

    logger.debug(
        "Forecasting %d months from %s (confidence %.2f, adjusted=%s)",
        months, last.date, confidence, adjusted,
    )

    predictions = []
    for i in range(1, months + 1):
        prediction_date = add_months(last.date, i)

        weight = _project(last_weight, velocity.weight_velocity, i, weight_adj)
        height = _project(last_height, velocity.height_velocity, i, height_adj)
        head = _project(last_head, velocity.head_velocity, i, head_adj)

        placement = calculate_percentiles(
            age_in_months(birth_date, prediction_date),
            weight_kg=weight,
            height_cm=height,
            head_cm=head,
        )

        predictions.append(GrowthPrediction(
            date=prediction_date,
            weight_kg=_round(weight, 2),
            height_cm=_round(height, 1),
            head_cm=_round(head, 1),
            weight_percentile=round(placement.weight, 1),
            height_percentile=round(placement.height, 1),
            head_percentile=round(placement.head, 1),
            confidence_score=confidence,
            factors=factors,
            adjusted_prediction=adjusted,
            recommendations=list(recommendations),
        ))

    return predictions


def get_growth_status(prediction: GrowthPrediction) -> GrowthStatusReport:
    """
    Classify a forecast as normal, monitor or concern.

    Each rule adds its own message. Status only ever escalates as rules
    run, so a later "monitor" never hides an earlier "concern".
    """
    status = GrowthStatus.NORMAL
    recommendations = []

    def escalate(level: GrowthStatus, message: str) -> None:
        nonlocal status
        if _STATUS_RANK[level] > _STATUS_RANK[status]:
            status = level
        recommendations.append(message)

    # Unrecorded measurements have no percentile to judge
    if prediction.weight_kg is not None:
        if prediction.weight_percentile < 3:
            escalate(
                GrowthStatus.CONCERN,
                "Weight is below 3rd percentile. Consult your pediatrician for evaluation.",
            )
        elif prediction.weight_percentile < 10:
            escalate(
                GrowthStatus.MONITOR,
                "Weight is below 10th percentile. Monitor feeding and discuss with your healthcare provider.",
            )
        elif prediction.weight_percentile > 97:
            escalate(
                GrowthStatus.MONITOR,
                "Weight is above 97th percentile. Discuss growth pattern with your healthcare provider.",
            )

    if prediction.height_cm is not None:
        if prediction.height_percentile < 3:
            escalate(
                GrowthStatus.CONCERN,
                "Length/height is below 3rd percentile. Consult your pediatrician.",
            )
        elif prediction.height_percentile < 10:
            escalate(
                GrowthStatus.MONITOR,
                "Length/height is below 10th percentile. Continue monitoring growth.",
            )

    if prediction.head_cm is not None:
        if prediction.head_percentile < 3 or prediction.head_percentile > 97:
            escalate(
                GrowthStatus.CONCERN,
                "Head circumference needs evaluation. Schedule a check-up with your pediatrician.",
            )

    if not recommendations:
        recommendations.append("Growth appears to be progressing normally. Continue regular check-ups.")

    return GrowthStatusReport(status=status, recommendations=recommendations)
