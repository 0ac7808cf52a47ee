"""
Tests for the growth prediction engine and status classification.
"""

from datetime import date

import pytest

from bloom.engines import get_growth_status, predict_growth
from bloom.models import (
    GrowthLog,
    GrowthPattern,
    GrowthPatternAnalysis,
    GrowthPrediction,
    GrowthStatus,
    NutrientIntake,
    NutritionAnalysis,
    NutritionLog,
    PercentileTrend,
    PercentileTrendAnalysis,
    PredictionFactors,
)

TODAY = date(2024, 3, 15)


class TestPredictGrowth:
    """Test the end-to-end forecast."""

    def test_no_logs(self, birth_date):
        assert predict_growth([], birth_date, []) == []

    def test_median_infant_without_nutrition(self, median_logs, birth_date):
        predictions = predict_growth(median_logs, birth_date, [], months=3, today=TODAY)

        assert len(predictions) == 3
        assert [p.date for p in predictions] == [
            date(2024, 4, 1), date(2024, 5, 1), date(2024, 6, 1),
        ]

        first = predictions[0]
        # No calorie data counts as low intake: weight velocity x 0.93
        assert first.weight_kg == pytest.approx(5.6 + 1.15 * 0.93, abs=0.01)
        assert first.height_cm == pytest.approx(58.4 + 4.25, abs=0.1)
        assert first.head_cm == pytest.approx(39.1 + 2.3, abs=0.1)
        assert first.adjusted_prediction is True

        assert first.factors.nutrition.nutrition_score == 0.5
        assert first.factors.consistency.trend_score == 1.0
        assert first.factors.percentile_tracking.percentile_score == 1.0
        assert first.confidence_score == pytest.approx(0.85)
        assert first.recommendations == []

    def test_projection_grows_linearly(self, median_logs, birth_date):
        predictions = predict_growth(median_logs, birth_date, [], months=3, today=TODAY)
        assert predictions[2].head_cm == pytest.approx(39.1 + 2.3 * 3, abs=0.1)
        weights = [p.weight_kg for p in predictions]
        assert weights == sorted(weights)

    def test_percentiles_use_projected_age(self, median_logs, birth_date):
        first = predict_growth(median_logs, birth_date, [], months=1, today=TODAY)[0]
        # 6.67 kg against the 3-month standard (6.4, 0.8)
        assert first.weight_percentile == pytest.approx(63.2, abs=0.2)

    def test_identical_inputs_give_identical_output(self, median_logs, birth_date):
        a = predict_growth(median_logs, birth_date, [], today=TODAY)
        b = predict_growth(median_logs, birth_date, [], today=TODAY)
        assert [p.model_dump_json() for p in a] == [p.model_dump_json() for p in b]

    def test_input_order_does_not_matter(self, median_logs, birth_date):
        a = predict_growth(median_logs, birth_date, [], today=TODAY)
        b = predict_growth(list(reversed(median_logs)), birth_date, [], today=TODAY)
        assert a == b

    def test_nutrition_outside_window_is_ignored(self, median_logs, birth_date):
        nutrition = [
            NutritionLog(log_date=date(2023, 11, 1), deficiencies=["iron"],
                         daily_nutrient_intake=NutrientIntake(calories=1800)),
            NutritionLog(log_date=date(2024, 3, 1), deficiencies=["vitamin D"],
                         daily_nutrient_intake=NutrientIntake(calories=1800)),
        ]
        first = predict_growth(median_logs, birth_date, nutrition, today=TODAY)[0]

        assert first.factors.nutrition.deficiencies == ["vitamin D"]
        assert first.factors.nutrition.nutrition_score == pytest.approx(0.9)
        assert first.recommendations == ["Address nutritional deficiencies: vitamin D"]

    def test_deficiencies_slow_weight_and_height_only(self, median_logs, birth_date):
        nutrition = [
            NutritionLog(log_date=date(2024, 3, 1), deficiencies=["iron"],
                         daily_nutrient_intake=NutrientIntake(calories=1800)),
        ]
        second = predict_growth(median_logs, birth_date, nutrition, today=TODAY)[1]

        assert second.weight_kg == pytest.approx(5.6 + 1.15 * 2 * 0.95, abs=0.01)
        assert second.height_cm == pytest.approx(58.4 + 4.25 * 2 * 0.97, abs=0.1)
        assert second.head_cm == pytest.approx(39.1 + 2.3 * 2, abs=0.1)
        assert second.adjusted_prediction is True

    def test_no_adjustment_with_good_nutrition(self, median_logs, birth_date):
        nutrition = [
            NutritionLog(log_date=date(2024, 3, 1), daily_nutrient_intake=NutrientIntake(calories=1800)),
        ]
        first = predict_growth(median_logs, birth_date, nutrition, today=TODAY)[0]

        assert first.adjusted_prediction is False
        assert first.weight_kg == pytest.approx(5.6 + 1.15, abs=0.01)
        assert first.confidence_score == pytest.approx(1.0)

    def test_variable_growth(self, birth_date):
        logs = [
            GrowthLog(date=date(2024, 1, 1), weight_kg=3.3, height_cm=49.9, head_cm=34.5),
            GrowthLog(date=date(2024, 2, 1), weight_kg=3.5, height_cm=54.7, head_cm=37.3),
            GrowthLog(date=date(2024, 3, 1), weight_kg=5.1, height_cm=58.4, head_cm=39.1),
        ]
        nutrition = [
            NutritionLog(log_date=date(2024, 3, 1), daily_nutrient_intake=NutrientIntake(calories=1800)),
        ]
        first = predict_growth(logs, birth_date, nutrition, months=1, today=TODAY)[0]

        assert first.factors.consistency.growth_pattern == GrowthPattern.VARIABLE
        assert first.weight_kg == pytest.approx(5.1 + 0.9 * 0.98, abs=0.01)
        assert first.height_cm == pytest.approx(58.4 + 4.25 * 0.99, abs=0.1)
        assert "Monitor growth more frequently due to variable growth pattern" in first.recommendations

    def test_falling_weight_percentile(self, birth_date):
        logs = [
            GrowthLog(date=date(2024, 1, 1), weight_kg=3.3, height_cm=49.9, head_cm=34.5),
            GrowthLog(date=date(2024, 2, 1), weight_kg=3.8, height_cm=54.7, head_cm=37.3),
            GrowthLog(date=date(2024, 3, 1), weight_kg=4.2, height_cm=58.4, head_cm=39.1),
        ]
        first = predict_growth(logs, birth_date, [], months=1, today=TODAY)[0]

        assert "Consider dietary adjustments to support healthy weight gain" in first.recommendations
        assert first.confidence_score == pytest.approx(0.5 * 0.3 + 1.0 * 0.4 + 0.7 * 0.3)

    def test_single_log_forecast_is_flat(self, birth_date):
        logs = [GrowthLog(date=date(2024, 3, 1), weight_kg=5.6, height_cm=58.4, head_cm=39.1)]
        predictions = predict_growth(logs, birth_date, [], months=2, today=TODAY)

        assert [p.weight_kg for p in predictions] == [5.6, 5.6]
        assert predictions[0].confidence_score == pytest.approx(0.5)


def _prediction(weight: float = 50, height: float = 50, head: float = 50) -> GrowthPrediction:
    return GrowthPrediction(
        date=date(2024, 4, 1),
        weight_kg=6.4,
        height_cm=61.4,
        head_cm=40.5,
        weight_percentile=weight,
        height_percentile=height,
        head_percentile=head,
        confidence_score=0.85,
        factors=PredictionFactors(
            nutrition=NutritionAnalysis(),
            consistency=GrowthPatternAnalysis(),
            percentile_tracking=PercentileTrendAnalysis(),
        ),
    )


class TestGrowthStatus:
    """Test status classification of a single forecast."""

    def test_all_median_is_normal(self):
        report = get_growth_status(_prediction())
        assert report.status == GrowthStatus.NORMAL
        assert report.recommendations == [
            "Growth appears to be progressing normally. Continue regular check-ups."
        ]

    def test_very_low_weight(self):
        report = get_growth_status(_prediction(weight=2))
        assert report.status == GrowthStatus.CONCERN
        assert "Weight is below 3rd percentile. Consult your pediatrician for evaluation." in report.recommendations

    def test_low_weight_is_monitor(self):
        report = get_growth_status(_prediction(weight=8))
        assert report.status == GrowthStatus.MONITOR

    def test_high_weight_is_monitor(self):
        report = get_growth_status(_prediction(weight=98))
        assert report.status == GrowthStatus.MONITOR
        assert len(report.recommendations) == 1

    def test_later_monitor_does_not_downgrade_concern(self):
        report = get_growth_status(_prediction(weight=2, height=8))
        assert report.status == GrowthStatus.CONCERN
        assert len(report.recommendations) == 2

    def test_head_out_of_range_is_concern(self):
        assert get_growth_status(_prediction(head=1)).status == GrowthStatus.CONCERN
        assert get_growth_status(_prediction(head=99)).status == GrowthStatus.CONCERN

    def test_multiple_concerns_all_reported(self):
        report = get_growth_status(_prediction(weight=1, height=1, head=99))
        assert report.status == GrowthStatus.CONCERN
        assert len(report.recommendations) == 3


class TestMissingMeasurements:
    """Test forecasts when some logs leave a measurement blank."""

    def test_projects_from_last_recorded_value(self, birth_date):
        logs = [
            GrowthLog(date=date(2024, 1, 1), weight_kg=3.3, height_cm=49.9, head_cm=34.5),
            GrowthLog(date=date(2024, 2, 1), weight_kg=4.5, height_cm=54.7, head_cm=37.3),
            GrowthLog(date=date(2024, 3, 1), weight_kg=None, height_cm=58.4, head_cm=39.1),
        ]
        first = predict_growth(logs, birth_date, [], months=1, today=TODAY)[0]

        assert first.weight_kg == pytest.approx(4.5 + 1.2 * 0.93, abs=0.01)
        assert first.weight_percentile > 3
        assert first.factors.percentile_tracking.weight_trend == PercentileTrend.STABLE

        report = get_growth_status(first)
        assert not any(rec.startswith("Weight") for rec in report.recommendations)

    def test_never_recorded_measurement_stays_empty(self, median_logs, birth_date):
        logs = [log.model_copy(update={"head_cm": None}) for log in median_logs]
        first = predict_growth(logs, birth_date, [], months=1, today=TODAY)[0]

        assert first.head_cm is None
        assert first.head_percentile == 0.0
        assert first.weight_kg == pytest.approx(5.6 + 1.15 * 0.93, abs=0.01)

        report = get_growth_status(first)
        assert report.status == GrowthStatus.NORMAL
