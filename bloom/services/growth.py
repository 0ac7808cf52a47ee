"""
Growth prediction for a stored child record.

Wires the persistence layer to the prediction engine. Growth logs are
required; nutrition logs are best-effort, so a failed nutrition read
degrades the forecast instead of aborting it.
"""

from __future__ import annotations

import logging
from datetime import date

from bloom.db.repositories import GrowthLogRepository, NutritionLogRepository
from bloom.engines.dates import trailing_window_start
from bloom.engines.predictor import NUTRITION_WINDOW_MONTHS, get_growth_status, predict_growth
from bloom.models import GrowthPrediction, GrowthStatusReport, NutritionLog

logger = logging.getLogger(__name__)


def fetch_recent_nutrition(
    child_id: str,
    since: date,
    nutrition_repo: NutritionLogRepository,
) -> list[NutritionLog]:
    """Read nutrition logs, treating any failure as "no nutrition data"."""
    try:
        return nutrition_repo.fetch_nutrition_logs(child_id, since)
    except Exception as e:
        logger.warning("Error fetching nutrition data for %s: %s", child_id, e)
        return []


def predict_for_child(
    child_id: str,
    birth_date: date,
    months: int = 3,
    *,
    growth_repo: GrowthLogRepository | None = None,
    nutrition_repo: NutritionLogRepository | None = None,
    today: date | None = None,
) -> list[GrowthPrediction]:
    """
    Forecast growth for a child from their stored logs.

    Args:
        child_id: Owner of the growth and nutrition logs
        birth_date: The child's date of birth
        months: Number of months to forecast
        growth_repo: Growth log source (defaults to Supabase)
        nutrition_repo: Nutrition log source (defaults to Supabase)
        today: Reference date for the nutrition window

    Returns:
        Forecast list; empty when the child has no growth logs
    """
    growth_repo = growth_repo or GrowthLogRepository()
    nutrition_repo = nutrition_repo or NutritionLogRepository()
    today = today or date.today()

    logs = growth_repo.fetch_growth_logs(child_id)
    if not logs:
        logger.info("No growth logs for %s; nothing to forecast", child_id)
        return []

    since = trailing_window_start(today, NUTRITION_WINDOW_MONTHS)
    nutrition_logs = fetch_recent_nutrition(child_id, since, nutrition_repo)

    return predict_growth(logs, birth_date, nutrition_logs, months=months, today=today)


def growth_status_for_child(
    child_id: str,
    birth_date: date,
    months: int = 3,
    **kwargs,
) -> list[tuple[GrowthPrediction, GrowthStatusReport]]:
    """Forecast growth and classify each forecast month."""
    predictions = predict_for_child(child_id, birth_date, months, **kwargs)
    return [(p, get_growth_status(p)) for p in predictions]
