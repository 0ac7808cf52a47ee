"""
Repository classes for growth and nutrition records.

Each repository reads one Supabase table and hands the rest of the
application validated models instead of raw rows.
"""

import logging
from datetime import date
from typing import Optional

from pydantic import BaseModel, ValidationError

from bloom.db.client import get_client, SupabaseClient
from bloom.models import GrowthLog, NutritionLog

logger = logging.getLogger(__name__)


class BaseRepository:
  """Base class for all repositories."""

  table_name: str = ""

  def __init__(self, client: Optional[SupabaseClient] = None):
    self._client = client or get_client()

  @property
  def table(self):
    """Get the table reference."""
    return self._client.table(self.table_name)

  def _to_models(self, rows: list[dict], model: type[BaseModel], mapper=None) -> list:
    """Validate rows into models, skipping (and logging) malformed ones."""
    models = []
    for row in rows:
      try:
        models.append(model.model_validate(mapper(row) if mapper else row))
      except ValidationError as e:
        logger.warning("Skipping malformed %s row %s: %s", self.table_name, row.get("id"), e)
    return models


class GrowthLogRepository(BaseRepository):
  """Repository for baby growth logs."""

  table_name = "baby_growth_logs"
  columns = "id, created_at, weight_kg, height_cm, head_cm"

  @staticmethod
  def _row_to_log(row: dict) -> dict:
    return {
      "date": row.get("created_at"),
      "weight_kg": row.get("weight_kg"),
      "height_cm": row.get("height_cm"),
      "head_cm": row.get("head_cm"),
    }

  def fetch_growth_logs(self, child_id: str) -> list[GrowthLog]:
    """Get all growth logs for a child, oldest first."""
    response = (
      self.table.select(self.columns)
      .eq("user_id", str(child_id))
      .order("created_at")
      .execute()
    )
    return self._to_models(response.data or [], GrowthLog, self._row_to_log)


class NutritionLogRepository(BaseRepository):
  """Repository for daily nutrition logs."""

  table_name = "user_nutrition_logs"

  def fetch_nutrition_logs(self, child_id: str, since: date) -> list[NutritionLog]:
    """Get nutrition logs on or after `since`, oldest first."""
    response = (
      self.table.select("*")
      .eq("user_id", str(child_id))
      .gte("log_date", since.isoformat())
      .order("log_date")
      .execute()
    )
    return self._to_models(response.data or [], NutritionLog)
