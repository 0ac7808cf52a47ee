"""
Database module for Bloom.

Provides the Supabase client and read-only repositories for the log tables.
"""

from bloom.db.client import get_client, is_configured, SupabaseClient
from bloom.db.repositories import (
  GrowthLogRepository,
  NutritionLogRepository,
)

__all__ = [
  "get_client",
  "is_configured",
  "SupabaseClient",
  "GrowthLogRepository",
  "NutritionLogRepository",
]
