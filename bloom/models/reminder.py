"""
Medication reminder models.

A schedule is the compact description a caregiver saves ("morning and
night from the 1st to the 14th"); reminders are the concrete notification
times derived from it.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MedicationSchedule(BaseModel):
    """A saved dosing schedule."""
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    user_id: str | None = None
    times_of_day: list[str] = Field(default_factory=list, alias="timesOfDay")
    start_date: date
    end_date: date


class MedicationReminder(BaseModel):
    """A single notification to deliver ahead of a dose."""
    id: str
    title: str
    body: str
    dose_time: datetime
    notify_at: datetime
    data: dict[str, Any] = Field(default_factory=dict)
