"""
Medication reminder expansion.

Turns a compact dosing schedule into concrete, future notification times.
Delivery is somebody else's job; this module only does the date math.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta

from bloom.models import MedicationReminder, MedicationSchedule

TIME_OF_DAY: dict[str, time] = {
    "morning": time(8, 0),
    "noon": time(12, 0),
    "evening": time(18, 0),
    "night": time(22, 0),
}


def expand_schedule(
    medication_name: str,
    dosage: str,
    schedule: MedicationSchedule,
    person_type: str,
    notify_minutes_before: int = 5,
    now: datetime | None = None,
) -> list[MedicationReminder]:
    """
    Create one reminder per dose in the schedule that is still ahead.

    Args:
        medication_name: Display name of the medication
        dosage: Dose description, e.g. "5 ml"
        schedule: Times of day and the inclusive date range
        person_type: Who takes the dose ("baby", "mother", ...)
        notify_minutes_before: Lead time between notification and dose
        now: Reference time; doses at or before it are skipped

    Returns:
        Reminders ordered by dose time
    """
    now = now or datetime.now()
    lead = timedelta(minutes=notify_minutes_before)
    reminders = []

    days = (schedule.end_date - schedule.start_date).days + 1
    for offset in range(max(days, 0)):
        day = schedule.start_date + timedelta(days=offset)
        for label in schedule.times_of_day:
            dose_clock = TIME_OF_DAY.get(label)
            if dose_clock is None:
                continue

            dose_time = datetime.combine(day, dose_clock)
            if dose_time <= now:
                continue

            reminders.append(MedicationReminder(
                id=f"{medication_name}-{day.isoformat()}-{label}",
                title="Medication Reminder",
                body=f"Time for {medication_name} ({dosage}) - {person_type}",
                dose_time=dose_time,
                notify_at=dose_time - lead,
                data={
                    "medication_name": medication_name,
                    "dosage": dosage,
                    "person_type": person_type,
                    "time_of_day": label,
                    "user_id": schedule.user_id,
                    "schedule_id": schedule.id,
                },
            ))

    reminders.sort(key=lambda r: r.dose_time)
    return reminders
