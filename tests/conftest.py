"""
Shared fixtures for Bloom tests.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date

import pytest


@pytest.fixture
def birth_date() -> date:
    return date(2024, 1, 1)


@pytest.fixture
def median_logs():
    """Three monthly measurements sitting exactly on the WHO means."""
    from bloom.models import GrowthLog

    return [
        GrowthLog(date=date(2024, 1, 1), weight_kg=3.3, height_cm=49.9, head_cm=34.5),
        GrowthLog(date=date(2024, 2, 1), weight_kg=4.5, height_cm=54.7, head_cm=37.3),
        GrowthLog(date=date(2024, 3, 1), weight_kg=5.6, height_cm=58.4, head_cm=39.1),
    ]
