"""
Growth chart reference data and percentile calculations.
"""

from .who_standards import (
    MAX_AGE_MONTHS,
    WHO_STANDARDS,
    MeasurementStandard,
    ReferenceStandard,
    PercentileSet,
    lookup,
    z_score,
    percentile,
    percentile_from_z,
    calculate_percentiles,
    interpret_percentile,
)

__all__ = [
    "MAX_AGE_MONTHS",
    "WHO_STANDARDS",
    "MeasurementStandard",
    "ReferenceStandard",
    "PercentileSet",
    "lookup",
    "z_score",
    "percentile",
    "percentile_from_z",
    "calculate_percentiles",
    "interpret_percentile",
]
