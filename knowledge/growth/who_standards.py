"""
WHO Child Growth Standards (0-24 months) and percentile placement.

Reference: https://www.who.int/childgrowth/standards/

Each age bucket holds the population mean and standard deviation for
weight-for-age (kg), length/height-for-age (cm) and head circumference
(cm). A measurement is placed on the curve with a plain z-score:

Z-score = (value - mean) / sd

Percentile = Φ(Z-score) where Φ is the standard normal CDF
"""

from __future__ import annotations

from dataclasses import dataclass

from scipy import stats

MAX_AGE_MONTHS = 24

# Beyond this |z| the CDF is reported as exactly 0 or 100
Z_SCORE_LIMIT = 3.49

# Published anchor points: age_months -> (weight, height, head) as (mean, sd)
# Months 13-14, 16-17, 19-20 and 22-23 are interpolated below.
_ANCHORS: dict[int, tuple[tuple[float, float], tuple[float, float], tuple[float, float]]] = {
    0: ((3.3, 0.5), (49.9, 2.0), (34.5, 1.2)),
    1: ((4.5, 0.6), (54.7, 2.1), (37.3, 1.2)),
    2: ((5.6, 0.7), (58.4, 2.2), (39.1, 1.2)),
    3: ((6.4, 0.8), (61.4, 2.2), (40.5, 1.2)),
    4: ((7.0, 0.8), (63.9, 2.2), (41.6, 1.2)),
    5: ((7.5, 0.9), (65.9, 2.3), (42.6, 1.2)),
    6: ((7.9, 0.9), (67.6, 2.3), (43.3, 1.2)),
    7: ((8.3, 1.0), (69.2, 2.3), (44.0, 1.2)),
    8: ((8.6, 1.0), (70.6, 2.4), (44.5, 1.2)),
    9: ((8.9, 1.0), (72.0, 2.4), (45.0, 1.2)),
    10: ((9.2, 1.1), (73.3, 2.4), (45.4, 1.2)),
    11: ((9.4, 1.1), (74.5, 2.5), (45.8, 1.2)),
    12: ((9.6, 1.1), (75.7, 2.5), (46.1, 1.2)),
    15: ((10.3, 1.2), (79.1, 2.6), (46.9, 1.2)),
    18: ((10.9, 1.3), (82.3, 2.7), (47.5, 1.2)),
    21: ((11.5, 1.3), (85.1, 2.8), (47.9, 1.2)),
    24: ((12.0, 1.4), (87.8, 2.9), (48.3, 1.2)),
}


@dataclass(frozen=True)
class MeasurementStandard:
    """Population mean and standard deviation for one measurement."""
    mean: float
    sd: float


@dataclass(frozen=True)
class ReferenceStandard:
    """Reference curves for a single age-in-months bucket."""
    weight: MeasurementStandard
    height: MeasurementStandard
    head: MeasurementStandard


@dataclass(frozen=True)
class PercentileSet:
    """Percentiles (0-100) for weight, height and head circumference."""
    weight: float
    height: float
    head: float


def _interpolate(
    age_months: int,
    lower_age: int,
    upper_age: int,
    field: int,
) -> MeasurementStandard:
    """Linear interpolation of (mean, sd) between two anchor ages."""
    t = (age_months - lower_age) / (upper_age - lower_age)
    mean1, sd1 = _ANCHORS[lower_age][field]
    mean2, sd2 = _ANCHORS[upper_age][field]
    return MeasurementStandard(
        mean=round(mean1 + t * (mean2 - mean1), 3),
        sd=round(sd1 + t * (sd2 - sd1), 3),
    )


def _build_table() -> tuple[ReferenceStandard, ...]:
    ages = sorted(_ANCHORS)
    table = []
    for age in range(MAX_AGE_MONTHS + 1):
        if age in _ANCHORS:
            weight, height, head = (MeasurementStandard(*pair) for pair in _ANCHORS[age])
        else:
            lower_age = max(a for a in ages if a < age)
            upper_age = min(a for a in ages if a > age)
            weight, height, head = (
                _interpolate(age, lower_age, upper_age, field) for field in range(3)
            )
        table.append(ReferenceStandard(weight=weight, height=height, head=head))
    return tuple(table)


# One entry per month of age, index == age in months
WHO_STANDARDS: tuple[ReferenceStandard, ...] = _build_table()


def lookup(age_months: float) -> ReferenceStandard:
    """
    Get the reference standard for an age.

    The age is floored to whole months. Ages past the end of the table
    use the last entry; nothing is extrapolated.
    """
    index = int(age_months // 1)
    index = max(0, min(index, len(WHO_STANDARDS) - 1))
    return WHO_STANDARDS[index]


def z_score(value: float, standard: MeasurementStandard) -> float:
    """Number of standard deviations between value and the population mean."""
    return (value - standard.mean) / standard.sd


def percentile_from_z(z: float) -> float:
    """Convert Z-score to percentile using normal CDF."""
    if z < -Z_SCORE_LIMIT:
        return 0.0
    if z > Z_SCORE_LIMIT:
        return 100.0
    return float(stats.norm.cdf(z) * 100)


def percentile(value: float, standard: MeasurementStandard) -> float:
    """
    Place a measurement on a reference curve.

    Args:
        value: Raw measurement (kg or cm)
        standard: Reference mean and sd for the same measurement and age

    Returns:
        Percentile in [0, 100]
    """
    return percentile_from_z(z_score(value, standard))


def calculate_percentiles(
    age_months: float,
    weight_kg: float | None = None,
    height_cm: float | None = None,
    head_cm: float | None = None,
) -> PercentileSet:
    """
    Calculate weight, height and head circumference percentiles for an age.

    A measurement that was not supplied gets percentile 0. That 0 means
    "missing", not "lowest".
    """
    standard = lookup(age_months)
    return PercentileSet(
        weight=percentile(weight_kg, standard.weight) if weight_kg is not None else 0.0,
        height=percentile(height_cm, standard.height) if height_cm is not None else 0.0,
        head=percentile(head_cm, standard.head) if head_cm is not None else 0.0,
    )


def interpret_percentile(value: float, measure: str) -> str:
    """Interpret a growth percentile."""
    if value < 3:
        return f"Very low {measure} (<3rd percentile)"
    elif value < 10:
        return f"Low {measure} (3rd-10th percentile)"
    elif value < 25:
        return f"Low-normal {measure} (10th-25th percentile)"
    elif value <= 75:
        return f"Normal {measure} (25th-75th percentile)"
    elif value <= 90:
        return f"High-normal {measure} (75th-90th percentile)"
    elif value <= 97:
        return f"High {measure} (90th-97th percentile)"
    else:
        return f"Very high {measure} (>97th percentile)"
