"""
Markdown exporter for growth reports.

Produces a shareable "Baby Growth Report": measurement history with
percentiles, the forecast, and what to do about it.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from knowledge.growth import calculate_percentiles, interpret_percentile
from bloom.engines.dates import age_in_months
from bloom.engines.predictor import get_growth_status
from bloom.models import GrowthLog, GrowthPrediction


def export_growth_report_markdown(
    logs: list[GrowthLog],
    birth_date: date,
    predictions: list[GrowthPrediction],
    output_path: Path | None = None,
) -> str:
    """
    Export a growth report to Markdown format.

    Args:
        logs: Measurement history
        birth_date: The child's date of birth
        predictions: Forecast produced from the same history
        output_path: Optional path to write the Markdown file

    Returns:
        Markdown string of the report
    """
    lines = []

    lines.append("# Baby Growth Report")
    lines.append("")
    lines.append(f"**Date of Birth:** {birth_date.strftime('%B %d, %Y')}")
    lines.append(f"**Measurements:** {len(logs)}")
    lines.append("")

    # History
    lines.append("## Growth History")
    lines.append("")
    if logs:
        lines.append("| Date | Age | Weight (kg) | %ile | Length (cm) | %ile | HC (cm) | %ile |")
        lines.append("|------|-----|-------------|------|-------------|------|---------|------|")
        for log in sorted(logs, key=lambda x: x.date):
            age = age_in_months(birth_date, log.date)
            p = calculate_percentiles(age, log.weight_kg, log.height_cm, log.head_cm)
            lines.append(
                f"| {log.date.strftime('%Y-%m-%d')} | {age}mo "
                f"| {_fmt(log.weight_kg, 2)} | {p.weight:.0f} "
                f"| {_fmt(log.height_cm, 1)} | {p.height:.0f} "
                f"| {_fmt(log.head_cm, 1)} | {p.head:.0f} |"
            )

        latest = max(logs, key=lambda x: x.date)
        p = calculate_percentiles(
            age_in_months(birth_date, latest.date),
            latest.weight_kg, latest.height_cm, latest.head_cm,
        )
        lines.append("")
        lines.append(f"- {interpret_percentile(p.weight, 'weight')}")
        lines.append(f"- {interpret_percentile(p.height, 'length')}")
        lines.append(f"- {interpret_percentile(p.head, 'head circumference')}")
    else:
        lines.append("*No measurements recorded*")
    lines.append("")

    # Forecast
    lines.append("## Forecast")
    lines.append("")
    if predictions:
        confidence = predictions[0].confidence_score
        lines.append(f"**Confidence:** {confidence:.0%}")
        if predictions[0].adjusted_prediction:
            lines.append("*Adjusted for nutrition and growth-pattern factors*")
        lines.append("")
        lines.append("| Date | Weight (kg) | %ile | Length (cm) | %ile | HC (cm) | %ile | Status |")
        lines.append("|------|-------------|------|-------------|------|---------|------|--------|")
        for pred in predictions:
            status = get_growth_status(pred).status.value
            lines.append(
                f"| {pred.date.strftime('%Y-%m-%d')} "
                f"| {_fmt(pred.weight_kg, 2)} | {pred.weight_percentile:.1f} "
                f"| {_fmt(pred.height_cm, 1)} | {pred.height_percentile:.1f} "
                f"| {_fmt(pred.head_cm, 1)} | {pred.head_percentile:.1f} | {status} |"
            )
        lines.append("")

        factors = predictions[0].factors
        lines.append("### Factors")
        lines.append("")
        lines.append(f"- **Nutrition score:** {factors.nutrition.nutrition_score:.2f}")
        lines.append(f"- **Growth pattern:** {factors.consistency.growth_pattern.value}")
        lines.append(
            f"- **Percentile tracking:** weight {factors.percentile_tracking.weight_trend.value}, "
            f"length {factors.percentile_tracking.height_trend.value}, "
            f"head {factors.percentile_tracking.head_trend.value}"
        )
        lines.append("")
    else:
        lines.append("*Not enough data to forecast*")
        lines.append("")

    # Recommendations
    recommendations: list[str] = []
    for pred in predictions:
        for rec in pred.recommendations + get_growth_status(pred).recommendations:
            if rec not in recommendations:
                recommendations.append(rec)

    if recommendations:
        lines.append("## Recommendations")
        lines.append("")
        for rec in recommendations:
            lines.append(f"- {rec}")
        lines.append("")

    content = "\n".join(lines)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content)

    return content


def _fmt(value: float | None, digits: int) -> str:
    return f"{value:.{digits}f}" if value is not None else "-"
