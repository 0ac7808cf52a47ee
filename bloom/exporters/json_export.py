"""
JSON exporter for growth forecasts.
"""

from __future__ import annotations

import json
from pathlib import Path

from bloom.models import GrowthPrediction


def export_predictions_json(
    predictions: list[GrowthPrediction],
    output_path: Path | None = None,
    indent: int = 2,
) -> str:
    """
    Export forecasts to a JSON array.

    Args:
        predictions: Forecasts to export
        output_path: Optional path to write the JSON file
        indent: JSON indentation level

    Returns:
        JSON string representation of the forecasts
    """
    data = [p.model_dump(mode="json") for p in predictions]
    json_str = json.dumps(data, indent=indent)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_str)

    return json_str
