"""
Export functionality for Bloom.
"""

from .json_export import export_predictions_json
from .markdown import export_growth_report_markdown

__all__ = [
    "export_predictions_json",
    "export_growth_report_markdown",
]
