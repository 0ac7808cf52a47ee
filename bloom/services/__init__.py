"""
Application services built on the engines and repositories.
"""

from .growth import predict_for_child, growth_status_for_child, fetch_recent_nutrition

__all__ = ["predict_for_child", "growth_status_for_child", "fetch_recent_nutrition"]
