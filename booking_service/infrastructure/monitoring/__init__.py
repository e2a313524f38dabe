"""
Monitoring package.
"""

from .metrics import get_metrics, get_metrics_content_type, track_duration

__all__ = [
    "get_metrics",
    "get_metrics_content_type",
    "track_duration",
]
