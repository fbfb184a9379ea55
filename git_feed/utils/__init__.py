"""
Shared utility functions.

Logging setup and duration parsing used across the pipeline stages.
"""

from .duration import parse_duration
from .logging import JsonlFormatter, log_event, setup_logging

__all__ = [
    "setup_logging",
    "log_event",
    "JsonlFormatter",
    "parse_duration",
]
