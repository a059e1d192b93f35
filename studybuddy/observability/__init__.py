"""
Observability layer: logging configuration and structured logging helpers.

Exports:
  - configure_logging: Root logger setup
  - safe_log_value, log_with_context, log_exception_with_context: Helpers
"""

from studybuddy.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from studybuddy.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "safe_log_value",
    "log_with_context",
    "log_exception_with_context",
]
