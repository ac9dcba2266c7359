# Area: Shared
"""
Shared utilities used by both the content pipeline and the game engine.

This package contains:
- Logging configuration
- Field validation helpers for endpoint bodies
"""

from .logging_config import setup_logging, log_package_error
from .validation import FieldError, FieldValidator, ValidationResult

__all__ = [
    "setup_logging",
    "log_package_error",
    "FieldError",
    "FieldValidator",
    "ValidationResult",
]
