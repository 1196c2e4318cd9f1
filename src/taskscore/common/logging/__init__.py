"""
Common Logging Utilities

Provides log sanitization for secrets redaction.
"""

from src.taskscore.common.logging.sanitizer import (
    SanitizingFilter,
    configure_sanitized_logging,
)

__all__ = [
    "SanitizingFilter",
    "configure_sanitized_logging",
]
