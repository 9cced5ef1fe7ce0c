"""
Log Sanitization

Provides filters and utilities for redacting sensitive information from logs.
"""

from __future__ import annotations

import logging
import re
from re import Pattern
from typing import Any

# Patterns for sensitive data that should be redacted
SENSITIVE_PATTERNS: list[tuple[str, Pattern[str]]] = [
    # Roblox session cookie, as a cookie pair or bare value
    ("ROBLOSECURITY", re.compile(r"\.?ROBLOSECURITY\s*[=:]\s*['\"]?[^\s;'\"]+['\"]?", re.IGNORECASE)),
    ("ROBLOSECURITY", re.compile(r"_\|WARNING:-DO-NOT-SHARE-THIS[^\s;'\"]*", re.IGNORECASE)),
    # Credential override header
    (
        "X_ROBLOX_SECURITY",
        re.compile(r"X-Roblox-Security['\"]?\s*[=:]\s*['\"]?[^\s;'\"]+['\"]?", re.IGNORECASE),
    ),
    # Cookie headers carry session state
    ("COOKIE", re.compile(r"\bCookie['\"]?\s*[=:]\s*['\"]?[^'\"\n]+['\"]?", re.IGNORECASE)),
    # API keys (various formats)
    (
        "API_KEY",
        re.compile(r"(api[_-]?key|apikey)\s*[=:]\s*['\"]?[\w\-]{20,}['\"]?", re.IGNORECASE),
    ),
    (
        "SECRET",
        re.compile(
            r"(secret|password|passwd|pwd)\s*[=:]\s*['\"]?[^\s'\"]{8,}['\"]?", re.IGNORECASE
        ),
    ),
    # Bearer tokens in headers
    ("BEARER", re.compile(r"Bearer\s+[a-zA-Z0-9\-_\.]+", re.IGNORECASE)),
]

# Placeholder for redacted content
REDACTION_PLACEHOLDER = "[REDACTED]"


class SanitizingFilter(logging.Filter):
    """
    A logging filter that redacts sensitive information from log messages.

    Applies pattern matching to detect and redact:
    - .ROBLOSECURITY cookie values
    - Cookie and credential headers
    - API keys, secrets and bearer tokens

    Usage:
        logger = logging.getLogger(__name__)
        logger.addFilter(SanitizingFilter())
    """

    def __init__(
        self,
        name: str = "",
        additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
        redaction_placeholder: str = REDACTION_PLACEHOLDER,
    ):
        """
        Initialize the sanitizing filter.

        Args:
            name: Filter name (passed to parent)
            additional_patterns: Extra patterns to redact beyond defaults
            redaction_placeholder: Text to replace sensitive data with
        """
        super().__init__(name)
        self._patterns = list(SENSITIVE_PATTERNS)
        if additional_patterns:
            self._patterns.extend(additional_patterns)
        self._placeholder = redaction_placeholder

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter and sanitize the log record.

        Args:
            record: The log record to filter

        Returns:
            True (always allows the record, but sanitizes it)
        """
        # Sanitize the message
        if record.msg:
            record.msg = self._sanitize(str(record.msg))

        # Sanitize arguments if they're strings
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._sanitize_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._sanitize_value(arg) for arg in record.args)

        return True

    def _sanitize(self, text: str) -> str:
        """
        Sanitize a text string by redacting sensitive patterns.

        Args:
            text: The text to sanitize

        Returns:
            Sanitized text with sensitive data redacted
        """
        return sanitize_text(text, self._patterns, self._placeholder)

    def _sanitize_value(self, value: Any) -> Any:
        """
        Sanitize a single value (used for log arguments).

        Args:
            value: The value to sanitize

        Returns:
            Sanitized value if it's a string, otherwise unchanged
        """
        if isinstance(value, str):
            return self._sanitize(value)
        return value


def sanitize_text(
    text: str,
    patterns: list[tuple[str, Pattern[str]]] | None = None,
    placeholder: str = REDACTION_PLACEHOLDER,
) -> str:
    """Redact every sensitive pattern in text."""
    result = text
    for pattern_name, pattern in patterns or SENSITIVE_PATTERNS:
        result = pattern.sub(f"{pattern_name}={placeholder}", result)
    return result


def redact_secret(text: str, secret: str | None, placeholder: str = REDACTION_PLACEHOLDER) -> str:
    """
    Remove a known secret value from text.

    Pattern matching cannot catch a credential that appears without its
    cookie name, so callers holding the value scrub it literally as well.

    Args:
        text: Text that may contain the secret
        secret: The secret value (no-op when empty)
        placeholder: Replacement text

    Returns:
        Text with every occurrence of the secret replaced
    """
    if not secret:
        return text
    return text.replace(secret, placeholder)


def configure_sanitized_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
    additional_patterns: list[tuple[str, Pattern[str]]] | None = None,
) -> None:
    """
    Configure the root logger with sanitization enabled.

    This adds the SanitizingFilter to the root logger, ensuring all
    log output is sanitized.

    Args:
        level: Logging level
        format_string: Log format string (uses default if not specified)
        additional_patterns: Extra patterns to redact
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logging.basicConfig(level=level, format=format_string)

    # Add sanitizing filter to root logger
    root_logger = logging.getLogger()
    sanitizing_filter = SanitizingFilter(additional_patterns=additional_patterns)
    root_logger.addFilter(sanitizing_filter)

    # Also add to all handlers
    for handler in root_logger.handlers:
        handler.addFilter(sanitizing_filter)


def get_sanitized_logger(name: str) -> logging.Logger:
    """
    Get a logger with sanitization filter attached.

    Use this when you want a specific logger to have sanitization
    without configuring it globally.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger with SanitizingFilter attached
    """
    logger = logging.getLogger(name)

    # Only add filter if not already present
    has_sanitizing_filter = any(isinstance(f, SanitizingFilter) for f in logger.filters)
    if not has_sanitizing_filter:
        logger.addFilter(SanitizingFilter())

    return logger
