"""
Structured logging helpers for graph operations.

Values are rendered for humans: references in their ${node.attribute} form,
unknowns as <unknown>, containers summarised, and attributes a record marks
sensitive replaced before they reach any handler.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any, Iterable, Mapping

REDACTED = "[redacted]"


def describe_value(value: Any, max_length: int = 200) -> str:
    """
    Render a declared or resolved value for a log line.

    Args:
        value: Literal, reference, unknown placeholder or container
        max_length: Maximum length before truncating

    Returns:
        str: Printable representation
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        text = value
    elif isinstance(value, (list, tuple)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    else:
        text = str(value)

    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def redact(attributes: Mapping[str, Any], sensitive: Iterable[str]) -> dict[str, str]:
    """
    Describe every attribute, masking the sensitive ones.

    Args:
        attributes: Attribute name to value
        sensitive: Names whose values must never be logged

    Returns:
        dict: Attribute name to printable value
    """
    hidden = set(sensitive)
    return {
        key: REDACTED if key in hidden else describe_value(value)
        for key, value in attributes.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, describing every value.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Record attributes, e.g. resource and action
    """
    logger.log(
        level,
        message,
        extra={key: describe_value(value) for key, value in context.items()},
    )
