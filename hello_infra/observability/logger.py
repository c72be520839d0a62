"""
Logger configuration.

Provides the stream handler and format used by the Pulumi program and local
tooling. Context attached with log_with_context (resource, action) is appended
to the line when present.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

# Record attributes appended to the message when a log call supplies them
CONTEXT_FIELDS = ("resource", "action", "changed")


class ContextFormatter(logging.Formatter):
    """Formatter that appends known context fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = [
            f"{field}={getattr(record, field)}"
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) not in (None, "")
        ]
        if context:
            line = f"{line} [{' '.join(context)}]"
        return line


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Configure Python logging with ISO timestamp and structured format.

    Args:
        level: Root log level, name or number
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    for noisy in ("urllib3", "botocore", "boto3", "grpc"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get configured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)
