"""Logging configuration for lockgraph."""

import logging
import sys
from typing import Any, Dict


def setup_logging(level: str = "WARNING", structured: bool = False) -> logging.Logger:
    """
    Set up the lockgraph logger.

    Log records go to stderr so that report output on stdout stays clean.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Whether to use structured JSON logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("lockgraph")

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper()))

    handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(_build_formatter(structured))
    logger.addHandler(handler)

    return logger


def set_structured_logging(structured: bool) -> None:
    """Switch the handlers of the lockgraph logger between text and JSON output."""
    for handler in logger.handlers:
        handler.setFormatter(_build_formatter(structured))


def _build_formatter(structured: bool) -> logging.Formatter:
    if structured:
        return StructuredFormatter()
    return logging.Formatter(
        "[%(asctime)s] %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )


def set_log_level(level: str) -> None:
    """Change the level of the already configured lockgraph logger.

    Raises:
        ValueError: If the level name is unknown.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    logger.setLevel(numeric)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        import json
        from datetime import datetime

        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


# Global logger instance
logger = setup_logging()
