"""
Logging configuration for commitmend.

Configured once by the CLI. Level comes from the argument, then the
COMMITMEND_LOG_LEVEL environment variable, then WARNING so that normal
runs only show the interactive output.
"""

import logging
import os
import sys
from typing import Optional

DEFAULT_LEVEL = "WARNING"


def configure_logging(
    level: Optional[str] = None,
    format_style: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to COMMITMEND_LOG_LEVEL env var or WARNING.
        format_style: Format style (simple, detailed).
                     Defaults to COMMITMEND_LOG_FORMAT env var or simple.
    """
    log_level = (level or os.getenv("COMMITMEND_LOG_LEVEL", DEFAULT_LEVEL)).upper()
    log_format = (format_style or os.getenv("COMMITMEND_LOG_FORMAT", "simple")).lower()

    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if log_level not in valid_levels:
        sys.stderr.write(f"Warning: Invalid log level '{log_level}', defaulting to {DEFAULT_LEVEL}\n")
        log_level = DEFAULT_LEVEL

    numeric_level = getattr(logging, log_level)

    if log_format == "detailed":
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter(fmt="%(levelname)s - %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stderr keeps stdout clean for the rendered message
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    root_logger.debug(f"Logging configured: level={log_level}, format={log_format}")

    # Quiet the SDK transport layers
    for noisy in ("httpx", "httpcore", "openai", "anthropic", "google_genai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
