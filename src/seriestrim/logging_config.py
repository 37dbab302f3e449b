"""
Logging setup for the seriestrim CLI.

Library modules only create module loggers. The CLI installs handlers once:
a stderr handler (DEBUG with --verbose, INFO otherwise) and a rotating file
under ~/.seriestrim/logs. The file handler is tuned by the [logging] section
of the config file:

    [logging]
    enabled = true        # false disables the log file
    level = "DEBUG"
    max_size_mb = 10
    backup_count = 5
"""

import logging
import logging.config
import sys

from pathlib import Path
from typing import Any

from seriestrim.config import get_config_path, load_config
from seriestrim.constants import DEFAULT_LOG_BACKUP_COUNT, DEFAULT_LOG_FILE

LOGGING_SECTION = "logging"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_logging_configured = False


def get_log_path() -> Path:
    """Log file location, next to the config file."""
    return get_config_path().parent / "logs" / DEFAULT_LOG_FILE


def _file_handler(settings: dict[str, Any]) -> dict[str, Any]:
    log_path = get_log_path()
    log_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": str(settings.get("level", "DEBUG")).upper(),
        "formatter": "file",
        "filename": str(log_path),
        "maxBytes": int(settings.get("max_size_mb", 10)) * 1024 * 1024,
        "backupCount": int(settings.get("backup_count", DEFAULT_LOG_BACKUP_COUNT)),
        "encoding": "utf-8",
    }


def build_logging_config(
    verbose: bool = False, console_format: str | None = None
) -> dict[str, Any]:
    """
    Build the dictConfig mapping for the CLI.

    Args:
        verbose: Send DEBUG records to stderr instead of INFO and above
        console_format: Format for stderr records (defaults to the file format)

    Returns:
        Mapping for logging.config.dictConfig()
    """
    settings = load_config().get(LOGGING_SECTION, {})
    if not isinstance(settings, dict):
        settings = {}

    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG" if verbose else "INFO",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    }
    if settings.get("enabled", True):
        handlers["file"] = _file_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": console_format or FILE_FORMAT},
            "file": {"format": FILE_FORMAT},
        },
        "handlers": handlers,
        "root": {"level": "DEBUG", "handlers": list(handlers)},
    }


def setup_logging(*, verbose: bool = False, console_format: str | None = None) -> None:
    """
    Install the CLI's log handlers. Later calls are no-ops.

    A log directory that cannot be created, or a bad [logging] section, falls
    back to stderr-only logging with a warning.
    """
    global _logging_configured

    if _logging_configured:
        return

    try:
        logging.config.dictConfig(
            build_logging_config(verbose=verbose, console_format=console_format)
        )
    except (OSError, ValueError, TypeError) as e:
        sys.stderr.write(f"WARNING: Failed to configure logging: {e}\n")
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format=console_format or "%(levelname)s: %(message)s",
        )

    _logging_configured = True
