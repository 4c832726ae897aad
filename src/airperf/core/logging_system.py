"""Logging setup for the calculation engines, the HTTP service and the CLI.

This module provides a small logging layer with YAML configuration,
per-module loggers, platform-aware log locations, and startup-based rotation.

Platform-specific log locations:
    - macOS: ~/Library/Logs/AirPerf/airperf.log
    - Linux: ~/.airperf/logs/airperf.log
    - Windows: %AppData%/AirPerf/Logs/airperf.log

Each start of the service or CLI rotates logs, keeping the last 5 runs.

Typical usage example:
    from airperf.core.logging_system import get_logger

    logger = get_logger(__name__)
    logger.info("Loaded %d table rows", len(rows))
"""

import logging
import logging.handlers
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

# Global configuration
_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}
_initialized = False


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory:
        - macOS: ~/Library/Logs/AirPerf
        - Linux: ~/.airperf/logs
        - Windows: %AppData%/AirPerf/Logs
    """
    system = platform.system()

    if system == "Darwin":  # macOS
        return Path.home() / "Library" / "Logs" / "AirPerf"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "AirPerf" / "Logs"
    else:  # Linux and other Unix-like systems
        return Path.home() / ".airperf" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = "airperf.log", keep_count: int = 5) -> None:
    """Rotate logs on startup, keeping the last N runs.

    Renames current log to airperf.log.1, shifts older logs, and deletes
    logs beyond keep_count.

    Args:
        log_dir: Directory containing log files.
        log_filename: Base name of the log file (default: "airperf.log").
        keep_count: Number of old logs to keep (default: 5).
    """
    log_file = log_dir / log_filename

    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        new_log = log_dir / f"{log_filename}.{i + 1}"
        if old_log.exists():
            old_log.rename(new_log)

    log_file.rename(log_dir / f"{log_filename}.1")


def initialize_logging(config_path: str | Path | None = None, use_platform_dir: bool = True) -> None:
    """Initialize the logging system from YAML configuration.

    Call once at startup, before the first calculation is logged.

    Args:
        config_path: Path to logging configuration YAML file.
            If None, uses default configuration.
        use_platform_dir: If True, use platform-specific log directory.
            If False, use directory from config (for development/testing).

    Raises:
        LoggingError: If initialization fails.

    Examples:
        >>> initialize_logging("config/logging.yaml", use_platform_dir=False)
        >>> get_logger("airperf.api").info("Logging initialized")
    """
    global _logging_config, _initialized

    if config_path:
        try:
            config_path = Path(config_path)
            if not config_path.exists():
                raise LoggingError(f"Logging config file not found: {config_path}")

            with config_path.open("r", encoding="utf-8") as f:
                _logging_config = _merge(_get_default_config(), yaml.safe_load(f) or {})

        except LoggingError:
            raise
        except Exception as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e
    else:
        _logging_config = _get_default_config()

    if use_platform_dir:
        _logging_config["log_dir"] = str(get_platform_log_dir())

    if _logging_config["file_log"].get("enabled", True):
        try:
            _setup_directories()
            log_dir = Path(_logging_config.get("log_dir", "logs"))
            file_config = _logging_config["file_log"]
            rotate_logs(log_dir, file_config.get("filename", "airperf.log"), file_config.get("backup_count", 5))
        except OSError as e:
            # Unwritable log directory: console logging only.
            _logging_config["file_log"]["enabled"] = False
            logging.getLogger(__name__).warning("File logging disabled: %s", e)

    _configure_root_logger()

    _initialized = True


def _get_default_config() -> dict[str, Any]:
    """Get default logging configuration.

    Returns:
        Default logging configuration dictionary.
    """
    return {
        "version": 1,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "file_log": {
            "enabled": True,
            "filename": "airperf.log",
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "WARNING",
        },
        "loggers": {},
    }


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def _setup_directories() -> None:
    """Create log directories if they don't exist."""
    log_dir = Path(_logging_config.get("log_dir", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)


def _configure_root_logger() -> None:
    """Configure the root logger with handlers."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter in handlers

    root_logger.handlers.clear()

    if _logging_config.get("console", {}).get("enabled", True):
        console_handler = logging.StreamHandler()
        console_level = _logging_config.get("console", {}).get("level", "WARNING")
        console_handler.setLevel(getattr(logging, console_level))
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)

    if _logging_config.get("file_log", {}).get("enabled", True):
        file_config = _logging_config["file_log"]
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_file = log_dir / file_config.get("filename", "airperf.log")

        # Rotation already happened on startup, so the file is overwritten.
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)


class MillisecondFormatter(logging.Formatter):
    """Custom formatter that shows milliseconds with dot separator."""

    def formatTime(self, record, datefmt=None):
        """Format time with milliseconds using dot separator."""
        ct = self.converter(record.created)
        if datefmt:
            s = time.strftime(datefmt, ct)
        else:
            s = time.strftime("%Y-%m-%d %H:%M:%S", ct)
        s = f"{s}.{int(record.msecs):03d}"
        return s


def _get_formatter() -> logging.Formatter:
    """Get the configured log formatter.

    Returns:
        Configured logging.Formatter instance.
    """
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module or component.

    Loggers are cached and reused. Each logger can have its own level
    configured in the logging YAML under the 'loggers' section.

    Args:
        name: Logger name (typically ``__name__``).

    Returns:
        Configured logger instance.

    Note:
        Use lazy formatting (%) instead of f-strings.
    """
    if not _initialized:
        # Auto-initialize with defaults if not done explicitly
        initialize_logging()

    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)

    logger_config = _logging_config.get("loggers", {}).get(name, {})

    if logger_config.get("enabled", True):
        if "level" in logger_config:
            logger.setLevel(getattr(logging, logger_config["level"]))
    else:
        logger.disabled = True

    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Shutdown the logging system gracefully.

    Flushes all handlers and closes log files.
    """
    global _initialized

    logging.shutdown()
    _loggers_cache.clear()
    _initialized = False
