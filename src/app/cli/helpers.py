"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Configuration loading
- Logging setup
- Console output formatting
"""

import json
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Dict, Any, Literal, Tuple, List

from constants import CLIDefaults, LoggingConfig

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LOG_FILENAME = "cimgraph.log"


class JSONFormatter(logging.Formatter):
    """A lightweight JSON formatter for structured logging."""

    _RESERVED_FIELDS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "process",
        "processName",
        "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - custom JSON body
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            LoggingConfig.JSON_DATE_FORMAT
        )
        payload: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Extra fields supplied via LoggerAdapter/extra
        for key, value in record.__dict__.items():
            if key in self._RESERVED_FIELDS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


_MANAGED_HANDLERS: List[Handler] = []
_LOGGING_SIGNATURE: Optional[Tuple[Any, ...]] = None
_LAST_LOG_FILE: Optional[str] = None


def get_default_config_path() -> str:
    """Get the default configuration file path.

    Returns:
        ``./config/config.json`` relative to the working directory.
    """
    return CLIDefaults.CONFIG_PATH


def _clear_managed_handlers() -> None:
    """Remove handlers that were added by this module."""
    global _MANAGED_HANDLERS
    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS = []


def _coerce_positive_int(value: Any, default: int) -> int:
    """Convert config-provided values to positive integers."""
    try:
        numeric = int(value)
        return numeric if numeric > 0 else default
    except (TypeError, ValueError):
        return default


def _create_file_handler(
    path: str,
    rotation_enabled: bool,
    max_bytes: int,
    backup_count: int
) -> Handler:
    """Create a file or rotating file handler."""
    if rotation_enabled and max_bytes > 0:
        return RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=max(backup_count, 1),
            encoding='utf-8'
        )
    return logging.FileHandler(path, encoding='utf-8')


def _open_log_file(
    file_path: str,
    rotation_enabled: bool,
    max_bytes: int,
    backup_count: int,
) -> Tuple[Optional[Handler], Optional[str]]:
    """Open the requested log file, falling back to temp and home directories."""
    log_filename = os.path.basename(file_path) or DEFAULT_LOG_FILENAME
    fallback_locations = [
        file_path,
        os.path.join(tempfile.gettempdir(), log_filename),
        os.path.join(Path.home(), log_filename),
    ]
    for candidate in fallback_locations:
        try:
            log_dir = os.path.dirname(candidate)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handler = _create_file_handler(candidate, rotation_enabled, max_bytes, backup_count)
        except OSError as exc:
            print(f"  Could not create log at {candidate}: {exc}", file=sys.stderr)
            continue
        if candidate != file_path:
            print(f"Note: Using fallback log file: {candidate}", file=sys.stderr)
        return handler, candidate

    print("Warning: Could not write log file to any location; logging to console only", file=sys.stderr)
    return None, None


def setup_logging(
    level: LogLevel = LoggingConfig.DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
    include_console: bool = True,
) -> Optional[str]:
    """
    Setup logging configuration with fallback locations.

    If the log file cannot be created at the requested location, the
    system temp directory and then the user home directory are tried before
    falling back to console-only logging.

    Args:
        level: Log level used when the config does not set one.
        log_file: Log file path overriding the config.
        config: The ``logging`` section of the configuration file.
        include_console: If False, skip adding a console handler.

    Returns:
        The actual log file path used, or None if logging to console only.
    """
    global _LOGGING_SIGNATURE, _LAST_LOG_FILE

    config_dict = dict(config or {})

    resolved_level = str(config_dict.get('level', level or LoggingConfig.DEFAULT_LOG_LEVEL))
    log_level = getattr(logging, resolved_level.upper(), logging.INFO)

    file_path = log_file if log_file is not None else config_dict.get('file')

    format_style = str(config_dict.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if format_style not in LoggingConfig.SUPPORTED_FORMATS:
        format_style = LoggingConfig.DEFAULT_FORMAT_STYLE

    formatter: logging.Formatter
    if format_style == 'json':
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt=config_dict.get('pattern') or LoggingConfig.LOG_FORMAT,
            datefmt=config_dict.get('date_format', LoggingConfig.DATE_FORMAT),
        )

    rotation_cfg = config_dict.get('rotation') if isinstance(config_dict.get('rotation'), dict) else {}
    rotation_enabled = rotation_cfg.get('enabled')
    if rotation_enabled is None:
        rotation_enabled = bool(file_path) and LoggingConfig.ROTATION_ENABLED
    max_bytes = _coerce_positive_int(
        rotation_cfg.get('max_mb', LoggingConfig.MAX_LOG_FILE_MB), LoggingConfig.MAX_LOG_FILE_MB
    ) * 1024 * 1024
    backup_count = _coerce_positive_int(
        rotation_cfg.get('backup_count', LoggingConfig.LOG_BACKUP_COUNT), LoggingConfig.LOG_BACKUP_COUNT
    )

    signature = (
        log_level,
        file_path,
        format_style,
        include_console,
        rotation_enabled,
        max_bytes,
        backup_count,
    )
    if _LOGGING_SIGNATURE == signature and _MANAGED_HANDLERS:
        return _LAST_LOG_FILE

    handlers: List[Handler] = []
    actual_log_file = None

    if include_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if file_path:
        file_handler, actual_log_file = _open_log_file(
            file_path, bool(rotation_enabled), max_bytes, backup_count
        )
        if file_handler is not None:
            handlers.append(file_handler)

    if not handlers:
        # Failsafe: keep console output
        handlers.append(logging.StreamHandler(sys.stderr))

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    logging.captureWarnings(True)
    root_logger.setLevel(log_level)

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    _LOGGING_SIGNATURE = signature
    _LAST_LOG_FILE = actual_log_file

    if actual_log_file:
        logging.getLogger(__name__).info(f"Logging to: {actual_log_file}")

    return actual_log_file


def load_config(config_path: str, required: bool = False) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file.
        required: Raise if the file doesn't exist. Otherwise a missing file
            yields an empty configuration and built-in defaults apply.

    Returns:
        Dictionary containing the configuration.

    Raises:
        ValueError: If config_path is empty or file contains invalid JSON.
        FileNotFoundError: If a required configuration file doesn't exist.
        PermissionError: If the file cannot be read.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    path = Path(config_path)
    if not path.exists():
        if required:
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}\n"
                f"Please create a config.json file or specify one with --config"
            )
        logging.getLogger(__name__).debug(f"No configuration file at {config_path}; using defaults")
        return {}

    if path.is_dir():
        raise ValueError(f"Configuration path is a directory: {config_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in configuration file {config_path} at line {e.lineno}, column {e.colno}: {e.msg}"
        )
    except UnicodeDecodeError as e:
        raise ValueError(f"File encoding error in {config_path}: {e}")
    except PermissionError:
        raise PermissionError(f"Permission denied reading {config_path}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a JSON object, got {type(config).__name__}")

    return config


def get_config_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a configuration section, requiring it to be an object when present."""
    section = config.get(name, {})
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' configuration must be an object, got {type(section).__name__}")
    return section


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with the given title.

    Args:
        title: The title to display in the header.
        width: Total width of the header line.
    """
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    """Print a footer line.

    Args:
        width: Total width of the footer line.
    """
    print("=" * width + "\n")


def format_count_summary(
    items: Dict[str, int],
    prefix: str = "  "
) -> str:
    """Format a dictionary of counts for display.

    Args:
        items: Dictionary mapping item names to counts.
        prefix: Prefix string for each line.

    Returns:
        Formatted multi-line string.
    """
    lines = []
    for name, count in sorted(items.items(), key=lambda x: -x[1]):
        lines.append(f"{prefix}{name}: {count}")
    return "\n".join(lines)
