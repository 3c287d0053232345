"""
Logging configuration module.

Provides logging setup for the SDK's two diagnostic destinations
(engine and eCommerce) with support for:
- Console output with colors
- File logging with rotation
- JSON structured logging
- log4j-style level names and routing keys from the properties source
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple, Union

from pythonjsonlogger import jsonlogger

if TYPE_CHECKING:
    from orbital_sdk.config.settings import LoggingConfig

ROOT_LOGGER_NAME = "orbital_sdk"

# Level above CRITICAL so nothing is emitted; stands in for log4j's OFF.
OFF = logging.CRITICAL + 10

LOG4J_LEVELS = {
    "ALL": logging.NOTSET + 1,
    "TRACE": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
    "OFF": OFF,
}

# Third-party HTTP client loggers silenced unless HTTPClientLogLevel says otherwise
HTTP_CLIENT_LOGGERS = ("urllib3", "httpx", "httpcore", "http.client")

LOG4J_ROOT_KEY = "log4j.rootLogger"
LOG4J_LOGGER_PREFIX = "log4j.logger."

logging.addLevelName(OFF, "OFF")


class ColoredFormatter(logging.Formatter):
    """
    Colored log formatter for console output.

    Adds ANSI color codes based on log level.
    """

    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        use_colors: bool = True,
    ) -> None:
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if self.use_colors and record.levelname in self.COLORS:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = (
                f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
            )
        return super().format(record)


class SDKJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter with SDK-relevant fields.

    Adds the configuration source and phase when a record carries them.
    """

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno

        if hasattr(record, "config_source"):
            log_record["config_source"] = record.config_source
        if hasattr(record, "phase"):
            log_record["phase"] = record.phase


def _build_formatter(
    json_format: bool, use_colors: bool
) -> Union[SDKJsonFormatter, ColoredFormatter]:
    if json_format:
        return SDKJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    return ColoredFormatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        use_colors=use_colors,
    )


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    use_colors: bool = True,
) -> logging.Logger:
    """
    Set up logging for the SDK namespace.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Path to log file (None for console only).
        json_format: Use JSON format for logs.
        use_colors: Use colored console output.

    Returns:
        Configured SDK root logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        _build_formatter(json_format, use_colors and sys.stdout.isatty())
    )
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(_build_formatter(json_format, False))
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Failed to configure file handler: {e}")

    return root_logger


def ensure_default_destination(config: "LoggingConfig") -> bool:
    """
    Install SDK handlers when nothing in the process handles logging yet.

    Args:
        config: Logging section of the bootstrap settings.

    Returns:
        True if handlers were installed.
    """
    if logging.getLogger(ROOT_LOGGER_NAME).handlers or logging.getLogger().handlers:
        return False

    setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.json_format,
        use_colors=config.use_colors,
    )
    return True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance under the SDK namespace.

    Args:
        name: Logger name (typically module name).

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def create_default_loggers(
    engine_name: str = "engineLogger",
    ecommerce_name: str = "eCommerceLogger",
) -> Tuple[logging.Logger, logging.Logger]:
    """
    Create the process-default engine and eCommerce loggers.

    Both live under the SDK namespace so setup_logging() handlers apply
    to them.

    Args:
        engine_name: Name of the engine logger.
        ecommerce_name: Name of the eCommerce logger.

    Returns:
        Tuple of (engine logger, eCommerce logger).
    """
    return get_logger(engine_name), get_logger(ecommerce_name)


def to_logging_level(value: Optional[str], default: int = OFF) -> int:
    """
    Convert a log4j or stdlib level name to a logging level.

    Args:
        value: Level name such as "DEBUG", "WARN" or "OFF".
        default: Level returned when the name is missing or unknown.

    Returns:
        Numeric logging level.
    """
    if not value:
        return default
    return LOG4J_LEVELS.get(value.strip().upper(), default)


def apply_http_client_level(level_name: Optional[str]) -> int:
    """
    Set the level of third-party HTTP client loggers.

    A missing or unrecognized level turns the loggers off.

    Args:
        level_name: Level name from the HTTPClientLogLevel property.

    Returns:
        The numeric level applied.
    """
    level = to_logging_level(level_name, OFF)
    for name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(level)
    return level


def apply_log_routing(routing: Mapping[str, str]) -> Dict[str, int]:
    """
    Apply log4j-style level declarations to stdlib loggers.

    Recognizes ``log4j.rootLogger=LEVEL[, appenders]`` (applied to the SDK
    root logger) and ``log4j.logger.<name>=LEVEL[, appenders]``. Appender
    declarations and other keys are left alone.

    Args:
        routing: log4j key/value pairs from the properties source.

    Returns:
        Mapping of logger name to the level that was applied.
    """
    applied: Dict[str, int] = {}

    for key, value in routing.items():
        if key == LOG4J_ROOT_KEY:
            logger_name = ROOT_LOGGER_NAME
        elif key.startswith(LOG4J_LOGGER_PREFIX) and len(key) > len(LOG4J_LOGGER_PREFIX):
            logger_name = key[len(LOG4J_LOGGER_PREFIX):]
        else:
            continue

        level_name = value.split(",", 1)[0]
        level = to_logging_level(level_name, default=-1)
        if level < 0:
            continue

        get_logger(logger_name).setLevel(level)
        applied[logger_name] = level

    return applied
