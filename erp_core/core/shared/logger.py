"""
Shared Logger

Logging setup for processes that embed the order core. Only the
application layer logs; entities and domain services raise instead.

Context such as an order number or customer code travels on the record as
``extra_data`` and is rendered by ``JSONFormatter``.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"
FORMAT_TYPES = ("colored", "json", "plain")

# Keyword arguments understood by Logger.log itself.
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel"})


class JSONFormatter(logging.Formatter):
    """One JSON object per record, stamped with the record's creation time."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        context = getattr(record, "extra_data", None)
        if context:
            entry["extra"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter that tints the level name."""

    LEVEL_COLORS = {
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "35",
    }

    def format(self, record: logging.LogRecord) -> str:
        plain = record.levelname
        code = self.LEVEL_COLORS.get(record.levelno)
        if code:
            record.levelname = f"\033[{code}m{plain}\033[0m"
        try:
            return super().format(record)
        finally:
            # other handlers share the record
            record.levelname = plain


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that carries identifiers across a unit of work.

    Keyword arguments given to a single call are merged over the bound
    context for that record only:

        log = get_use_case_logger("record_payment").with_context(order="2024-000123")
        log.info("payment recorded", amount="50.00")
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None):
        super().__init__(logging.getLogger(name), dict(context or {}))

    @property
    def name(self) -> str:
        return self.logger.name

    @property
    def context(self) -> dict[str, Any]:
        return dict(self.extra)

    def with_context(self, **kwargs: Any) -> "ContextLogger":
        return ContextLogger(self.logger.name, {**self.extra, **kwargs})

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        passed = dict(kwargs.pop("extra", None) or {})
        for key in [k for k in kwargs if k not in _LOGGING_KWARGS]:
            passed[key] = kwargs.pop(key)
        kwargs["extra"] = {"extra_data": {**self.extra, **passed}}
        return msg, kwargs


def _console_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JSONFormatter()
    if format_type == "colored":
        return ColoredFormatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)
    if format_type == "plain":
        return logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)
    raise ValueError(f"Unknown log format {format_type!r}, expected one of {', '.join(FORMAT_TYPES)}")


def configure_logging(
    level: str = "INFO",
    format_type: str = "colored",
    log_file: str | None = None,
) -> None:
    """
    Install the root handlers, replacing any configured earlier.

    Args:
        level: Level name, case-insensitive
        format_type: Console format, one of ``FORMAT_TYPES``
        log_file: Optional path; the file always receives JSON lines

    Raises:
        ValueError: For an unknown level or format
    """
    numeric_level = logging.getLevelNamesMapping().get(level.upper())
    if numeric_level is None:
        raise ValueError(f"Unknown log level {level!r}")

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(_console_formatter(format_type))
    handlers: list[logging.Handler] = [console]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        handlers.append(file_handler)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        handler.setLevel(numeric_level)
        root.addHandler(handler)
    root.setLevel(numeric_level)


def configure_from_settings() -> None:
    """Apply LOG_LEVEL, LOG_FORMAT and LOG_FILE from the settings."""
    from erp_core.config.settings import get_settings

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_FILE)


def get_logger(name: str, context: dict[str, Any] | None = None) -> ContextLogger:
    return ContextLogger(name, context)


def _component_logger(component: str, name: str) -> ContextLogger:
    return ContextLogger(f"{component}.{name}", {"component": component, component: name})


def get_use_case_logger(use_case_name: str) -> ContextLogger:
    """Logger named ``use_case.<name>`` for application services."""
    return _component_logger("use_case", use_case_name)


def get_repository_logger(repo_name: str) -> ContextLogger:
    """Logger named ``repository.<name>`` for adapters implementing the ports."""
    return _component_logger("repository", repo_name)
