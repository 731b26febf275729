"""
Shared utilities module

Domain-agnostic helpers: the injectable clock, logging setup and the
field validators used by entity invariants.
"""

from .clock import Clock, FixedClock, SystemClock, as_utc, system_clock
from .logger import (
    ContextLogger,
    JSONFormatter,
    configure_from_settings,
    configure_logging,
    get_logger,
    get_repository_logger,
    get_use_case_logger,
)

__all__ = [
    # Clock
    "Clock",
    "FixedClock",
    "SystemClock",
    "system_clock",
    "as_utc",
    # Logging
    "ContextLogger",
    "JSONFormatter",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "get_use_case_logger",
    "get_repository_logger",
]
