"""
Clock abstraction

Domain entities never call datetime.now() directly; they ask the clock they
were built with. Tests pin time with FixedClock.
"""

from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable


def as_utc(value: datetime) -> datetime:
    """Treat a naive datetime as UTC; aware values pass through unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@runtime_checkable
class Clock(Protocol):
    """Source of the current UTC instant."""

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime"""
        ...


class SystemClock:
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """
    Clock that always returns the same instant until advanced.

    Example:
        ```python
        clock = FixedClock(datetime(2024, 5, 1, 12, 0, tzinfo=UTC))
        order = Order.create(..., clock=clock)
        clock.advance(hours=2)
        order.change_status(OrderStatus.PENDING)
        ```
    """

    def __init__(self, current: datetime | None = None):
        self._current = as_utc(current or datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC))

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime) -> None:
        """Move the clock to an absolute instant."""
        self._current = as_utc(current)

    def advance(self, **delta: float) -> datetime:
        """Move the clock forward by a timedelta expressed as keyword arguments."""
        self._current = self._current + timedelta(**delta)
        return self._current

    def __repr__(self) -> str:
        return f"FixedClock({self._current.isoformat()})"


_system_clock = SystemClock()


def system_clock() -> SystemClock:
    """Return the shared system clock."""
    return _system_clock
