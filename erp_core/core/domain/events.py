"""
Domain Events

Immutable facts recorded by aggregates, e.g. an order changing status.
Events carry primitive-friendly fields so ``to_dict`` can feed an audit
trail or a message bus directly.
"""

from abc import ABC
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for domain events.

    ``occurred_at`` defaults to the wall clock; aggregates pass their own
    clock's reading so events line up with the entity timestamps.
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    version: int = 1

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Flatten the event, with ids, enums and datetimes as strings."""
        data: dict[str, Any] = {"event_type": self.event_type}
        for f in fields(self):
            data[f.name] = _plain(getattr(self, f.name))
        return data
