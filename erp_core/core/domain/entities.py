"""
Entity Base Classes

Identity-bearing building blocks for the order core. Two entities are the
same entity when their ids match, whatever their other attributes say.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from uuid import UUID, uuid4

from erp_core.core.shared.clock import Clock, system_clock

if TYPE_CHECKING:
    from .events import DomainEvent

TId = TypeVar("TId")

# Forbidden on identity fields; stands for "no reference".
NIL_ID = UUID(int=0)


def generate_uuid() -> UUID:
    return uuid4()


def is_nil_id(value: UUID | None) -> bool:
    """True for a missing identifier or the nil UUID."""
    return value is None or value == NIL_ID


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class Entity(ABC, Generic[TId]):
    """
    Base class for identity-bearing domain objects.

    Each entity keeps the clock it was built with and stamps
    ``updated_at`` from it whenever a mutator runs, so tests can pin time
    with a ``FixedClock``. Subclasses are declared with
    ``@dataclass(eq=False)`` so that the identity-based equality and hash
    below are not replaced.

    An entity without an id is equal only to itself.
    """

    id: TId | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)
    clock: Clock = field(default_factory=system_clock, repr=False, compare=False)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Entity) or self.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash(self.id)

    def is_new(self) -> bool:
        return self.id is None

    def now(self) -> datetime:
        return self.clock.now()

    def touch(self) -> None:
        self.updated_at = self.now()

    def _base_dict(self) -> dict[str, Any]:
        """Identity and timestamp keys shared by every ``to_dict``."""
        return {
            "id": None if self.id is None else str(self.id),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass(eq=False)
class AggregateRoot(Entity[TId], Generic[TId]):
    """
    Consistency boundary of a cluster of entities.

    Mutators on the root record domain events; the application layer reads
    them after persisting the aggregate, hands them on (for instance to the
    order audit log) and then clears them. ``version`` supports optimistic
    locking in repository adapters.
    """

    _domain_events: list["DomainEvent"] = field(default_factory=list, repr=False, compare=False)
    version: int = 0

    def _record_event(self, event: "DomainEvent") -> None:
        self._domain_events.append(event)

    def get_domain_events(self) -> list["DomainEvent"]:
        """Pending events in the order they were recorded."""
        return self._domain_events.copy()

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def increment_version(self) -> None:
        self.version += 1
