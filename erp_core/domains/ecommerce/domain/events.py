"""
Order Domain Events
"""

from dataclasses import dataclass
from uuid import UUID

from erp_core.core.domain import NIL_ID, DomainEvent

from .value_objects.order_status import OrderStatus


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """
    Recorded by ``Order.change_status`` and by a full refund.

    This is the record the audit log receives; the order itself does not
    keep the reason.
    """

    order_id: UUID = NIL_ID
    previous_status: OrderStatus = OrderStatus.DRAFT
    new_status: OrderStatus = OrderStatus.DRAFT
    reason: str | None = None
    actor_id: UUID | None = None
