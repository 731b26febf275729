"""
Change Order Status Use Case

Moves an order along its lifecycle and forwards the change to the audit log.
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from erp_core.core.domain import DomainException, EntityNotFoundException
from erp_core.core.shared.logger import get_use_case_logger
from erp_core.domains.ecommerce.application.ports import IOrderAuditLog, IOrderRepository
from erp_core.domains.ecommerce.domain.events import OrderStatusChanged

logger = get_use_case_logger("change_order_status")


@dataclass
class ChangeOrderStatusRequest:
    """Request for changing an order status."""

    order_id: UUID
    new_status: str
    reason: str | None = None
    actor_id: UUID | None = None


@dataclass
class ChangeOrderStatusResponse:
    """Response from an order status change."""

    order_id: UUID | None = None
    previous_status: str | None = None
    status: str | None = None
    success: bool = False
    error: str | None = None
    error_details: dict[str, Any] = field(default_factory=dict)


class ChangeOrderStatusUseCase:
    """
    Use Case: Change Order Status

    Responsibilities:
    - Load the order
    - Apply the transition (the order enforces the transition table)
    - Persist the order
    - Hand the recorded status-change events to the audit log
    """

    def __init__(self, order_repository: IOrderRepository, audit_log: IOrderAuditLog | None = None):
        """
        Initialize use case with dependencies.

        Args:
            order_repository: Repository for order data access
            audit_log: Optional receiver of status change records
        """
        self.order_repository = order_repository
        self.audit_log = audit_log

    async def execute(self, request: ChangeOrderStatusRequest) -> ChangeOrderStatusResponse:
        """
        Change the status of an order.

        Args:
            request: Status change request

        Returns:
            ChangeOrderStatusResponse with the old and new status or error
        """
        try:
            order = await self.order_repository.get_by_id(request.order_id)
            if order is None:
                raise EntityNotFoundException("Order", request.order_id)

            order.change_status(request.new_status, reason=request.reason, actor_id=request.actor_id)
            events = [e for e in order.get_domain_events() if isinstance(e, OrderStatusChanged)]
            order = await self.order_repository.update(order)

            if self.audit_log is not None:
                for event in events:
                    await self.audit_log.record_status_change(event)
            order.clear_domain_events()

            logger.info(
                f"Order {order.order_number} status changed: "
                f"{order.previous_status.value if order.previous_status else None} -> {order.status.value}",
                order_number=order.order_number,
                status=order.status.value,
            )
            return ChangeOrderStatusResponse(
                order_id=order.id,
                previous_status=order.previous_status.value if order.previous_status else None,
                status=order.status.value,
                success=True,
            )

        except DomainException as e:
            logger.warning(f"Status change rejected for order {request.order_id}: {e.message}")
            return ChangeOrderStatusResponse(
                order_id=request.order_id,
                success=False,
                error=e.message,
                error_details=e.to_dict(),
            )
        except Exception as e:
            logger.error(f"Error changing status of order {request.order_id}: {e}")
            return ChangeOrderStatusResponse(
                order_id=request.order_id,
                success=False,
                error=str(e),
            )


__all__ = ["ChangeOrderStatusUseCase", "ChangeOrderStatusRequest", "ChangeOrderStatusResponse"]
