"""
Record Payment / Refund Use Cases

Apply money movements to an order's payment ledger.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any
from uuid import UUID

from erp_core.core.domain import DomainException, EntityNotFoundException, Money
from erp_core.core.shared.logger import get_use_case_logger
from erp_core.domains.ecommerce.application.ports import IOrderAuditLog, IOrderRepository
from erp_core.domains.ecommerce.domain.entities.order import Order
from erp_core.domains.ecommerce.domain.events import OrderStatusChanged

logger = get_use_case_logger("record_payment")


@dataclass
class RecordPaymentRequest:
    """Request for recording a payment or a refund."""

    order_id: UUID
    amount: Decimal | str
    actor_id: UUID | None = None


@dataclass
class PaymentLedgerResponse:
    """Ledger state after a payment or refund."""

    order_id: UUID | None = None
    paid_amount: Decimal | None = None
    refunded_amount: Decimal | None = None
    outstanding_balance: Decimal | None = None
    payment_status: str | None = None
    status: str | None = None
    success: bool = False
    error: str | None = None
    error_details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_order(cls, order: Order) -> "PaymentLedgerResponse":
        return cls(
            order_id=order.id,
            paid_amount=order.paid_amount.amount,
            refunded_amount=order.refunded_amount.amount,
            outstanding_balance=order.outstanding_balance.amount,
            payment_status=order.payment_status.value,
            status=order.status.value,
            success=True,
        )


class RecordPaymentUseCase:
    """
    Use Case: Record Payment

    Adds a payment to the order; the order rejects overpayment.
    """

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, request: RecordPaymentRequest) -> PaymentLedgerResponse:
        try:
            order = await self.order_repository.get_by_id(request.order_id)
            if order is None:
                raise EntityNotFoundException("Order", request.order_id)

            order.add_payment(Money.of(request.amount))
            order = await self.order_repository.update(order)

            logger.info(
                f"Payment of {request.amount} recorded on order {order.order_number} "
                f"({order.payment_status.value})",
                order_number=order.order_number,
                payment_status=order.payment_status.value,
            )
            return PaymentLedgerResponse.from_order(order)

        except DomainException as e:
            logger.warning(f"Payment rejected for order {request.order_id}: {e.message}")
            return PaymentLedgerResponse(
                order_id=request.order_id, success=False, error=e.message, error_details=e.to_dict()
            )
        except Exception as e:
            logger.error(f"Error recording payment for order {request.order_id}: {e}")
            return PaymentLedgerResponse(order_id=request.order_id, success=False, error=str(e))


class RecordRefundUseCase:
    """
    Use Case: Record Refund

    Adds a refund to the order. A full refund moves the order to REFUNDED;
    that status change is forwarded to the audit log when one is configured.
    """

    def __init__(self, order_repository: IOrderRepository, audit_log: IOrderAuditLog | None = None):
        self.order_repository = order_repository
        self.audit_log = audit_log

    async def execute(self, request: RecordPaymentRequest) -> PaymentLedgerResponse:
        try:
            order = await self.order_repository.get_by_id(request.order_id)
            if order is None:
                raise EntityNotFoundException("Order", request.order_id)

            order.add_refund(Money.of(request.amount), actor_id=request.actor_id)
            events = [e for e in order.get_domain_events() if isinstance(e, OrderStatusChanged)]
            order = await self.order_repository.update(order)

            if self.audit_log is not None:
                for event in events:
                    await self.audit_log.record_status_change(event)
            order.clear_domain_events()

            logger.info(
                f"Refund of {request.amount} recorded on order {order.order_number} "
                f"({order.payment_status.value})",
                order_number=order.order_number,
                payment_status=order.payment_status.value,
            )
            return PaymentLedgerResponse.from_order(order)

        except DomainException as e:
            logger.warning(f"Refund rejected for order {request.order_id}: {e.message}")
            return PaymentLedgerResponse(
                order_id=request.order_id, success=False, error=e.message, error_details=e.to_dict()
            )
        except Exception as e:
            logger.error(f"Error recording refund for order {request.order_id}: {e}")
            return PaymentLedgerResponse(order_id=request.order_id, success=False, error=str(e))


__all__ = [
    "RecordPaymentUseCase",
    "RecordRefundUseCase",
    "RecordPaymentRequest",
    "PaymentLedgerResponse",
]
