"""
Order Totals and Validation Use Cases

Run the calculation engine and the whole-order validator against a stored order.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any
from uuid import UUID

from erp_core.config.settings import Settings, get_settings
from erp_core.core.domain import DomainException, EntityNotFoundException, Money
from erp_core.core.shared.logger import get_use_case_logger
from erp_core.domains.ecommerce.application.ports import IOrderRepository
from erp_core.domains.ecommerce.domain.services.order_calculation import calculate_order_totals
from erp_core.domains.ecommerce.domain.services.order_validation import validate_order

logger = get_use_case_logger("order_totals")


@dataclass
class CalculateOrderTotalsRequest:
    """Request for (re)calculating order totals."""

    order_id: UUID
    shipping_cost: Decimal | str = Decimal("0")
    tax_rate: Decimal | str | None = None
    apply: bool = False


@dataclass
class CalculateOrderTotalsResponse:
    """Calculation result; ``calculation`` is the serialized OrderCalculation."""

    order_id: UUID | None = None
    calculation: dict[str, Any] | None = None
    applied: bool = False
    success: bool = False
    error: str | None = None
    error_details: dict[str, Any] = field(default_factory=dict)


class CalculateOrderTotalsUseCase:
    """
    Use Case: Calculate Order Totals

    Computes totals with tax and discount breakdowns. With ``apply`` the
    result is written onto the order and persisted.
    """

    def __init__(self, order_repository: IOrderRepository, settings: Settings | None = None):
        self.order_repository = order_repository
        self.settings = settings or get_settings()

    async def execute(self, request: CalculateOrderTotalsRequest) -> CalculateOrderTotalsResponse:
        try:
            order = await self.order_repository.get_by_id(request.order_id)
            if order is None:
                raise EntityNotFoundException("Order", request.order_id)

            tax_rate = request.tax_rate if request.tax_rate is not None else self.settings.DEFAULT_TAX_RATE
            calculation = calculate_order_totals(order, tax_rate, Money.of(request.shipping_cost))

            if request.apply:
                calculation.apply_to(order)
                await self.order_repository.update(order)

            logger.info(f"Totals calculated for order {order.order_number}: {calculation.total_amount}")
            return CalculateOrderTotalsResponse(
                order_id=order.id,
                calculation=calculation.to_dict(),
                applied=request.apply,
                success=True,
            )

        except DomainException as e:
            logger.warning(f"Cannot calculate totals for order {request.order_id}: {e.message}")
            return CalculateOrderTotalsResponse(
                order_id=request.order_id, success=False, error=e.message, error_details=e.to_dict()
            )
        except Exception as e:
            logger.error(f"Error calculating totals for order {request.order_id}: {e}")
            return CalculateOrderTotalsResponse(order_id=request.order_id, success=False, error=str(e))


@dataclass
class ValidateOrderResponse:
    """Validation report for an order."""

    order_id: UUID | None = None
    is_valid: bool = False
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    success: bool = False
    error: str | None = None


class ValidateOrderUseCase:
    """
    Use Case: Validate Order

    Produces the advisory validation report; an invalid order is still a
    successful use-case run.
    """

    def __init__(self, order_repository: IOrderRepository, settings: Settings | None = None):
        self.order_repository = order_repository
        self.settings = settings or get_settings()

    async def execute(self, order_id: UUID) -> ValidateOrderResponse:
        try:
            order = await self.order_repository.get_by_id(order_id)
            if order is None:
                return ValidateOrderResponse(order_id=order_id, success=False, error=f"Order not found: {order_id}")

            report = validate_order(order, large_order_threshold=self.settings.LARGE_ORDER_THRESHOLD)
            if not report.is_valid:
                logger.info(f"Order {order.order_number} failed validation with {len(report.errors)} error(s)")

            return ValidateOrderResponse(
                order_id=order.id,
                is_valid=report.is_valid,
                errors=report.errors,
                warnings=report.warnings,
                success=True,
            )

        except Exception as e:
            logger.error(f"Error validating order {order_id}: {e}")
            return ValidateOrderResponse(order_id=order_id, success=False, error=str(e))


__all__ = [
    "CalculateOrderTotalsUseCase",
    "CalculateOrderTotalsRequest",
    "CalculateOrderTotalsResponse",
    "ValidateOrderUseCase",
    "ValidateOrderResponse",
]
