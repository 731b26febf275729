"""
Order Validation Service

Whole-aggregate validation. Unlike ``Order.validate`` it never raises: it
returns a report so that warnings reach the caller even for a valid order.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from erp_core.config.settings import get_settings
from erp_core.core.domain import to_decimal
from erp_core.core.shared.clock import Clock

from ..value_objects.order_status import ShippingMethod, is_valid_status_transition

if TYPE_CHECKING:
    from ..entities.order import Order

# Warning codes
REQUIRED_DATE_HAS_PASSED = "required_date_has_passed"
TOTAL_EXCEEDS_10000 = "total_exceeds_10000"
DIGITAL_ORDER_WITH_NON_DIGITAL_SHIPPING_METHOD = "digital_order_with_non_digital_shipping_method"


@dataclass
class OrderValidation:
    """Validation report: ``is_valid`` is false as soon as one error is present."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, code: str) -> None:
        self.warnings.append(code)

    def to_dict(self) -> dict[str, Any]:
        return {"is_valid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}


def validate_order(
    order: "Order",
    clock: Clock | None = None,
    large_order_threshold: Decimal | int | str | None = None,
) -> OrderValidation:
    """
    Validate an order together with its items.

    Errors: order invariant violations, item invariant violations (prefixed
    with the 1-based item position), an empty item list, a non-positive
    subtotal on an order with items, and an illegal
    ``(previous_status, status)`` pair.

    Warnings: ``required_date_has_passed``, ``total_exceeds_10000`` (the
    threshold defaults to ``LARGE_ORDER_THRESHOLD``) and
    ``digital_order_with_non_digital_shipping_method``.

    Args:
        order: Order to check
        clock: Time source for date checks; defaults to the order's clock
        large_order_threshold: Override for the large-order warning

    Returns:
        OrderValidation report
    """
    clock = clock or order.clock
    threshold = (
        to_decimal(large_order_threshold)
        if large_order_threshold is not None
        else get_settings().LARGE_ORDER_THRESHOLD
    )
    report = OrderValidation()

    for message in order.collect_errors():
        report.add_error(f"order: {message}")

    if not order.items:
        report.add_error("order must have at least one item")
    else:
        for position, item in enumerate(order.items, start=1):
            for message in item.collect_errors():
                report.add_error(f"item {position}: {message}")
        if not order.subtotal.is_positive():
            report.add_error("order subtotal must be greater than zero")

    if order.previous_status is not None and not is_valid_status_transition(order.previous_status, order.status):
        previous = getattr(order.previous_status, "value", order.previous_status)
        current = getattr(order.status, "value", order.status)
        report.add_error(f"invalid status transition from {previous} to {current}")

    if order.required_date is not None and clock.now() > order.required_date:
        report.add_warning(REQUIRED_DATE_HAS_PASSED)
    if order.total_amount.amount > threshold:
        report.add_warning(TOTAL_EXCEEDS_10000)
    if order.is_digital_order() and order.shipping_method != ShippingMethod.DIGITAL:
        report.add_warning(DIGITAL_ORDER_WITH_NON_DIGITAL_SHIPPING_METHOD)

    return report
