"""
Order Calculation Service

Domain service that derives order totals with per-item tax and discount
breakdowns. It reads the order and never mutates it; ``apply_to`` copies a
result onto an order explicitly.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from erp_core.core.domain import InvalidArgumentException, Money, ValidationException, to_decimal

if TYPE_CHECKING:
    from ..entities.order import Order

ITEM_DISCOUNT = "ITEM_DISCOUNT"
ORDER_DISCOUNT = "ORDER_DISCOUNT"


@dataclass(frozen=True)
class TaxBreakdown:
    """Tax charged on one taxable line."""

    tax_rate: Decimal
    tax_amount: Money
    taxable_amount: Money
    tax_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "tax_rate": str(self.tax_rate),
            "tax_amount": str(self.tax_amount),
            "taxable_amount": str(self.taxable_amount),
            "tax_name": self.tax_name,
        }


@dataclass(frozen=True)
class DiscountBreakdown:
    """One discount contributing to the order discount."""

    discount_type: str
    amount: Money
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "discount_type": self.discount_type,
            "amount": str(self.amount),
            "description": self.description,
        }


@dataclass
class OrderCalculation:
    """Result of ``calculate_order_totals``."""

    subtotal: Money = field(default_factory=Money.zero)
    tax_amount: Money = field(default_factory=Money.zero)
    shipping_amount: Money = field(default_factory=Money.zero)
    discount_amount: Money = field(default_factory=Money.zero)
    total_amount: Money = field(default_factory=Money.zero)
    default_tax_rate: Decimal = Decimal("0")
    tax_breakdown: list[TaxBreakdown] = field(default_factory=list)
    discount_breakdown: list[DiscountBreakdown] = field(default_factory=list)

    def apply_to(self, order: "Order") -> None:
        """
        Copy the derived amounts onto ``order``.

        The order's ``discount_amount`` then holds item and order-level
        discounts together, so recalculate from an order whose discount was
        reset to the order-level part only.

        Raises:
            ValidationException: If the total would fall below the paid amount
        """
        order.set_totals(self.subtotal, self.tax_amount, self.shipping_amount, self.discount_amount)

    def to_dict(self) -> dict[str, Any]:
        return {
            "subtotal": str(self.subtotal),
            "tax_amount": str(self.tax_amount),
            "shipping_amount": str(self.shipping_amount),
            "discount_amount": str(self.discount_amount),
            "total_amount": str(self.total_amount),
            "default_tax_rate": str(self.default_tax_rate),
            "tax_breakdown": [row.to_dict() for row in self.tax_breakdown],
            "discount_breakdown": [row.to_dict() for row in self.discount_breakdown],
        }


def calculate_order_totals(
    order: "Order",
    default_tax_rate: Decimal | int | str = Decimal("0"),
    shipping_cost: Money | Decimal | int | str = Money.zero(),
) -> OrderCalculation:
    """
    Calculate order totals from its items.

    Here an item's ``discount_amount`` counts once per line, which is how the
    breakdown reports it; ``OrderItem.calculate_totals`` applies it per
    unit. Per-item tax rates are authoritative; ``default_tax_rate`` is
    range-checked and echoed on the result.

    Args:
        order: Order with at least one item
        default_tax_rate: Fallback rate in percent, 0 to 100
        shipping_cost: Shipping charged on the order

    Returns:
        OrderCalculation with subtotal, tax, shipping, discount, total and breakdowns

    Raises:
        ValidationException: If the order has no items
        InvalidArgumentException: If default_tax_rate is outside [0, 100]
    """
    rate = to_decimal(default_tax_rate)
    if rate < 0 or rate > 100:
        raise InvalidArgumentException("default_tax_rate", f"tax rate must be between 0 and 100, got {rate}")
    if not order.items:
        raise ValidationException("order has no items to calculate", field="items")

    calculation = OrderCalculation(shipping_amount=Money.of(shipping_cost), default_tax_rate=rate)
    subtotal = Money.zero()
    tax_total = Money.zero()
    discount_total = Money.zero()

    for item in order.items:
        item_subtotal = item.unit_price.mul(item.quantity)
        subtotal = subtotal.add(item_subtotal)

        if item.discount_amount.is_positive():
            discount_total = discount_total.add(item.discount_amount)
            calculation.discount_breakdown.append(
                DiscountBreakdown(ITEM_DISCOUNT, item.discount_amount, f"Discount on {item.product_name}")
            )

        if item.tax_rate > 0:
            taxable = item_subtotal.sub(item.discount_amount)
            item_tax = taxable.percent(item.tax_rate)
            tax_total = tax_total.add(item_tax)
            calculation.tax_breakdown.append(
                TaxBreakdown(item.tax_rate, item_tax, taxable, f"Tax @ {item.tax_rate}%")
            )

    if order.discount_amount.is_positive():
        discount_total = discount_total.add(order.discount_amount)
        calculation.discount_breakdown.append(
            DiscountBreakdown(ORDER_DISCOUNT, order.discount_amount, "Order level discount")
        )

    calculation.subtotal = subtotal
    calculation.tax_amount = tax_total
    calculation.discount_amount = discount_total
    calculation.total_amount = subtotal.add(tax_total).add(calculation.shipping_amount).sub(discount_total)
    return calculation


def calculate_shipping_weight(order: "Order") -> float:
    """Total shipped mass: sum of weight * quantity over the items."""
    return sum((item.weight * item.quantity for item in order.items), 0.0)
