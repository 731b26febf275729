"""
Order Entity

Order aggregate root: status lifecycle, monetary totals and the payment /
refund ledger. Items are owned by value; customer and addresses are
referenced by id.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from erp_core.config.settings import get_settings
from erp_core.core.domain import (
    NIL_ID,
    AggregateRoot,
    BusinessRuleViolationException,
    ExceedsBalanceException,
    ExceedsPaidException,
    InvalidArgumentException,
    InvalidTransitionException,
    Money,
    ValidationException,
    generate_uuid,
)
from erp_core.core.shared.clock import Clock, as_utc, system_clock
from erp_core.core.shared.validators import CURRENCY_PATTERN, FieldValidator

from ..events import OrderStatusChanged
from ..services.order_number import ORDER_NUMBER_PATTERN, generate_order_number
from ..value_objects.order_status import (
    OrderPriority,
    OrderStatus,
    OrderType,
    PaymentStatus,
    ShippingMethod,
    is_terminal_status,
    is_valid_status_transition,
)
from .order_item import OrderItem

TRACKING_NUMBER_PATTERN = re.compile(r"^[A-Za-z0-9\- ]+$")

_DATE_FIELDS = (
    "order_date",
    "required_date",
    "shipping_date",
    "delivery_date",
    "cancelled_date",
    "approved_at",
    "shipped_at",
)

_AMOUNT_FIELDS = (
    "subtotal",
    "tax_amount",
    "shipping_amount",
    "discount_amount",
    "total_amount",
    "paid_amount",
    "refunded_amount",
)


@dataclass(eq=False)
class Order(AggregateRoot[UUID]):
    """
    Order aggregate root.

    Invariants kept by every mutator:
    - ``total_amount == subtotal + tax_amount + shipping_amount - discount_amount``
    - ``0 <= paid_amount <= total_amount`` and ``0 <= refunded_amount <= paid_amount``
    - status changes follow the transition table (a full refund is the only
      skip-ahead to REFUNDED)

    Example:
        ```python
        order = Order.create(customer.id, shipping.id, billing.id, created_by=user_id)
        order.add_item(OrderItem.create(order.id, product.id, "SKU-1", "Widget", 2, Money("25")))
        order.calculate_totals()
        order.change_status(OrderStatus.PENDING, reason="submitted")
        order.add_payment(order.total_amount)
        ```
    """

    order_number: str = ""
    customer_id: UUID = NIL_ID

    # Status tracking
    status: OrderStatus = OrderStatus.DRAFT
    previous_status: OrderStatus | None = None
    priority: OrderPriority = OrderPriority.NORMAL
    type: OrderType = OrderType.SALES
    payment_status: PaymentStatus = PaymentStatus.PENDING
    shipping_method: ShippingMethod = ShippingMethod.STANDARD

    # Amounts
    subtotal: Money = field(default_factory=Money.zero)
    tax_amount: Money = field(default_factory=Money.zero)
    shipping_amount: Money = field(default_factory=Money.zero)
    discount_amount: Money = field(default_factory=Money.zero)
    total_amount: Money = field(default_factory=Money.zero)
    paid_amount: Money = field(default_factory=Money.zero)
    refunded_amount: Money = field(default_factory=Money.zero)
    currency: str = "USD"

    # Dates
    order_date: datetime | None = None
    required_date: datetime | None = None
    shipping_date: datetime | None = None
    delivery_date: datetime | None = None
    cancelled_date: datetime | None = None

    # Addresses
    shipping_address_id: UUID = NIL_ID
    billing_address_id: UUID = NIL_ID

    # Notes and tracking
    notes: str | None = None
    internal_notes: str | None = None
    customer_notes: str | None = None
    tracking_number: str | None = None
    carrier: str | None = None

    # Audit
    created_by: UUID = NIL_ID
    approved_by: UUID | None = None
    shipped_by: UUID | None = None
    approved_at: datetime | None = None
    shipped_at: datetime | None = None

    items: list[OrderItem] = field(default_factory=list)

    def __post_init__(self):
        for name in _AMOUNT_FIELDS:
            setattr(self, name, Money.of(getattr(self, name)))
        for name in _DATE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, as_utc(value))
        self.status = OrderStatus.coerce(self.status)
        if self.previous_status is not None:
            self.previous_status = OrderStatus.coerce(self.previous_status)
        self.priority = OrderPriority.coerce(self.priority)
        self.type = OrderType.coerce(self.type)
        self.payment_status = PaymentStatus.coerce(self.payment_status)
        self.shipping_method = ShippingMethod.coerce(self.shipping_method)
        if self.order_date is None:
            self.order_date = self.created_at

    # Validation

    def collect_errors(self) -> list[str]:
        v = FieldValidator()
        v.not_nil(self.id, "order ID")
        order_number = self.order_number.strip() if self.order_number else self.order_number
        v.required_text(
            order_number,
            50,
            "order number",
            ORDER_NUMBER_PATTERN,
            "order number must be in format YYYY-NNNNNN",
        )
        v.not_nil(self.customer_id, "customer ID")

        v.member(self.status, OrderStatus, "order status")
        if self.previous_status is not None:
            v.member(self.previous_status, OrderStatus, "previous status")
        v.member(self.priority, OrderPriority, "order priority")
        v.member(self.type, OrderType, "order type")
        v.member(self.payment_status, PaymentStatus, "payment status")
        v.member(self.shipping_method, ShippingMethod, "shipping method")

        self._check_amounts(v)
        if v.required(self.currency, "currency"):
            v.check(
                CURRENCY_PATTERN.match(self.currency.strip()) is not None,
                "currency must be a valid 3-letter ISO 4217 code",
            )
        self._check_dates(v)
        v.not_nil(self.shipping_address_id, "shipping address ID")
        v.not_nil(self.billing_address_id, "billing address ID")

        v.max_length(self.notes.strip() if self.notes else None, 2000, "notes")
        v.max_length(self.internal_notes.strip() if self.internal_notes else None, 2000, "internal notes")
        v.max_length(self.customer_notes.strip() if self.customer_notes else None, 1000, "customer notes")
        self._check_tracking(v, self.tracking_number, self.carrier)
        return v.errors

    def _check_amounts(self, v: FieldValidator) -> None:
        all_non_negative = all([v.non_negative(getattr(self, name), name.replace("_", " ")) for name in _AMOUNT_FIELDS])
        if not all_non_negative:
            return
        expected = self.expected_total()
        v.check(
            self.total_amount.equal(expected),
            f"total amount calculation mismatch: expected {expected}, got {self.total_amount}",
        )
        v.check(self.paid_amount <= self.total_amount, "paid amount cannot exceed total amount")
        v.check(self.refunded_amount <= self.paid_amount, "refunded amount cannot exceed paid amount")

    def _check_dates(self, v: FieldValidator) -> None:
        if self.order_date is None:
            v.add("order date cannot be empty")
            return
        v.check(self.order_date <= self.now(), "order date cannot be in the future")
        if self.required_date is not None:
            v.check(self.required_date >= self.order_date, "required date cannot be before order date")
        if self.shipping_date is not None:
            v.check(self.shipping_date >= self.order_date, "shipping date cannot be before order date")
            if self.delivery_date is not None:
                v.check(self.delivery_date >= self.shipping_date, "delivery date cannot be before shipping date")
        if self.cancelled_date is not None:
            v.check(self.cancelled_date >= self.order_date, "cancelled date cannot be before order date")

    @staticmethod
    def _check_tracking(v: FieldValidator, tracking_number: str | None, carrier: str | None) -> None:
        v.optional_text(
            tracking_number.strip() if tracking_number else None,
            100,
            "tracking number",
            TRACKING_NUMBER_PATTERN,
            "tracking number contains invalid characters",
        )
        v.optional_text(carrier.strip() if carrier else None, 50, "carrier name")

    def validate(self) -> None:
        errors = self.collect_errors()
        if errors:
            raise ValidationException("order validation failed: " + "; ".join(errors), errors=errors)

    # Status Management

    def change_status(
        self,
        new_status: OrderStatus | str,
        reason: str | None = None,
        actor_id: UUID | None = None,
    ) -> OrderStatusChanged:
        """
        Move the order along the transition table.

        CANCELLED, SHIPPED and DELIVERED stamp cancelled_date, shipping_date
        and delivery_date respectively. An ``OrderStatusChanged`` event with
        the reason is recorded and returned.

        Raises:
            InvalidTransitionException: If the pair is not in the table
        """
        target = OrderStatus.coerce(new_status)
        if not isinstance(target, OrderStatus) or not is_valid_status_transition(self.status, target):
            raise InvalidTransitionException(self.status, new_status)

        now = self.now()
        previous = self.status
        self.previous_status = previous
        self.status = target
        self.updated_at = now

        if target == OrderStatus.CANCELLED:
            self.cancelled_date = now
        elif target == OrderStatus.SHIPPED:
            self.shipping_date = now
        elif target == OrderStatus.DELIVERED:
            self.delivery_date = now

        return self._record_status_change(previous, target, reason, actor_id, now)

    def _record_status_change(
        self,
        previous: OrderStatus,
        new: OrderStatus,
        reason: str | None,
        actor_id: UUID | None,
        at: datetime,
    ) -> OrderStatusChanged:
        event = OrderStatusChanged(
            order_id=self.id,
            previous_status=previous,
            new_status=new,
            reason=reason,
            actor_id=actor_id,
            occurred_at=at,
        )
        self._record_event(event)
        return event

    def can_be_cancelled(self) -> bool:
        return self.status.can_be_cancelled()

    def can_be_modified(self) -> bool:
        return self.status.can_be_modified()

    def is_complete(self) -> bool:
        return is_terminal_status(self.status)

    def set_priority(self, priority: OrderPriority | str) -> None:
        """
        Raises:
            ValidationException: If priority is not a known token
        """
        value = OrderPriority.coerce(priority)
        if not isinstance(value, OrderPriority):
            raise ValidationException(f"invalid priority: {priority}", field="priority")
        self.priority = value
        self.touch()

    def update_tracking(self, tracking_number: str | None = None, carrier: str | None = None) -> None:
        """
        Set tracking number and/or carrier. Empty values leave the current
        value untouched.

        Raises:
            ValidationException: If either value is malformed
        """
        v = FieldValidator()
        self._check_tracking(v, tracking_number, carrier)
        v.raise_if_invalid("invalid tracking information")
        if tracking_number:
            self.tracking_number = tracking_number
        if carrier:
            self.carrier = carrier
        self.touch()

    # Payment Ledger

    @property
    def outstanding_balance(self) -> Money:
        return self.total_amount.sub(self.paid_amount)

    def is_fully_paid(self) -> bool:
        return self.paid_amount >= self.total_amount

    def is_partially_paid(self) -> bool:
        return self.paid_amount.is_positive() and not self.is_fully_paid()

    def add_payment(self, amount: Money | str | int) -> None:
        """
        Record a payment.

        Raises:
            InvalidArgumentException: If amount is not positive
            ExceedsBalanceException: If the payment exceeds the outstanding balance
        """
        amount = Money.of(amount)
        if not amount.is_positive():
            raise InvalidArgumentException("amount", "payment amount must be positive")
        new_paid = self.paid_amount.add(amount)
        if new_paid > self.total_amount:
            raise ExceedsBalanceException(amount, self.outstanding_balance)

        self.paid_amount = new_paid
        if self.is_fully_paid():
            self.payment_status = PaymentStatus.PAID
        elif self.is_partially_paid():
            self.payment_status = PaymentStatus.PARTIALLY_PAID
        self.touch()

    def add_refund(self, amount: Money | str | int, actor_id: UUID | None = None) -> None:
        """
        Record a refund.

        Refunding everything that was paid sets both payment status and order
        status to REFUNDED, whatever the current status is; the prior status
        is kept in ``previous_status``.

        Raises:
            InvalidArgumentException: If amount is not positive
            ExceedsPaidException: If the refund exceeds the paid amount
        """
        amount = Money.of(amount)
        if not amount.is_positive():
            raise InvalidArgumentException("amount", "refund amount must be positive")
        new_refunded = self.refunded_amount.add(amount)
        if new_refunded > self.paid_amount:
            raise ExceedsPaidException(amount, self.paid_amount.sub(self.refunded_amount))

        now = self.now()
        self.refunded_amount = new_refunded
        self.updated_at = now
        if new_refunded.equal(self.paid_amount):
            self.payment_status = PaymentStatus.REFUNDED
            if self.status != OrderStatus.REFUNDED:
                previous = self.status
                self.previous_status = previous
                self.status = OrderStatus.REFUNDED
                self._record_status_change(previous, OrderStatus.REFUNDED, "fully refunded", actor_id, now)

    # Totals

    def expected_total(self) -> Money:
        return self.subtotal.add(self.tax_amount).add(self.shipping_amount).sub(self.discount_amount)

    def calculate_totals(self) -> None:
        """
        Recompute ``subtotal`` from the item totals and ``total_amount`` from
        the identity. Items must have their own totals calculated first.

        Raises:
            ValidationException: If the order has no items or the new total
                would fall below zero or below the paid amount
        """
        if not self.items:
            raise ValidationException("order has no items to calculate totals", field="items")
        subtotal = Money.sum(item.total_price for item in self.items)
        total = subtotal.add(self.tax_amount).add(self.shipping_amount).sub(self.discount_amount)
        self._ensure_total_fits(total)
        self.subtotal = subtotal
        self.total_amount = total
        self.touch()

    def update_charges(
        self,
        tax_amount: Money | str | int | None = None,
        shipping_amount: Money | str | int | None = None,
        discount_amount: Money | str | int | None = None,
    ) -> None:
        """
        Change order-level tax, shipping and/or discount and re-derive the total.

        Raises:
            ValidationException: If an amount is negative or the new total
                would fall below zero or below the paid amount
        """
        self.set_totals(
            self.subtotal,
            self.tax_amount if tax_amount is None else tax_amount,
            self.shipping_amount if shipping_amount is None else shipping_amount,
            self.discount_amount if discount_amount is None else discount_amount,
        )

    def set_totals(
        self,
        subtotal: Money | str | int,
        tax_amount: Money | str | int,
        shipping_amount: Money | str | int,
        discount_amount: Money | str | int,
    ) -> None:
        """
        Replace all components of the total at once; ``total_amount`` is derived.

        Raises:
            ValidationException: If a component is negative or the new total
                would fall below zero or below the paid amount
        """
        subtotal, tax, shipping, discount = (
            Money.of(subtotal),
            Money.of(tax_amount),
            Money.of(shipping_amount),
            Money.of(discount_amount),
        )
        v = FieldValidator()
        v.non_negative(subtotal, "subtotal")
        v.non_negative(tax, "tax amount")
        v.non_negative(shipping, "shipping amount")
        v.non_negative(discount, "discount amount")
        v.raise_if_invalid("invalid order charges")

        total = subtotal.add(tax).add(shipping).sub(discount)
        self._ensure_total_fits(total)
        self.subtotal = subtotal
        self.tax_amount = tax
        self.shipping_amount = shipping
        self.discount_amount = discount
        self.total_amount = total
        self.touch()

    def _ensure_total_fits(self, total: Money) -> None:
        v = FieldValidator()
        if v.non_negative(total, "total amount"):
            v.check(
                total >= self.paid_amount,
                f"total amount {total} cannot be lower than paid amount {self.paid_amount}",
            )
        v.raise_if_invalid("invalid order totals")

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def total_weight(self) -> float:
        return sum((item.item_weight() for item in self.items), 0.0)

    def is_digital_order(self) -> bool:
        """Orders count as digital when they have items and ship DIGITAL."""
        return bool(self.items) and self.shipping_method == ShippingMethod.DIGITAL

    # Item Management

    def add_item(self, item: OrderItem) -> None:
        """
        Attach a validated item. Totals are not recomputed; call
        ``calculate_totals`` when done adding items.

        Raises:
            BusinessRuleViolationException: If the order can no longer be modified
            InvalidArgumentException: If the item belongs to another order
            ValidationException: If the item is invalid
        """
        if not self.can_be_modified():
            raise BusinessRuleViolationException(
                "order_not_modifiable",
                f"cannot add items to an order in status {self.status.value}",
                {"status": self.status.value},
            )
        if item.order_id != self.id:
            raise InvalidArgumentException("item", "item belongs to a different order")
        item.validate()
        self.items.append(item)
        self.touch()

    def to_dict(self) -> dict[str, Any]:
        def _iso(value: datetime | None) -> str | None:
            return value.isoformat() if value else None

        def _id(value: UUID | None) -> str | None:
            return str(value) if value else None

        return {
            **self._base_dict(),
            "order_number": self.order_number,
            "customer_id": str(self.customer_id),
            "status": getattr(self.status, "value", self.status),
            "previous_status": getattr(self.previous_status, "value", self.previous_status),
            "priority": getattr(self.priority, "value", self.priority),
            "type": getattr(self.type, "value", self.type),
            "payment_status": getattr(self.payment_status, "value", self.payment_status),
            "shipping_method": getattr(self.shipping_method, "value", self.shipping_method),
            **{name: str(getattr(self, name)) for name in _AMOUNT_FIELDS},
            "currency": self.currency,
            "order_date": _iso(self.order_date),
            "required_date": _iso(self.required_date),
            "shipping_date": _iso(self.shipping_date),
            "delivery_date": _iso(self.delivery_date),
            "cancelled_date": _iso(self.cancelled_date),
            "shipping_address_id": str(self.shipping_address_id),
            "billing_address_id": str(self.billing_address_id),
            "notes": self.notes,
            "internal_notes": self.internal_notes,
            "customer_notes": self.customer_notes,
            "tracking_number": self.tracking_number,
            "carrier": self.carrier,
            "created_by": str(self.created_by),
            "approved_by": _id(self.approved_by),
            "shipped_by": _id(self.shipped_by),
            "approved_at": _iso(self.approved_at),
            "shipped_at": _iso(self.shipped_at),
            "items": [item.to_dict() for item in self.items],
        }

    # Factory

    @classmethod
    def create(
        cls,
        customer_id: UUID,
        shipping_address_id: UUID,
        billing_address_id: UUID,
        created_by: UUID,
        order_number: str | None = None,
        clock: Clock | None = None,
        **attributes: Any,
    ) -> "Order":
        """
        Build a DRAFT order with PENDING payment and validate it.

        Without ``order_number`` a clock-derived number is assigned, which is
        only suitable for tests and single-writer tools. ``currency`` defaults
        to the DEFAULT_CURRENCY setting.

        Raises:
            ValidationException: If any invariant is violated
        """
        attributes.setdefault("currency", get_settings().DEFAULT_CURRENCY)
        clock = clock or system_clock()
        now = clock.now()
        order = cls(
            id=generate_uuid(),
            created_at=now,
            updated_at=now,
            clock=clock,
            order_number=order_number or generate_order_number(clock),
            customer_id=customer_id,
            shipping_address_id=shipping_address_id,
            billing_address_id=billing_address_id,
            created_by=created_by,
            status=OrderStatus.DRAFT,
            payment_status=PaymentStatus.PENDING,
            order_date=attributes.pop("order_date", now),
            **attributes,
        )
        order.validate()
        return order
