"""
Order Item Entity

One line of an order: a snapshot of the product at ordering time plus the
line's pricing and its shipment / return progress.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import UUID

from erp_core.core.domain import (
    NIL_ID,
    Entity,
    InvalidArgumentException,
    Money,
    QuantityBoundException,
    ValidationException,
    generate_uuid,
    to_decimal,
)
from erp_core.core.shared.clock import Clock, system_clock
from erp_core.core.shared.validators import CODE_PATTERN, DIMENSIONS_PATTERN, FieldValidator

from .. import validators as catalog_rules
from ..value_objects.order_status import OrderItemStatus

if TYPE_CHECKING:
    from .catalog_item import CatalogItem

MAX_ITEM_QUANTITY = 9999


@dataclass(eq=False)
class OrderItem(Entity[UUID]):
    """
    Order line.

    ``discount_amount`` is a per-unit discount, so the line total is
    ``unit_price * quantity - discount_amount * quantity + tax_amount``.
    Call ``calculate_totals`` after changing quantity, price, discount or
    tax rate.

    Example:
        ```python
        item = OrderItem.create(order.id, product.id, "SKU-1", "Widget", 2, Money("25.00"),
                                discount_amount=Money("5.00"), tax_rate=Decimal("8"))
        item.tax_amount    # Money('3.20')
        item.total_price   # Money('43.20')
        ```
    """

    order_id: UUID = NIL_ID
    product_id: UUID = NIL_ID
    product_sku: str = ""
    product_name: str = ""

    quantity: int = 1
    unit_price: Money = field(default_factory=Money.zero)
    discount_amount: Money = field(default_factory=Money.zero)
    tax_rate: Decimal = Decimal("0")
    tax_amount: Money = field(default_factory=Money.zero)
    total_price: Money = field(default_factory=Money.zero)

    weight: float = 0.0
    dimensions: str | None = None
    barcode: str | None = None
    notes: str | None = None

    status: OrderItemStatus = OrderItemStatus.ORDERED
    quantity_shipped: int = 0
    quantity_returned: int = 0

    def __post_init__(self):
        self.unit_price = Money.of(self.unit_price)
        self.discount_amount = Money.of(self.discount_amount)
        self.tax_amount = Money.of(self.tax_amount)
        self.total_price = Money.of(self.total_price)
        self.tax_rate = to_decimal(self.tax_rate)
        self.status = OrderItemStatus.coerce(self.status)

    # Validation

    def collect_errors(self) -> list[str]:
        v = FieldValidator()
        v.not_nil(self.id, "order item ID")
        v.not_nil(self.order_id, "order ID")
        v.not_nil(self.product_id, "product ID")
        v.required_text(self.product_sku.strip() if self.product_sku else self.product_sku, 100, "product SKU")
        v.required_text(self.product_name.strip() if self.product_name else self.product_name, 300, "product name")

        if v.positive(self.quantity, "quantity"):
            v.at_most(self.quantity, MAX_ITEM_QUANTITY, "quantity")
        if v.bounded(self.unit_price, catalog_rules.MAX_PRICE, "unit price"):
            if v.non_negative(self.discount_amount, "discount amount"):
                v.check(self.discount_amount <= self.unit_price, "discount amount cannot exceed unit price")
        else:
            v.non_negative(self.discount_amount, "discount amount")
        if v.non_negative(self.tax_rate, "tax rate"):
            v.check(self.tax_rate <= 100, "tax rate cannot exceed 100%")
        v.non_negative(self.tax_amount, "tax amount")
        if v.non_negative(self.total_price, "total price"):
            expected = self.expected_total_price()
            v.check(
                self.total_price.equal(expected),
                f"total price calculation mismatch: expected {expected}, got {self.total_price}",
            )

        v.bounded(self.weight, catalog_rules.MAX_WEIGHT, "weight")
        v.optional_text(
            self.dimensions.strip() if self.dimensions else None,
            100,
            "dimensions",
            DIMENSIONS_PATTERN,
            "dimensions must be in format 'L x W x H'",
        )
        v.optional_text(
            self.barcode.strip() if self.barcode else None,
            50,
            "barcode",
            CODE_PATTERN,
            "barcode can only contain letters, numbers, hyphens, and underscores",
        )
        v.optional_text(self.notes.strip() if self.notes else None, 500, "notes")
        v.member(self.status, OrderItemStatus, "item status")
        self._check_quantities(v)
        return v.errors

    def _check_quantities(self, v: FieldValidator) -> None:
        if v.non_negative(self.quantity_shipped, "shipped quantity"):
            v.check(
                self.quantity_shipped <= self.quantity,
                f"shipped quantity ({self.quantity_shipped}) cannot exceed ordered quantity ({self.quantity})",
            )
        if v.non_negative(self.quantity_returned, "returned quantity"):
            v.check(
                self.quantity_returned <= self.quantity_shipped,
                f"returned quantity ({self.quantity_returned}) cannot exceed "
                f"shipped quantity ({self.quantity_shipped})",
            )

    def validate(self) -> None:
        errors = self.collect_errors()
        if errors:
            raise ValidationException("order item validation failed: " + "; ".join(errors), errors=errors)

    # Calculation

    @property
    def line_subtotal(self) -> Money:
        """Gross line amount, before discount and tax."""
        return self.unit_price.mul(self.quantity)

    @property
    def line_discount(self) -> Money:
        return self.discount_amount.mul(self.quantity)

    def expected_total_price(self) -> Money:
        return self.line_subtotal.sub(self.line_discount).add(self.tax_amount)

    def calculate_totals(self) -> None:
        """Derive ``tax_amount`` and ``total_price`` from price, quantity, discount and rate."""
        after_discount = self.line_subtotal.sub(self.line_discount)
        self.tax_amount = after_discount.percent(self.tax_rate)
        self.total_price = after_discount.add(self.tax_amount)
        self.touch()

    def item_weight(self) -> float:
        return self.weight * self.quantity

    # Fulfilment

    def can_be_shipped(self) -> bool:
        return self.status == OrderItemStatus.ORDERED and self.quantity_shipped < self.quantity

    def ship_item(self, quantity: int) -> None:
        """
        Record a shipment of ``quantity`` units.

        Raises:
            InvalidArgumentException: If quantity is not positive
            QuantityBoundException: If more units would ship than were ordered
        """
        if quantity <= 0:
            raise InvalidArgumentException("quantity", "shipping quantity must be positive")
        remaining = self.quantity - self.quantity_shipped
        if quantity > remaining:
            raise QuantityBoundException("ship", quantity, remaining)

        self.quantity_shipped += quantity
        if self.quantity_shipped == self.quantity:
            self.status = OrderItemStatus.SHIPPED
        else:
            self.status = OrderItemStatus.PARTIALLY_SHIPPED
        self.touch()

    def return_item(self, quantity: int) -> None:
        """
        Record a return of ``quantity`` shipped units.

        Raises:
            InvalidArgumentException: If quantity is not positive
            QuantityBoundException: If more units would return than were shipped
        """
        if quantity <= 0:
            raise InvalidArgumentException("quantity", "return quantity must be positive")
        returnable = self.quantity_shipped - self.quantity_returned
        if quantity > returnable:
            raise QuantityBoundException("return", quantity, returnable)

        self.quantity_returned += quantity
        if self.quantity_returned == self.quantity_shipped:
            self.status = OrderItemStatus.RETURNED
        self.touch()

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._base_dict(),
            "order_id": str(self.order_id),
            "product_id": str(self.product_id),
            "product_sku": self.product_sku,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "unit_price": str(self.unit_price),
            "discount_amount": str(self.discount_amount),
            "tax_rate": str(self.tax_rate),
            "tax_amount": str(self.tax_amount),
            "total_price": str(self.total_price),
            "weight": self.weight,
            "dimensions": self.dimensions,
            "barcode": self.barcode,
            "notes": self.notes,
            "status": getattr(self.status, "value", self.status),
            "quantity_shipped": self.quantity_shipped,
            "quantity_returned": self.quantity_returned,
        }

    # Factories

    @classmethod
    def create(
        cls,
        order_id: UUID,
        product_id: UUID,
        product_sku: str,
        product_name: str,
        quantity: int,
        unit_price: Money | Decimal | int | str,
        clock: Clock | None = None,
        **attributes: Any,
    ) -> "OrderItem":
        """
        Build a line, derive its totals and validate it.

        Raises:
            ValidationException: If any invariant is violated
        """
        clock = clock or system_clock()
        now = clock.now()
        item = cls(
            id=generate_uuid(),
            created_at=now,
            updated_at=now,
            clock=clock,
            order_id=order_id,
            product_id=product_id,
            product_sku=product_sku,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
            **attributes,
        )
        item.calculate_totals()
        item.validate()
        return item

    @classmethod
    def from_catalog_item(
        cls,
        order_id: UUID,
        catalog_item: "CatalogItem",
        quantity: int,
        product_id: UUID | None = None,
        **attributes: Any,
    ) -> "OrderItem":
        """
        Snapshot a product or variant into a new line.

        Pricing, tax rate and physical data are copied so that later catalog
        changes do not alter the order. For variants pass the owning
        product's id as ``product_id``.
        """
        return cls.create(
            order_id=order_id,
            product_id=product_id or catalog_item.id,
            product_sku=catalog_item.sku,
            product_name=catalog_item.name,
            quantity=quantity,
            unit_price=catalog_item.price,
            clock=attributes.pop("clock", catalog_item.clock),
            tax_rate=attributes.pop("tax_rate", catalog_item.tax_rate if catalog_item.taxable else Decimal("0")),
            weight=attributes.pop("weight", catalog_item.weight),
            dimensions=attributes.pop("dimensions", catalog_item.dimensions),
            barcode=attributes.pop("barcode", catalog_item.barcode),
            **attributes,
        )
