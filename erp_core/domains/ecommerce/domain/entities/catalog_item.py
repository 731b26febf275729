"""
Catalog Item Base Entity

Pricing, physical, inventory, tax and digital-delivery state shared by
Product and ProductVariant, together with the behaviour built on it.
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, ClassVar
from uuid import UUID

from erp_core.core.domain import (
    AggregateRoot,
    BusinessRuleViolationException,
    InsufficientStockException,
    Money,
    ValidationException,
    to_decimal,
)
from erp_core.core.shared.validators import FieldValidator

from .. import validators as catalog_rules


@dataclass(eq=False)
class CatalogItem(AggregateRoot[UUID]):
    """
    Sellable catalog entry.

    Subclasses set ``_label`` (used in messages) and ``_message_prefix``
    (prepended to field names, e.g. "variant ").
    """

    _label: ClassVar[str] = "product"
    _message_prefix: ClassVar[str] = ""

    sku: str = ""
    name: str = ""

    # Pricing
    price: Money = field(default_factory=Money.zero)
    cost: Money = field(default_factory=Money.zero)

    # Physical properties
    weight: float = 0.0
    dimensions: str | None = None
    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    volume: float = 0.0
    barcode: str | None = None

    # Inventory
    track_inventory: bool = True
    stock_quantity: int = 0
    min_stock_level: int = 0
    max_stock_level: int = 0
    allow_backorder: bool = False
    requires_shipping: bool = True

    # Tax
    taxable: bool = True
    tax_rate: Decimal = field(default_factory=lambda: Decimal("0"))

    is_active: bool = True

    # Digital delivery
    is_digital: bool = False
    download_url: str | None = None
    max_downloads: int = 0
    expiry_days: int = 0

    def __post_init__(self):
        self.price = Money.of(self.price)
        self.cost = Money.of(self.cost)
        self.tax_rate = to_decimal(self.tax_rate)

    # Validation

    def _validator(self) -> FieldValidator:
        return FieldValidator(self._message_prefix)

    def _check_common(self, v: FieldValidator) -> None:
        catalog_rules.check_sku(v, self.sku)
        catalog_rules.check_pricing(v, self.price, self.cost)
        catalog_rules.check_physical(
            v, self.weight, self.dimensions, self.length, self.width, self.height, self.volume
        )
        catalog_rules.check_barcode(v, self.barcode)
        catalog_rules.check_inventory(v, self.stock_quantity, self.min_stock_level, self.max_stock_level)
        catalog_rules.check_tax(v, self.taxable, self.tax_rate)
        catalog_rules.check_digital(
            v, self.is_digital, self.requires_shipping, self.download_url, self.max_downloads, self.expiry_days
        )

    @abstractmethod
    def collect_errors(self) -> list[str]:
        """Return every violated invariant without raising."""
        ...

    def validate(self) -> None:
        """
        Raises:
            ValidationException: With every violated invariant
        """
        errors = self.collect_errors()
        if errors:
            raise ValidationException(f"{self._label} validation failed: " + "; ".join(errors), errors=errors)

    # Stock

    def is_in_stock(self) -> bool:
        """Untracked items are always in stock; backorderable ones too."""
        if not self.track_inventory:
            return True
        return self.stock_quantity > 0 or self.allow_backorder

    def is_low_stock(self) -> bool:
        if not self.track_inventory or self.min_stock_level <= 0:
            return False
        return self.stock_quantity <= self.min_stock_level

    def can_fulfill_order(self, quantity: int) -> bool:
        try:
            self.ensure_can_fulfill(quantity)
        except (ValidationException, BusinessRuleViolationException, InsufficientStockException):
            return False
        return True

    def ensure_can_fulfill(self, quantity: int) -> None:
        """
        Raises:
            ValidationException: If quantity is not positive
            BusinessRuleViolationException: If the item is inactive
            InsufficientStockException: If tracked stock cannot cover the quantity
        """
        if quantity <= 0:
            raise ValidationException("order quantity must be positive", field="quantity")
        if not self.is_active:
            raise BusinessRuleViolationException("inactive_item", f"{self._label} is not active")
        if self.track_inventory and not self.allow_backorder and self.stock_quantity < quantity:
            raise InsufficientStockException(self.sku, quantity, self.stock_quantity)

    def update_stock(self, new_quantity: int) -> None:
        v = self._validator()
        catalog_rules.check_stock_level(v, new_quantity)
        v.raise_if_invalid("invalid stock quantity")
        self.stock_quantity = new_quantity
        self.touch()

    def adjust_stock(self, adjustment: int) -> None:
        """Apply a signed delta to the stock quantity."""
        self.update_stock(self.stock_quantity + adjustment)

    # Pricing

    def calculate_profit(self) -> Money:
        return self.price.sub(self.cost)

    def calculate_profit_margin(self) -> Decimal:
        """Profit as a percentage of price (0 when the price is zero)."""
        if self.price.is_zero():
            return Decimal("0")
        return self.calculate_profit().amount / self.price.amount * 100

    def calculate_tax(self) -> Money:
        if not self.taxable:
            return Money.zero()
        return self.price.percent(self.tax_rate)

    def calculate_total_price(self) -> Money:
        return self.price.add(self.calculate_tax())

    def update_price(self, new_price: Money | Decimal | int | str) -> None:
        """
        Raises:
            ValidationException: If the price is not in (0, 999999.99] or
                would drop below the current cost
        """
        new_price = Money.of(new_price)
        v = self._validator()
        if v.positive(new_price, "price"):
            v.at_most(new_price, catalog_rules.MAX_PRICE, "price")
        if v.is_valid:
            v.check(self.cost <= new_price, f"{self._message_prefix}price cannot be lower than cost")
        v.raise_if_invalid("invalid price")
        self.price = new_price
        self.touch()

    def update_cost(self, new_cost: Money | Decimal | int | str) -> None:
        new_cost = Money.of(new_cost)
        v = self._validator()
        if v.bounded(new_cost, catalog_rules.MAX_PRICE, "cost"):
            v.check(new_cost <= self.price, f"{self._message_prefix}cost cannot be higher than price")
        v.raise_if_invalid("invalid cost")
        self.cost = new_cost
        self.touch()

    # Lifecycle

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    def _catalog_dict(self) -> dict[str, Any]:
        return {
            **self._base_dict(),
            "sku": self.sku,
            "name": self.name,
            "price": str(self.price),
            "cost": str(self.cost),
            "weight": self.weight,
            "dimensions": self.dimensions,
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "volume": self.volume,
            "barcode": self.barcode,
            "track_inventory": self.track_inventory,
            "stock_quantity": self.stock_quantity,
            "min_stock_level": self.min_stock_level,
            "max_stock_level": self.max_stock_level,
            "allow_backorder": self.allow_backorder,
            "requires_shipping": self.requires_shipping,
            "taxable": self.taxable,
            "tax_rate": str(self.tax_rate),
            "is_active": self.is_active,
            "is_digital": self.is_digital,
            "download_url": self.download_url,
            "max_downloads": self.max_downloads,
            "expiry_days": self.expiry_days,
        }
