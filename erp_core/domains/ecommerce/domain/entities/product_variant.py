"""
Product Variant Entity

A purchasable variation of a product (size, color, ...). Variants carry their
own pricing, stock and digital settings and follow the product rules.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar
from uuid import UUID

from erp_core.core.domain import NIL_ID, Money, generate_uuid
from erp_core.core.shared.clock import Clock, system_clock

from .. import validators as catalog_rules
from .catalog_item import CatalogItem


@dataclass(eq=False)
class ProductVariant(CatalogItem):
    """Variant of a product; messages are prefixed with "variant"."""

    _label: ClassVar[str] = "variant"
    _message_prefix: ClassVar[str] = "variant "

    product_id: UUID = NIL_ID
    image_url: str | None = None
    sort_order: int = 0

    def collect_errors(self) -> list[str]:
        v = self._validator()
        v.not_nil(self.id, "ID")
        v.not_nil(self.product_id, "product ID")
        self._check_common(v)
        v.required_text(self.name.strip() if self.name else self.name, 300, "name")
        catalog_rules.check_image_url(v, self.image_url, 1000)
        v.non_negative(self.sort_order, "sort order")
        return v.errors

    def update_sort_order(self, new_order: int) -> None:
        v = self._validator()
        v.non_negative(new_order, "sort order")
        v.raise_if_invalid("invalid sort order")
        self.sort_order = new_order
        self.touch()

    def update_image(self, image_url: str | None) -> None:
        """Set or clear (empty / None) the main image."""
        v = self._validator()
        catalog_rules.check_image_url(v, image_url, 1000)
        v.raise_if_invalid("invalid image URL")
        self.image_url = image_url or None
        self.touch()

    def update_details(self, name: str) -> None:
        v = self._validator()
        v.required_text(name.strip() if name else name, 300, "name")
        v.raise_if_invalid("invalid variant details")
        self.name = name
        self.touch()

    def to_safe_variant(self) -> "SafeVariant":
        return SafeVariant.from_variant(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._catalog_dict(),
            "product_id": str(self.product_id),
            "image_url": self.image_url,
            "sort_order": self.sort_order,
        }

    @classmethod
    def create(
        cls,
        product_id: UUID,
        sku: str,
        name: str,
        price: Money | Decimal | int | str,
        cost: Money | Decimal | int | str = Money.zero(),
        clock: Clock | None = None,
        **attributes: Any,
    ) -> "ProductVariant":
        """
        Build and validate a new variant.

        Raises:
            ValidationException: If any invariant is violated
        """
        clock = clock or system_clock()
        now = clock.now()
        variant = cls(
            id=generate_uuid(),
            created_at=now,
            updated_at=now,
            clock=clock,
            product_id=product_id,
            sku=sku,
            name=name,
            price=price,
            cost=cost,
            **attributes,
        )
        variant.validate()
        return variant


@dataclass(frozen=True)
class SafeVariant:
    """
    Customer-facing variant projection.

    Omits cost, barcode, stock thresholds, length/width/height/volume and the
    download settings.
    """

    id: UUID | None
    product_id: UUID
    sku: str
    name: str
    price: Money
    weight: float
    dimensions: str | None
    image_url: str | None
    track_inventory: bool
    stock_quantity: int
    allow_backorder: bool
    requires_shipping: bool
    taxable: bool
    tax_rate: Decimal
    is_active: bool
    is_digital: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_variant(cls, variant: ProductVariant) -> "SafeVariant":
        return cls(
            id=variant.id,
            product_id=variant.product_id,
            sku=variant.sku,
            name=variant.name,
            price=variant.price,
            weight=variant.weight,
            dimensions=variant.dimensions,
            image_url=variant.image_url,
            track_inventory=variant.track_inventory,
            stock_quantity=variant.stock_quantity,
            allow_backorder=variant.allow_backorder,
            requires_shipping=variant.requires_shipping,
            taxable=variant.taxable,
            tax_rate=variant.tax_rate,
            is_active=variant.is_active,
            is_digital=variant.is_digital,
            sort_order=variant.sort_order,
            created_at=variant.created_at,
            updated_at=variant.updated_at,
        )
