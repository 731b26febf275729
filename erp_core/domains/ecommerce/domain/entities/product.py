"""
Product Entity

Catalog product with pricing, stock and digital-delivery settings.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from erp_core.core.domain import NIL_ID, InvalidArgumentException, Money, generate_uuid, is_nil_id
from erp_core.core.shared.clock import Clock, system_clock

from .catalog_item import CatalogItem


@dataclass(eq=False)
class Product(CatalogItem):
    """
    Product aggregate root.

    Example:
        ```python
        product = Product.create(
            sku="LAPTOP-15",
            name="Laptop 15in",
            category_id=category.id,
            price=Money("999.99"),
            cost=Money("700"),
        )
        product.ensure_can_fulfill(2)
        ```
    """

    short_description: str | None = None
    description: str | None = None
    category_id: UUID = NIL_ID
    is_featured: bool = False

    def collect_errors(self) -> list[str]:
        v = self._validator()
        v.not_nil(self.id, "product ID")
        self._check_common(v)
        self._check_details(v, self.name, self.description, self.short_description)
        v.not_nil(self.category_id, "category ID")
        return v.errors

    @staticmethod
    def _check_details(v, name: str, description: str | None, short_description: str | None) -> None:
        v.required_text(name.strip() if name else name, 300, "product name")
        v.max_length(short_description, 500, "short description")
        v.max_length(description, 2000, "description")

    # Mutators

    def set_featured(self, featured: bool) -> None:
        self.is_featured = featured
        self.touch()

    def update_category(self, category_id: UUID) -> None:
        """
        Raises:
            InvalidArgumentException: If category_id is nil
        """
        if is_nil_id(category_id):
            raise InvalidArgumentException("category_id", "category ID cannot be empty")
        self.category_id = category_id
        self.touch()

    def update_details(self, name: str, description: str | None = None, short_description: str | None = None) -> None:
        v = self._validator()
        self._check_details(v, name, description, short_description)
        v.raise_if_invalid("invalid product details")
        self.name = name
        self.description = description
        self.short_description = short_description
        self.touch()

    # Projections

    def to_safe_product(self) -> "SafeProduct":
        return SafeProduct.from_product(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._catalog_dict(),
            "short_description": self.short_description,
            "description": self.description,
            "category_id": str(self.category_id),
            "is_featured": self.is_featured,
        }

    # Factory

    @classmethod
    def create(
        cls,
        sku: str,
        name: str,
        category_id: UUID,
        price: Money | Decimal | int | str,
        cost: Money | Decimal | int | str = Money.zero(),
        clock: Clock | None = None,
        **attributes: Any,
    ) -> "Product":
        """
        Build and validate a new product.

        Raises:
            ValidationException: If any invariant is violated
        """
        clock = clock or system_clock()
        now = clock.now()
        product = cls(
            id=generate_uuid(),
            created_at=now,
            updated_at=now,
            clock=clock,
            sku=sku,
            name=name,
            category_id=category_id,
            price=price,
            cost=cost,
            **attributes,
        )
        product.validate()
        return product


@dataclass(frozen=True)
class SafeProduct:
    """
    Customer-facing product projection.

    Omits cost, barcode, stock thresholds, length/width/height/volume and the
    download settings (URL, maximum downloads, expiry days).
    """

    id: UUID | None
    sku: str
    name: str
    short_description: str | None
    description: str | None
    category_id: UUID
    price: Money
    weight: float
    dimensions: str | None
    track_inventory: bool
    stock_quantity: int
    allow_backorder: bool
    requires_shipping: bool
    taxable: bool
    tax_rate: Decimal
    is_active: bool
    is_featured: bool
    is_digital: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_product(cls, product: Product) -> "SafeProduct":
        return cls(
            id=product.id,
            sku=product.sku,
            name=product.name,
            short_description=product.short_description,
            description=product.description,
            category_id=product.category_id,
            price=product.price,
            weight=product.weight,
            dimensions=product.dimensions,
            track_inventory=product.track_inventory,
            stock_quantity=product.stock_quantity,
            allow_backorder=product.allow_backorder,
            requires_shipping=product.requires_shipping,
            taxable=product.taxable,
            tax_rate=product.tax_rate,
            is_active=product.is_active,
            is_featured=product.is_featured,
            is_digital=product.is_digital,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
