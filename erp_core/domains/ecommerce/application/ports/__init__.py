"""
Ecommerce Application Ports

Interface definitions (ports) for the order lifecycle.
Uses Protocol for structural typing; persistence lives outside the core.
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable
from uuid import UUID

from pydantic import Field, model_validator

from erp_core.core.interfaces.repository import IIdGenerator, IRepository, ListFilter, Page
from erp_core.domains.ecommerce.domain.entities.customer import Customer
from erp_core.domains.ecommerce.domain.entities.order import Order
from erp_core.domains.ecommerce.domain.entities.order_address import OrderAddress
from erp_core.domains.ecommerce.domain.entities.product import Product
from erp_core.domains.ecommerce.domain.entities.product_category import ProductCategory
from erp_core.domains.ecommerce.domain.events import OrderStatusChanged
from erp_core.domains.ecommerce.domain.value_objects.customer_types import CustomerType
from erp_core.domains.ecommerce.domain.value_objects.order_status import (
    OrderPriority,
    OrderStatus,
    OrderType,
    PaymentStatus,
)

# Filters


class OrderFilter(ListFilter):
    """Criteria for listing orders."""

    customer_id: UUID | None = None
    statuses: list[OrderStatus] = Field(default_factory=list)
    payment_statuses: list[PaymentStatus] = Field(default_factory=list)
    priority: OrderPriority | None = None
    type: OrderType | None = None
    min_total: Decimal | None = Field(None, ge=0)
    max_total: Decimal | None = Field(None, ge=0)
    start_date: datetime | None = None
    end_date: datetime | None = None

    @model_validator(mode="after")
    def check_ranges(self) -> "OrderFilter":
        if self.min_total is not None and self.max_total is not None and self.min_total > self.max_total:
            raise ValueError("min_total cannot be greater than max_total")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date cannot be after end_date")
        return self


class CustomerFilter(ListFilter):
    """Criteria for listing customers."""

    type: CustomerType | None = None
    is_active: bool | None = None
    has_credit_available: bool | None = None


class ProductFilter(ListFilter):
    """Criteria for listing products."""

    category_id: UUID | None = None
    min_price: Decimal | None = Field(None, ge=0)
    max_price: Decimal | None = Field(None, ge=0)
    is_active: bool | None = None
    is_featured: bool | None = None
    is_digital: bool | None = None
    in_stock: bool | None = None

    @model_validator(mode="after")
    def check_ranges(self) -> "ProductFilter":
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("min_price cannot be greater than max_price")
        return self


# Repositories


@runtime_checkable
class IOrderRepository(IRepository[Order, UUID, OrderFilter], Protocol):
    """
    Interface for order repository.

    Implementations own order-number uniqueness.
    """

    async def get_by_order_number(self, order_number: str) -> Order | None:
        """Get order by its human-readable number"""
        ...

    async def exists_by_order_number(self, order_number: str) -> bool:
        """Check whether an order number is taken"""
        ...

    async def generate_unique_order_number(self) -> str:
        """Return a collision-free YYYY-NNNNNN number"""
        ...


@runtime_checkable
class ICustomerRepository(IRepository[Customer, UUID, CustomerFilter], Protocol):
    """Interface for customer repository."""

    async def get_by_customer_code(self, customer_code: str) -> Customer | None:
        """Get customer by code"""
        ...


@runtime_checkable
class IProductRepository(IRepository[Product, UUID, ProductFilter], Protocol):
    """Interface for product repository."""

    async def get_by_sku(self, sku: str) -> Product | None:
        """Get product by SKU"""
        ...


@runtime_checkable
class ICategoryRepository(IRepository[ProductCategory, UUID, ListFilter], Protocol):
    """Interface for category repository."""

    async def get_children(self, parent_id: UUID) -> list[ProductCategory]:
        """Get direct child categories"""
        ...


@runtime_checkable
class IOrderAddressRepository(IRepository[OrderAddress, UUID, ListFilter], Protocol):
    """Interface for address repository."""

    async def get_by_customer(self, customer_id: UUID) -> list[OrderAddress]:
        """Get the addresses a customer owns"""
        ...


@runtime_checkable
class IOrderAuditLog(Protocol):
    """
    Optional audit collaborator.

    Receives every order status change together with its reason and actor.
    """

    async def record_status_change(self, event: OrderStatusChanged) -> None:
        """Persist a status change record"""
        ...


__all__ = [
    # Filters
    "ListFilter",
    "OrderFilter",
    "CustomerFilter",
    "ProductFilter",
    "Page",
    # Repositories
    "IOrderRepository",
    "ICustomerRepository",
    "IProductRepository",
    "ICategoryRepository",
    "IOrderAddressRepository",
    # Collaborators
    "IOrderAuditLog",
    "IIdGenerator",
]
