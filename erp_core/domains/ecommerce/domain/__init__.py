"""
E-commerce Domain Layer

Domain-Driven Design implementation for the order lifecycle.

This module contains:
- Entities: Product, ProductVariant, ProductCategory, Customer, OrderAddress, Order, OrderItem
- Value Objects: status enums and the order transition table
- Domain Services: order calculation, order validation, order numbers
- Events: OrderStatusChanged
"""

from erp_core.domains.ecommerce.domain.entities import (
    Customer,
    Order,
    OrderAddress,
    OrderItem,
    Product,
    ProductCategory,
    ProductVariant,
)
from erp_core.domains.ecommerce.domain.events import OrderStatusChanged
from erp_core.domains.ecommerce.domain.services import (
    OrderCalculation,
    OrderValidation,
    calculate_order_totals,
    calculate_shipping_weight,
    generate_order_number,
    validate_order,
)
from erp_core.domains.ecommerce.domain.value_objects import (
    AddressType,
    CustomerSource,
    CustomerType,
    OrderItemStatus,
    OrderPriority,
    OrderStatus,
    OrderType,
    PaymentStatus,
    ShippingMethod,
)

__all__ = [
    # Entities
    "Product",
    "ProductVariant",
    "ProductCategory",
    "Customer",
    "OrderAddress",
    "Order",
    "OrderItem",
    # Value Objects
    "OrderStatus",
    "OrderItemStatus",
    "PaymentStatus",
    "OrderPriority",
    "OrderType",
    "ShippingMethod",
    "CustomerType",
    "CustomerSource",
    "AddressType",
    # Services
    "OrderCalculation",
    "OrderValidation",
    "calculate_order_totals",
    "calculate_shipping_weight",
    "validate_order",
    "generate_order_number",
    # Events
    "OrderStatusChanged",
]
