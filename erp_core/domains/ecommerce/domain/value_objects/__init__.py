"""
E-commerce Domain Value Objects

Closed token enums and the order status transition table.
"""

from erp_core.domains.ecommerce.domain.value_objects.customer_types import (
    AddressType,
    CustomerSource,
    CustomerType,
)
from erp_core.domains.ecommerce.domain.value_objects.order_status import (
    ORDER_STATUS_TRANSITIONS,
    OrderItemStatus,
    OrderPriority,
    OrderStatus,
    OrderType,
    PaymentStatus,
    ShippingMethod,
    has_successors,
    is_terminal_status,
    is_valid_status_transition,
    terminal_statuses,
)

__all__ = [
    # Order lifecycle
    "OrderStatus",
    "ORDER_STATUS_TRANSITIONS",
    "is_valid_status_transition",
    "is_terminal_status",
    "terminal_statuses",
    "has_successors",
    "OrderItemStatus",
    "PaymentStatus",
    "OrderPriority",
    "OrderType",
    "ShippingMethod",
    # Customers
    "CustomerType",
    "CustomerSource",
    "AddressType",
]
