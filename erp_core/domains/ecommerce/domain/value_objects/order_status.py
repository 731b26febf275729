"""
Order Status Value Objects

Lifecycle states of an order and its items, plus the single transition
table that decides which status changes are legal.
"""

from erp_core.core.domain import StatusEnum


class OrderStatus(StatusEnum):
    """
    Order lifecycle states.

    Valid transitions:
    - DRAFT -> PENDING, CANCELLED
    - PENDING -> CONFIRMED, CANCELLED, ON_HOLD
    - CONFIRMED -> PROCESSING, CANCELLED, ON_HOLD
    - PROCESSING -> SHIPPED, PARTIALLY_SHIPPED, CANCELLED, ON_HOLD
    - PARTIALLY_SHIPPED -> SHIPPED, PROCESSING, CANCELLED, ON_HOLD
    - SHIPPED -> DELIVERED, RETURNED, ON_HOLD
    - DELIVERED -> RETURNED, REFUNDED
    - ON_HOLD -> PENDING, CONFIRMED, PROCESSING, CANCELLED
    - CANCELLED -> REFUNDED
    - RETURNED -> REFUNDED
    - REFUNDED -> (none)

    DELIVERED, CANCELLED and REFUNDED are terminal: the order is complete
    even though DELIVERED and CANCELLED still allow after-sale moves.
    """

    DRAFT = "DRAFT"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    PARTIALLY_SHIPPED = "PARTIALLY_SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"
    ON_HOLD = "ON_HOLD"
    REFUNDED = "REFUNDED"

    def can_transition_to(self, new_status: "OrderStatus") -> bool:
        """
        Check if transition to new status is valid.

        Args:
            new_status: Target status

        Returns:
            True if transition is allowed
        """
        return is_valid_status_transition(self, new_status)

    def get_valid_transitions(self) -> list["OrderStatus"]:
        """Get the statuses reachable in one step, in table order."""
        return list(ORDER_STATUS_TRANSITIONS.get(self, ()))

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) state."""
        return self in _TERMINAL_STATUSES

    def can_be_cancelled(self) -> bool:
        """Check if an order in this state can still be cancelled."""
        return not self.is_terminal() and self not in (OrderStatus.SHIPPED, OrderStatus.DELIVERED)

    def can_be_modified(self) -> bool:
        """Check if items and amounts of an order in this state can still change."""
        return not self.is_terminal() and self not in (OrderStatus.SHIPPED, OrderStatus.PARTIALLY_SHIPPED)


# Transition rules: status -> valid next statuses
ORDER_STATUS_TRANSITIONS: dict[OrderStatus, tuple[OrderStatus, ...]] = {
    OrderStatus.DRAFT: (OrderStatus.PENDING, OrderStatus.CANCELLED),
    OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED, OrderStatus.ON_HOLD),
    OrderStatus.CONFIRMED: (OrderStatus.PROCESSING, OrderStatus.CANCELLED, OrderStatus.ON_HOLD),
    OrderStatus.PROCESSING: (
        OrderStatus.SHIPPED,
        OrderStatus.PARTIALLY_SHIPPED,
        OrderStatus.CANCELLED,
        OrderStatus.ON_HOLD,
    ),
    OrderStatus.PARTIALLY_SHIPPED: (
        OrderStatus.SHIPPED,
        OrderStatus.PROCESSING,
        OrderStatus.CANCELLED,
        OrderStatus.ON_HOLD,
    ),
    OrderStatus.SHIPPED: (OrderStatus.DELIVERED, OrderStatus.RETURNED, OrderStatus.ON_HOLD),
    OrderStatus.DELIVERED: (OrderStatus.RETURNED, OrderStatus.REFUNDED),
    OrderStatus.ON_HOLD: (
        OrderStatus.PENDING,
        OrderStatus.CONFIRMED,
        OrderStatus.PROCESSING,
        OrderStatus.CANCELLED,
    ),
    OrderStatus.CANCELLED: (OrderStatus.REFUNDED,),
    OrderStatus.RETURNED: (OrderStatus.REFUNDED,),
    OrderStatus.REFUNDED: (),
}

_TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED})


def is_valid_status_transition(from_status: OrderStatus, to_status: OrderStatus) -> bool:
    """True when ``to_status`` is listed as a successor of ``from_status``."""
    return to_status in ORDER_STATUS_TRANSITIONS.get(from_status, ())


def is_terminal_status(status: OrderStatus) -> bool:
    return status in _TERMINAL_STATUSES


def terminal_statuses() -> list[OrderStatus]:
    """Terminal statuses in declaration order."""
    return [s for s in OrderStatus if s in _TERMINAL_STATUSES]


def has_successors(status: OrderStatus) -> bool:
    """True when the transition table row for ``status`` is not empty."""
    return bool(ORDER_STATUS_TRANSITIONS.get(status))


class OrderItemStatus(StatusEnum):
    """Fulfilment state of a single order line."""

    ORDERED = "ORDERED"
    SHIPPED = "SHIPPED"
    PARTIALLY_SHIPPED = "PARTIALLY_SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


class PaymentStatus(StatusEnum):
    """Payment status for orders."""

    PENDING = "PENDING"
    PAID = "PAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    OVERDUE = "OVERDUE"
    REFUNDED = "REFUNDED"
    FAILED = "FAILED"


class OrderPriority(StatusEnum):
    """Handling priority of an order."""

    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"
    CRITICAL = "CRITICAL"


class OrderType(StatusEnum):
    """Commercial nature of an order."""

    SALES = "SALES"
    PURCHASE = "PURCHASE"
    RETURN = "RETURN"
    EXCHANGE = "EXCHANGE"
    TRANSFER = "TRANSFER"
    ADJUSTMENT = "ADJUSTMENT"


class ShippingMethod(StatusEnum):
    """Delivery method chosen for an order."""

    STANDARD = "STANDARD"
    EXPRESS = "EXPRESS"
    OVERNIGHT = "OVERNIGHT"
    INTERNATIONAL = "INTERNATIONAL"
    PICKUP = "PICKUP"
    DIGITAL = "DIGITAL"
