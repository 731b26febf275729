"""
Domain Exceptions

These exceptions represent business rule violations raised by entities and
domain services. Every mutator raises exactly one of them and leaves the
entity untouched. Application services translate them into responses.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "EXCEEDS_BALANCE")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when one or more entity invariants are violated.

    The individual field messages are kept in ``errors``; the exception
    message joins them with "; ".
    """

    def __init__(
        self,
        message: str | None = None,
        errors: list[str] | None = None,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        errors = list(errors or [])
        if message is None:
            message = "; ".join(errors) if errors else "validation failed"
        if not errors:
            errors = [message]
        details = details or {}
        details["errors"] = errors
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)
        self.errors = errors
        self.field = field


class InvalidTransitionException(DomainException):
    """
    Raised when an order status change is not in the transition table.
    """

    def __init__(self, from_status: str, to_status: str):
        self.from_status = str(getattr(from_status, "value", from_status))
        self.to_status = str(getattr(to_status, "value", to_status))
        super().__init__(
            f"invalid status transition from {self.from_status} to {self.to_status}",
            "INVALID_TRANSITION",
            {"from": self.from_status, "to": self.to_status},
        )


class ExceedsBalanceException(DomainException):
    """
    Raised when a payment would take the paid amount above the order total.
    """

    def __init__(self, amount: Any, outstanding: Any):
        super().__init__(
            f"payment amount {amount} exceeds outstanding balance {outstanding}",
            "EXCEEDS_BALANCE",
            {"amount": str(amount), "outstanding": str(outstanding)},
        )
        self.amount = amount
        self.outstanding = outstanding


class ExceedsPaidException(DomainException):
    """
    Raised when a refund would take the refunded amount above the paid amount.
    """

    def __init__(self, amount: Any, refundable: Any):
        super().__init__(
            f"refund amount {amount} exceeds refundable amount {refundable}",
            "EXCEEDS_PAID",
            {"amount": str(amount), "refundable": str(refundable)},
        )
        self.amount = amount
        self.refundable = refundable


class InsufficientCreditException(DomainException):
    """
    Raised when a credit reservation or release does not fit the ledger.
    """

    def __init__(self, requested: Any, available: Any, message: str | None = None):
        super().__init__(
            message or f"insufficient credit: requested {requested}, available {available}",
            "INSUFFICIENT_CREDIT",
            {"requested": str(requested), "available": str(available)},
        )
        self.requested = requested
        self.available = available


class QuantityBoundException(DomainException):
    """
    Raised when shipping or returning would cross the ordered or shipped quantity.
    """

    def __init__(self, operation: str, requested: int, limit: int):
        super().__init__(
            f"cannot {operation} {requested} units: only {limit} remaining",
            "QUANTITY_BOUND",
            {"operation": operation, "requested": requested, "limit": limit},
        )
        self.operation = operation
        self.requested = requested
        self.limit = limit


class InvalidArgumentException(DomainException):
    """
    Raised for non-positive amounts or quantities and nil identifiers.
    """

    def __init__(self, argument: str, message: str):
        super().__init__(message, "INVALID_ARGUMENT", {"argument": argument})
        self.argument = argument


class EntityNotFoundException(DomainException):
    """
    Raised by application services when a repository lookup comes back empty.
    """

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            f"{entity_type} with id {entity_id} not found",
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationException(DomainException):
    """
    Raised when an operation is refused by a business rule that is not a
    field invariant (e.g. ordering an inactive product).
    """

    def __init__(self, rule: str, message: str, details: dict[str, Any] | None = None):
        details = details or {}
        details["rule"] = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION", details)
        self.rule = rule


class InsufficientStockException(DomainException):
    """
    Raised when a catalog item cannot cover the requested quantity.
    """

    def __init__(self, sku: str, requested: int, available: int):
        super().__init__(
            f"insufficient stock: {available} available, {requested} requested",
            "INSUFFICIENT_STOCK",
            {"sku": sku, "requested": requested, "available": available},
        )
        self.sku = sku
        self.requested = requested
        self.available = available
