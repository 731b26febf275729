"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value (Money)
- Events: Domain events for communication
- Exceptions: Domain-specific error handling
"""

from erp_core.core.domain.entities import (
    NIL_ID,
    AggregateRoot,
    Entity,
    generate_uuid,
    is_nil_id,
)
from erp_core.core.domain.events import DomainEvent
from erp_core.core.domain.exceptions import (
    BusinessRuleViolationException,
    DomainException,
    EntityNotFoundException,
    ExceedsBalanceException,
    ExceedsPaidException,
    InsufficientCreditException,
    InsufficientStockException,
    InvalidArgumentException,
    InvalidTransitionException,
    QuantityBoundException,
    ValidationException,
)
from erp_core.core.domain.value_objects import (
    Money,
    StatusEnum,
    ValueObject,
    to_decimal,
)

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    "NIL_ID",
    "generate_uuid",
    "is_nil_id",
    # Value Objects
    "ValueObject",
    "Money",
    "StatusEnum",
    "to_decimal",
    # Events
    "DomainEvent",
    # Exceptions
    "DomainException",
    "ValidationException",
    "InvalidTransitionException",
    "ExceedsBalanceException",
    "ExceedsPaidException",
    "InsufficientCreditException",
    "QuantityBoundException",
    "InvalidArgumentException",
    "EntityNotFoundException",
    "BusinessRuleViolationException",
    "InsufficientStockException",
]
