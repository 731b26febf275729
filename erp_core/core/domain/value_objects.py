"""
Base Value Object Classes

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

from abc import ABC
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Self

from erp_core.core.domain.exceptions import InvalidArgumentException


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are:
    - Immutable (frozen=True)
    - Compared by value (dataclass equality)
    - Have no identity
    """

    def __post_init__(self):
        """Override to add validation logic."""
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


def to_decimal(value: "Decimal | int | str | Money") -> Decimal:
    """Convert an exact numeric input to Decimal. Floats are rejected."""
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"{type(value).__name__} is not an exact decimal input")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal literal: {value!r}") from e
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


@dataclass(frozen=True, order=True)
class Money(ValueObject):
    """
    Exact decimal money amount.

    Arithmetic never rounds; derived totals are compared to stored totals with
    exact equality. Rounding is a presentation concern (see ``quantized``).
    Negative values are representable so that differences can be computed;
    entities enforce their own non-negativity rules.

    Example:
        ```python
        price = Money("25.00")
        line = price.mul(2).sub(Money("5").mul(2))   # 40.00
        tax = line.mul(Decimal("8")).div(100)         # 3.2000
        ```
    """

    amount: Decimal

    def _validate(self) -> None:
        """Normalize the stored amount to a finite Decimal."""
        amount = to_decimal(self.amount)
        if not amount.is_finite():
            raise ValueError("Money amount must be finite")
        object.__setattr__(self, "amount", amount)

    def add(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def sub(self, other: "Money") -> "Money":
        return Money(self.amount - other.amount)

    def mul(self, factor: "int | Decimal | Money") -> "Money":
        """Multiply by an integer quantity, a decimal rate or another amount."""
        return Money(self.amount * to_decimal(factor))

    def div(self, divisor: int | Decimal) -> "Money":
        """Divide exactly. Used for ``× rate ÷ 100`` computations."""
        divisor = to_decimal(divisor)
        if divisor == 0:
            raise InvalidArgumentException("divisor", "cannot divide money by zero")
        return Money(self.amount / divisor)

    def percent(self, rate: Decimal | int) -> "Money":
        """Return ``rate`` percent of this amount."""
        return self.mul(rate).div(100)

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def equal(self, other: "Money") -> bool:
        """Numeric equality (``Money("43.2")`` equals ``Money("43.20")``)."""
        return self.amount == other.amount

    def quantized(self, places: int = 2) -> "Money":
        """Rounded copy for display. Never feed it back into calculations."""
        exponent = Decimal(1).scaleb(-places)
        return Money(self.amount.quantize(exponent, ROUND_HALF_UP))

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.sub(other)

    def __neg__(self) -> "Money":
        return Money(-self.amount)

    def __str__(self) -> str:
        return str(self.amount)

    def __repr__(self) -> str:
        return f"Money('{self.amount}')"

    @classmethod
    def zero(cls) -> "Money":
        """Create a zero Money value."""
        return cls(Decimal("0"))

    @classmethod
    def of(cls, value: "Decimal | int | str | Money") -> "Money":
        """Coerce an exact numeric input into Money."""
        if isinstance(value, Money):
            return value
        return cls(to_decimal(value))

    @classmethod
    def sum(cls, amounts: Iterable["Money"]) -> "Money":
        total = Decimal("0")
        for amount in amounts:
            total += amount.amount
        return cls(total)


class StatusEnum(str, Enum):
    """
    Base class for closed token enums.

    Members are compared as enums; the string value is only used when
    crossing a serialization boundary.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all possible values."""
        return [e.value for e in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create from string value (case-insensitive)."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(f"Invalid {cls.__name__}: {value}")

    @classmethod
    def is_member(cls, value: object) -> bool:
        """True when value is a member or one of the member tokens."""
        if isinstance(value, cls):
            return True
        return isinstance(value, str) and value in cls.values()

    @classmethod
    def coerce(cls, value: object) -> object:
        """Convert a valid token to its member; leave anything else for validation to report."""
        if cls.is_member(value):
            return cls(value)
        return value
