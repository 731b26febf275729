"""
Shared Validators

Pure field checks used by the entity validators. Checks never raise; they
append human-readable messages to a FieldValidator so that every violated
invariant of an entity is reported at once.
"""

import re
from decimal import Decimal
from typing import Any
from uuid import UUID

from erp_core.core.domain.exceptions import ValidationException

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-\(\)]{7,20}$")
HTTP_URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
CODE_PATTERN = re.compile(r"^[a-zA-Z0-9\-_]+$")
DIMENSIONS_PATTERN = re.compile(r"^\d+(\.\d+)?\s*[xX]\s*\d+(\.\d+)?\s*[xX]\s*\d+(\.\d+)?\s*$")
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg")

NIL_UUID = UUID(int=0)


class FieldValidator:
    """
    Accumulates validation messages for one entity.

    Example:
        ```python
        v = FieldValidator()
        v.required(self.name, "product name")
        v.max_length(self.name, 300, "product name")
        v.raise_if_invalid()
        ```
    """

    def __init__(self, prefix: str = ""):
        """
        Args:
            prefix: Prepended to every subject, e.g. "variant " so that
                "price" is reported as "variant price".
        """
        self.prefix = prefix
        self.errors: list[str] = []

    def _subject(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def add(self, message: str) -> None:
        self.errors.append(message)

    def check(self, condition: bool, message: str) -> bool:
        """Record message when condition is false. Returns condition."""
        if not condition:
            self.errors.append(message)
        return condition

    def extend(self, messages: list[str], context: str | None = None) -> None:
        for message in messages:
            self.errors.append(f"{context}: {message}" if context else message)

    # Identity

    def not_nil(self, value: UUID | None, name: str) -> bool:
        return self.check(value is not None and value != NIL_UUID, f"{self._subject(name)} cannot be empty")

    # Strings

    def required(self, value: str | None, name: str) -> bool:
        return self.check(bool(value and value.strip()), f"{self._subject(name)} cannot be empty")

    def max_length(self, value: str | None, max_len: int, name: str) -> bool:
        if value is None:
            return True
        return self.check(len(value) <= max_len, f"{self._subject(name)} cannot exceed {max_len} characters")

    def matches(self, value: str | None, pattern: re.Pattern[str], name: str, message: str | None = None) -> bool:
        """Pattern check that skips empty values; pair with ``required`` when mandatory."""
        if not value:
            return True
        return self.check(
            pattern.match(value) is not None,
            message or f"{self._subject(name)} has an invalid format",
        )

    def optional_text(
        self,
        value: str | None,
        max_len: int,
        name: str,
        pattern: re.Pattern[str] | None = None,
        message: str | None = None,
    ) -> None:
        if not value:
            return
        if self.max_length(value, max_len, name) and pattern is not None:
            self.matches(value, pattern, name, message)

    def required_text(
        self,
        value: str | None,
        max_len: int,
        name: str,
        pattern: re.Pattern[str] | None = None,
        message: str | None = None,
    ) -> None:
        if not self.required(value, name):
            return
        if self.max_length(value, max_len, name) and pattern is not None:
            self.matches(value, pattern, name, message)

    # Numbers

    def non_negative(self, value: Any, name: str) -> bool:
        return self.check(_number(value) >= 0, f"{self._subject(name)} cannot be negative")

    def positive(self, value: Any, name: str) -> bool:
        return self.check(_number(value) > 0, f"{self._subject(name)} must be greater than 0")

    def at_most(self, value: Any, limit: Any, name: str) -> bool:
        return self.check(_number(value) <= _number(limit), f"{self._subject(name)} cannot exceed {limit}")

    def in_range(self, value: Any, min_val: Any, max_val: Any, name: str) -> bool:
        number = _number(value)
        return self.check(
            _number(min_val) <= number <= _number(max_val),
            f"{self._subject(name)} must be between {min_val} and {max_val}",
        )

    def bounded(self, value: Any, max_val: Any, name: str) -> bool:
        """Non-negative with an upper bound, reported as two distinct messages."""
        if not self.non_negative(value, name):
            return False
        return self.at_most(value, max_val, name)

    def member(self, value: Any, enum_cls: Any, name: str) -> bool:
        return self.check(
            isinstance(value, enum_cls) or value in [e.value for e in enum_cls],
            f"invalid {self._subject(name)}: {getattr(value, 'value', value)}",
        )

    # Results

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_if_invalid(self, summary: str = "validation failed") -> None:
        if self.errors:
            raise ValidationException(f"{summary}: " + "; ".join(self.errors), errors=self.errors)


def _number(value: Any) -> Any:
    """Unwrap Money-like values so that amounts compare as Decimals."""
    amount = getattr(value, "amount", value)
    if isinstance(amount, (int, float, Decimal)):
        return amount
    raise TypeError(f"Expected a number, got {type(value).__name__}")


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.match(value) is not None


def is_valid_phone(value: str) -> bool:
    return PHONE_PATTERN.match(value) is not None


def is_http_url(value: str) -> bool:
    return HTTP_URL_PATTERN.match(value) is not None


def has_image_extension(url: str) -> bool:
    return url.lower().endswith(IMAGE_EXTENSIONS)
