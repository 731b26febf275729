"""
Order Address Entity

Shipping / billing address owned by a customer or attached to an order.
Orders reference addresses by id only.
"""

import re
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from erp_core.core.domain import AggregateRoot, ValidationException, generate_uuid, is_nil_id
from erp_core.core.shared.clock import Clock, system_clock
from erp_core.core.shared.validators import EMAIL_PATTERN, PHONE_PATTERN, FieldValidator

from ..value_objects.customer_types import AddressType

US_ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
CA_POSTAL_PATTERN = re.compile(r"^[A-Z]\d[A-Z]\s?\d[A-Z]\d$")
UK_POSTCODE_PATTERN = re.compile(r"^[A-Z]{1,2}\d[A-Z\d]? \d[A-Z]{2}$")

_US_NAMES = {"US", "USA", "UNITED STATES"}
_CA_NAMES = {"CA", "CAN", "CANADA"}
_UK_NAMES = {"GB", "UK", "UNITED KINGDOM"}


def is_valid_postal_code(postal_code: str, country: str) -> bool:
    """
    Country-aware postal code check.

    Country names are matched case-insensitively (US/USA/UNITED STATES,
    CA/CAN/CANADA, GB/UK/UNITED KINGDOM). Other countries only need a code
    of 3 to 20 characters.
    """
    code = (postal_code or "").strip()
    country_key = (country or "").strip().upper()
    if country_key in _US_NAMES:
        return US_ZIP_PATTERN.match(code) is not None
    if country_key in _CA_NAMES:
        return CA_POSTAL_PATTERN.match(code.upper()) is not None
    if country_key in _UK_NAMES:
        return UK_POSTCODE_PATTERN.match(code.upper()) is not None
    return 3 <= len(code) <= 20


@dataclass(eq=False)
class OrderAddress(AggregateRoot[UUID]):
    """
    Postal address with contact details.

    An address belongs to a customer, to an order, or to both; BOTH-typed
    addresses count as shipping and billing addresses.
    """

    customer_id: UUID | None = None
    order_id: UUID | None = None
    type: AddressType = AddressType.SHIPPING

    first_name: str = ""
    last_name: str = ""
    company: str | None = None
    address_line_1: str = ""
    address_line_2: str | None = None
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""

    phone: str | None = None
    email: str | None = None
    instructions: str | None = None

    is_default: bool = False
    is_active: bool = True
    is_validated: bool = False

    def __post_init__(self):
        self.type = AddressType.coerce(self.type)

    def collect_errors(self) -> list[str]:
        v = FieldValidator()
        v.not_nil(self.id, "address ID")
        v.check(
            not is_nil_id(self.customer_id) or not is_nil_id(self.order_id),
            "address must be associated with either a customer or an order",
        )
        v.member(self.type, AddressType, "address type")
        v.required_text(self.first_name, 100, "first name")
        v.required_text(self.last_name, 100, "last name")
        v.required_text(self.address_line_1, 255, "address line 1")
        v.optional_text(_clean(self.address_line_2), 255, "address line 2")
        v.required_text(self.city, 100, "city")
        v.required_text(self.state, 100, "state")
        if v.required(self.postal_code, "postal code") and v.max_length(self.postal_code, 20, "postal code"):
            if self.country and self.country.strip():
                v.check(
                    is_valid_postal_code(self.postal_code, self.country),
                    f"postal code {self.postal_code} is not valid for {self.country}",
                )
        v.required_text(self.country, 100, "country")
        v.optional_text(_clean(self.company), 200, "company name")
        v.optional_text(_clean(self.phone), 50, "phone", PHONE_PATTERN, "invalid phone number format")
        v.optional_text(_clean(self.email), 255, "email", EMAIL_PATTERN, "invalid email format")
        v.optional_text(_clean(self.instructions), 500, "instructions")
        return v.errors

    def validate(self) -> None:
        errors = self.collect_errors()
        if errors:
            raise ValidationException("address validation failed: " + "; ".join(errors), errors=errors)

    def validate_address(self) -> bool:
        """
        Local plausibility check: required parts present and a postal code
        that fits the country. External verification is out of scope.
        """
        required = (self.address_line_1, self.city, self.state, self.postal_code, self.country)
        if any(not (part or "").strip() for part in required):
            return False
        return is_valid_postal_code(self.postal_code, self.country)

    # Formatting

    @property
    def full_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}"

    @property
    def full_address(self) -> str:
        """Multi-line postal format: company, name, street lines, "City, ST 12345", country."""
        lines = []
        if _clean(self.company):
            lines.append(self.company.strip())
        lines.append(self.full_name)
        lines.append(self.address_line_1)
        if _clean(self.address_line_2):
            lines.append(self.address_line_2.strip())
        lines.append(f"{self.city}, {self.state} {self.postal_code}")
        lines.append(self.country)
        return "\n".join(lines)

    @property
    def single_line_address(self) -> str:
        parts = [self.address_line_1]
        if _clean(self.address_line_2):
            parts.append(self.address_line_2.strip())
        parts.extend([self.city, self.state, self.postal_code, self.country])
        return ", ".join(parts)

    def is_shipping_address(self) -> bool:
        return self.type in (AddressType.SHIPPING, AddressType.BOTH)

    def is_billing_address(self) -> bool:
        return self.type in (AddressType.BILLING, AddressType.BOTH)

    # Mutators

    def set_as_default(self) -> None:
        self.is_default = True
        self.touch()

    def unset_default(self) -> None:
        self.is_default = False
        self.touch()

    def mark_as_validated(self) -> None:
        self.is_validated = True
        self.touch()

    def mark_as_unvalidated(self) -> None:
        self.is_validated = False
        self.touch()

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._base_dict(),
            "customer_id": str(self.customer_id) if self.customer_id else None,
            "order_id": str(self.order_id) if self.order_id else None,
            "type": getattr(self.type, "value", self.type),
            "first_name": self.first_name,
            "last_name": self.last_name,
            "company": self.company,
            "address_line_1": self.address_line_1,
            "address_line_2": self.address_line_2,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
            "phone": self.phone,
            "email": self.email,
            "instructions": self.instructions,
            "is_default": self.is_default,
            "is_active": self.is_active,
            "is_validated": self.is_validated,
        }

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str,
        address_line_1: str,
        city: str,
        state: str,
        postal_code: str,
        country: str,
        customer_id: UUID | None = None,
        order_id: UUID | None = None,
        clock: Clock | None = None,
        **attributes: Any,
    ) -> "OrderAddress":
        """
        Build and validate a new address.

        Raises:
            ValidationException: If any invariant is violated
        """
        clock = clock or system_clock()
        now = clock.now()
        address = cls(
            id=generate_uuid(),
            created_at=now,
            updated_at=now,
            clock=clock,
            customer_id=customer_id,
            order_id=order_id,
            first_name=first_name,
            last_name=last_name,
            address_line_1=address_line_1,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
            **attributes,
        )
        address.validate()
        return address


def _clean(value: str | None) -> str | None:
    """Strip optional text; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
