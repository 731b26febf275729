"""
Customer Entity

Customer master data and the customer's credit-reservation ledger.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any
from uuid import UUID

from erp_core.config.settings import get_settings
from erp_core.core.domain import (
    AggregateRoot,
    InsufficientCreditException,
    InvalidArgumentException,
    Money,
    ValidationException,
    generate_uuid,
)
from erp_core.core.shared.clock import Clock, system_clock
from erp_core.core.shared.validators import (
    CURRENCY_PATTERN,
    EMAIL_PATTERN,
    HTTP_URL_PATTERN,
    PHONE_PATTERN,
    FieldValidator,
)

from ..value_objects.customer_types import CustomerSource, CustomerType

CUSTOMER_CODE_PATTERN = re.compile(r"^[A-Z0-9\-_]+$")
PAYMENT_TERMS_PATTERN = re.compile(r"^NET\d+$")
MAX_CREDIT_LIMIT = Decimal("999999999.99")


@dataclass(eq=False)
class Customer(AggregateRoot[UUID]):
    """
    Customer aggregate root.

    Invariant: ``0 <= credit_used <= credit_limit``. Credit is reserved with
    ``use_credit`` when an order is accepted on account and returned with
    ``release_credit`` when it is paid or cancelled.

    Example:
        ```python
        customer = Customer.create("ACME-01", "Ada", "Lovelace", credit_limit=Money("5000"))
        customer.use_credit(Money("1200"))
        customer.available_credit  # Money('3800')
        ```
    """

    customer_code: str = ""
    type: CustomerType = CustomerType.INDIVIDUAL

    # Identity
    first_name: str = ""
    last_name: str = ""
    company_name: str | None = None
    tax_id: str | None = None
    industry: str | None = None

    # Contact
    email: str | None = None
    phone: str | None = None
    website: str | None = None

    # Credit ledger
    credit_limit: Money = field(default_factory=Money.zero)
    credit_used: Money = field(default_factory=Money.zero)
    terms: str = "NET30"

    is_active: bool = True
    is_vat_exempt: bool = False
    preferred_currency: str = "USD"
    notes: str | None = None
    source: CustomerSource = CustomerSource.WEB

    def __post_init__(self):
        self.credit_limit = Money.of(self.credit_limit)
        self.credit_used = Money.of(self.credit_used)
        self.type = CustomerType.coerce(self.type)
        self.source = CustomerSource.coerce(self.source)

    # Validation

    def collect_errors(self) -> list[str]:
        v = FieldValidator()
        v.not_nil(self.id, "customer ID")
        v.required_text(
            self.customer_code,
            50,
            "customer code",
            CUSTOMER_CODE_PATTERN,
            "customer code can only contain uppercase letters, numbers, hyphens, and underscores",
        )
        v.member(self.type, CustomerType, "customer type")
        self._check_names(v, self.first_name, self.last_name)
        v.max_length(self.company_name, 200, "company name")
        v.max_length(self.tax_id, 50, "tax ID")
        v.max_length(self.industry, 100, "industry")
        self._check_contact(v, self.email, self.phone, self.website)
        if v.bounded(self.credit_limit, MAX_CREDIT_LIMIT, "credit limit"):
            if v.non_negative(self.credit_used, "credit used"):
                v.check(self.credit_used <= self.credit_limit, "credit used cannot exceed credit limit")
        else:
            v.non_negative(self.credit_used, "credit used")
        if v.required(self.terms, "payment terms") and v.max_length(self.terms, 20, "payment terms"):
            v.check(
                PAYMENT_TERMS_PATTERN.match(self.terms.strip().upper()) is not None,
                "payment terms must be in format NET<days>",
            )
        v.check(
            bool(self.preferred_currency) and CURRENCY_PATTERN.match(self.preferred_currency) is not None,
            "preferred currency must be a valid 3-letter ISO 4217 code",
        )
        v.max_length(self.notes, 2000, "notes")
        v.member(self.source, CustomerSource, "customer source")
        return v.errors

    def validate(self) -> None:
        errors = self.collect_errors()
        if errors:
            raise ValidationException("customer validation failed: " + "; ".join(errors), errors=errors)

    @staticmethod
    def _check_names(v: FieldValidator, first_name: str, last_name: str) -> None:
        v.required_text(first_name, 100, "first name")
        v.required_text(last_name, 100, "last name")

    @staticmethod
    def _check_contact(v: FieldValidator, email: str | None, phone: str | None, website: str | None) -> None:
        v.optional_text(email, 255, "email", EMAIL_PATTERN, "invalid email format")
        v.optional_text(phone, 50, "phone", PHONE_PATTERN, "invalid phone number format")
        v.optional_text(website, 500, "website", HTTP_URL_PATTERN, "invalid website URL format")

    # Names

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self) -> str:
        """Company name for business customers that have one, otherwise the full name."""
        if self.type == CustomerType.BUSINESS and self.company_name:
            return self.company_name
        return self.full_name

    def is_business(self) -> bool:
        return self.type == CustomerType.BUSINESS

    # Credit ledger

    @property
    def available_credit(self) -> Money:
        return self.credit_limit.sub(self.credit_used)

    def has_available_credit(self, amount: Money | Decimal | int | str) -> bool:
        return self.available_credit >= Money.of(amount)

    def use_credit(self, amount: Money | Decimal | int | str) -> None:
        """
        Reserve ``amount`` of the customer's credit.

        Raises:
            InvalidArgumentException: If amount is not positive
            InsufficientCreditException: If available credit is lower than amount
        """
        amount = Money.of(amount)
        if not amount.is_positive():
            raise InvalidArgumentException("amount", "credit amount must be positive")
        if not self.has_available_credit(amount):
            raise InsufficientCreditException(amount, self.available_credit)
        self.credit_used = self.credit_used.add(amount)
        self.touch()

    def release_credit(self, amount: Money | Decimal | int | str) -> None:
        """
        Return ``amount`` of previously reserved credit.

        Raises:
            InvalidArgumentException: If amount is not positive
            InsufficientCreditException: If amount exceeds the credit in use
        """
        amount = Money.of(amount)
        if not amount.is_positive():
            raise InvalidArgumentException("amount", "credit amount must be positive")
        if self.credit_used.sub(amount).is_negative():
            raise InsufficientCreditException(
                amount, self.credit_used, f"release amount {amount} exceeds credit used {self.credit_used}"
            )
        self.credit_used = self.credit_used.sub(amount)
        self.touch()

    def update_credit_limit(self, limit: Money | Decimal | int | str) -> None:
        """
        Raises:
            ValidationException: If the limit is out of range or below the credit in use
        """
        limit = Money.of(limit)
        v = FieldValidator()
        if v.bounded(limit, MAX_CREDIT_LIMIT, "credit limit"):
            v.check(limit >= self.credit_used, "cannot set credit limit lower than current credit used")
        v.raise_if_invalid("invalid credit limit")
        self.credit_limit = limit
        self.touch()

    # Master data

    def update_name(self, first_name: str, last_name: str) -> None:
        first_name, last_name = first_name.strip(), last_name.strip()
        v = FieldValidator()
        self._check_names(v, first_name, last_name)
        v.raise_if_invalid("invalid customer name")
        self.first_name = first_name
        self.last_name = last_name
        self.touch()

    def update_contact_info(
        self, email: str | None = None, phone: str | None = None, website: str | None = None
    ) -> None:
        """Replace contact details; emails are stored lower-cased."""
        email = email.strip().lower() if email else None
        phone = phone.strip() if phone else None
        website = website.strip() if website else None
        v = FieldValidator()
        self._check_contact(v, email, phone, website)
        v.raise_if_invalid("invalid contact information")
        self.email = email
        self.phone = phone
        self.website = website
        self.touch()

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._base_dict(),
            "customer_code": self.customer_code,
            "type": getattr(self.type, "value", self.type),
            "first_name": self.first_name,
            "last_name": self.last_name,
            "display_name": self.display_name,
            "company_name": self.company_name,
            "tax_id": self.tax_id,
            "industry": self.industry,
            "email": self.email,
            "phone": self.phone,
            "website": self.website,
            "credit_limit": str(self.credit_limit),
            "credit_used": str(self.credit_used),
            "available_credit": str(self.available_credit),
            "terms": self.terms,
            "is_active": self.is_active,
            "is_vat_exempt": self.is_vat_exempt,
            "preferred_currency": self.preferred_currency,
            "notes": self.notes,
            "source": getattr(self.source, "value", self.source),
        }

    @classmethod
    def create(
        cls,
        customer_code: str,
        first_name: str,
        last_name: str,
        clock: Clock | None = None,
        **attributes: Any,
    ) -> "Customer":
        """
        Build and validate a new customer.

        Credit limit, payment terms and preferred currency default to the
        DEFAULT_CREDIT_LIMIT, DEFAULT_PAYMENT_TERMS and DEFAULT_CURRENCY settings.

        Raises:
            ValidationException: If any invariant is violated
        """
        settings = get_settings()
        attributes.setdefault("credit_limit", settings.DEFAULT_CREDIT_LIMIT)
        attributes.setdefault("terms", settings.DEFAULT_PAYMENT_TERMS)
        attributes.setdefault("preferred_currency", settings.DEFAULT_CURRENCY)
        clock = clock or system_clock()
        now = clock.now()
        customer = cls(
            id=generate_uuid(),
            created_at=now,
            updated_at=now,
            clock=clock,
            customer_code=customer_code,
            first_name=first_name,
            last_name=last_name,
            **attributes,
        )
        customer.validate()
        return customer
