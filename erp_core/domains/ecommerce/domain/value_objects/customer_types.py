"""
Customer and Address Value Objects
"""

from erp_core.core.domain import StatusEnum


class CustomerType(StatusEnum):
    """Legal nature of a customer."""

    INDIVIDUAL = "INDIVIDUAL"
    BUSINESS = "BUSINESS"
    GOVERNMENT = "GOVERNMENT"
    NON_PROFIT = "NON_PROFIT"

    def is_organization(self) -> bool:
        return self is not CustomerType.INDIVIDUAL


class CustomerSource(StatusEnum):
    """Acquisition channel of a customer."""

    WEB = "WEB"
    PHONE = "PHONE"
    EMAIL = "EMAIL"
    REFERRAL = "REFERRAL"
    WALK_IN = "WALK_IN"
    SOCIAL = "SOCIAL"
    ADVERTISEMENT = "ADVERTISEMENT"
    OTHER = "OTHER"


class AddressType(StatusEnum):
    """Usage of an address. BOTH counts as shipping and billing."""

    SHIPPING = "SHIPPING"
    BILLING = "BILLING"
    BOTH = "BOTH"
