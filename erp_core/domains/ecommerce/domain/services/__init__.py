"""
E-commerce Domain Services

Calculations and checks that span the order aggregate.
"""

from erp_core.domains.ecommerce.domain.services.order_calculation import (
    DiscountBreakdown,
    OrderCalculation,
    TaxBreakdown,
    calculate_order_totals,
    calculate_shipping_weight,
)
from erp_core.domains.ecommerce.domain.services.order_number import generate_order_number, is_valid_order_number
from erp_core.domains.ecommerce.domain.services.order_validation import OrderValidation, validate_order

__all__ = [
    "OrderCalculation",
    "TaxBreakdown",
    "DiscountBreakdown",
    "calculate_order_totals",
    "calculate_shipping_weight",
    "OrderValidation",
    "validate_order",
    "generate_order_number",
    "is_valid_order_number",
]
