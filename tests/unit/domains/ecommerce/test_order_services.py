"""
Unit Tests for the order domain services: calculation, validation and numbering
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from erp_core.core.domain import InvalidArgumentException, Money, ValidationException
from erp_core.core.shared.clock import FixedClock
from erp_core.domains.ecommerce.domain.entities import OrderItem
from erp_core.domains.ecommerce.domain.services import (
    calculate_order_totals,
    calculate_shipping_weight,
    generate_order_number,
    is_valid_order_number,
    validate_order,
)
from erp_core.domains.ecommerce.domain.services.order_calculation import ITEM_DISCOUNT, ORDER_DISCOUNT
from erp_core.domains.ecommerce.domain.services.order_validation import (
    DIGITAL_ORDER_WITH_NON_DIGITAL_SHIPPING_METHOD,
    REQUIRED_DATE_HAS_PASSED,
    TOTAL_EXCEEDS_10000,
)
from erp_core.domains.ecommerce.domain.value_objects import OrderStatus


@pytest.fixture
def two_item_order(draft_order, widget_item, clock):
    """Widget line (2 x 25, 5 off, 8%) plus a 1 x 50 line at 8%."""
    draft_order.add_item(widget_item)
    draft_order.add_item(
        OrderItem.create(
            draft_order.id, uuid4(), "GADGET-1", "Gadget", 1, Money("50.00"), clock=clock, tax_rate=Decimal("8")
        )
    )
    return draft_order


@pytest.mark.unit
class TestCalculateOrderTotals:
    """Order-wide calculation engine."""

    def test_breakdown(self, two_item_order):
        calculation = calculate_order_totals(two_item_order, Decimal("0"), Money("10"))

        assert calculation.subtotal == Money("100")
        assert calculation.tax_amount == Money("7.60")
        assert calculation.discount_amount == Money("5")
        assert calculation.shipping_amount == Money("10")
        assert calculation.total_amount == Money("112.60")
        assert len(calculation.tax_breakdown) == 2
        assert len(calculation.discount_breakdown) == 1

        discount = calculation.discount_breakdown[0]
        assert discount.discount_type == ITEM_DISCOUNT
        assert discount.description == "Discount on Widget"

        tax = calculation.tax_breakdown[0]
        assert tax.taxable_amount == Money("45")
        assert tax.tax_amount == Money("3.60")
        assert tax.tax_name == "Tax @ 8%"

    def test_is_idempotent(self, two_item_order):
        first = calculate_order_totals(two_item_order, Decimal("5"), Money("10"))
        second = calculate_order_totals(two_item_order, Decimal("5"), Money("10"))

        assert first == second
        assert first.default_tax_rate == Decimal("5")

    def test_does_not_mutate_order(self, two_item_order):
        calculate_order_totals(two_item_order, shipping_cost=Money("10"))

        assert two_item_order.total_amount == Money.zero()

    def test_order_level_discount(self, two_item_order):
        two_item_order.discount_amount = Money("2.60")

        calculation = calculate_order_totals(two_item_order, shipping_cost=Money("10"))

        assert calculation.discount_amount == Money("7.60")
        assert calculation.discount_breakdown[-1].discount_type == ORDER_DISCOUNT
        assert calculation.discount_breakdown[-1].description == "Order level discount"
        assert calculation.total_amount == Money("110.00")

    def test_untaxed_items_have_no_tax_rows(self, draft_order, clock):
        draft_order.add_item(
            OrderItem.create(draft_order.id, uuid4(), "GIFT-1", "Gift card", 1, Money("20"), clock=clock)
        )

        calculation = calculate_order_totals(draft_order)

        assert calculation.tax_breakdown == []
        assert calculation.total_amount == Money("20")

    def test_apply_to_order(self, two_item_order):
        calculation = calculate_order_totals(two_item_order, shipping_cost=Money("10"))

        calculation.apply_to(two_item_order)

        assert two_item_order.subtotal == Money("100")
        assert two_item_order.tax_amount == Money("7.60")
        assert two_item_order.discount_amount == Money("5")
        assert two_item_order.total_amount == Money("112.60")
        assert two_item_order.collect_errors() == []

    def test_to_dict(self, two_item_order):
        data = calculate_order_totals(two_item_order, shipping_cost=Money("10")).to_dict()

        assert data["total_amount"] == "112.60"
        assert data["tax_breakdown"][1]["tax_name"] == "Tax @ 8%"
        assert data["discount_breakdown"][0]["discount_type"] == "ITEM_DISCOUNT"

    def test_no_items(self, draft_order):
        with pytest.raises(ValidationException):
            calculate_order_totals(draft_order)

    @pytest.mark.parametrize("rate", ["-1", "100.01"])
    def test_rate_out_of_range(self, two_item_order, rate):
        with pytest.raises(InvalidArgumentException):
            calculate_order_totals(two_item_order, Decimal(rate))

    def test_shipping_weight(self, draft_order, clock):
        draft_order.add_item(
            OrderItem.create(draft_order.id, uuid4(), "BOX-1", "Box", 2, Money("3"), clock=clock, weight=1.5)
        )

        assert calculate_shipping_weight(draft_order) == 3.0


@pytest.mark.unit
class TestValidateOrder:
    """Advisory whole-order validation."""

    def test_valid_order(self, priced_order):
        report = validate_order(priced_order)

        assert report.is_valid
        assert report.errors == []
        assert report.warnings == []

    def test_empty_order(self, draft_order):
        report = validate_order(draft_order)

        assert not report.is_valid
        assert report.errors == ["order must have at least one item"]

    def test_item_and_order_errors_are_prefixed(self, priced_order):
        priced_order.items[0].product_name = ""
        priced_order.currency = "usd"

        report = validate_order(priced_order)

        assert "order: currency must be a valid 3-letter ISO 4217 code" in report.errors
        assert "item 1: product name cannot be empty" in report.errors

    def test_zero_subtotal(self, draft_order, widget_item):
        draft_order.add_item(widget_item)

        report = validate_order(draft_order)

        assert "order subtotal must be greater than zero" in report.errors

    def test_illegal_status_pair(self, priced_order):
        priced_order.previous_status = OrderStatus.DRAFT
        priced_order.status = OrderStatus.DELIVERED

        report = validate_order(priced_order)

        assert "invalid status transition from DRAFT to DELIVERED" in report.errors

    def test_warnings_do_not_invalidate(self, priced_order, clock):
        priced_order.required_date = clock.now() + timedelta(days=1)
        later = FixedClock(clock.now() + timedelta(days=2))

        report = validate_order(priced_order, clock=later, large_order_threshold=Decimal("50"))

        assert report.is_valid
        assert report.warnings == [REQUIRED_DATE_HAS_PASSED, TOTAL_EXCEEDS_10000]

    def test_large_order_threshold_defaults_to_settings(self, priced_order, monkeypatch):
        monkeypatch.setenv("LARGE_ORDER_THRESHOLD", "20")

        report = validate_order(priced_order)

        assert report.warnings == [TOTAL_EXCEEDS_10000]

    def test_digital_warning_never_fires_for_digital_orders(self, priced_order):
        priced_order.shipping_method = "DIGITAL"

        report = validate_order(priced_order)

        assert DIGITAL_ORDER_WITH_NON_DIGITAL_SHIPPING_METHOD not in report.warnings

    def test_to_dict(self, draft_order):
        assert validate_order(draft_order).to_dict() == {
            "is_valid": False,
            "errors": ["order must have at least one item"],
            "warnings": [],
        }


@pytest.mark.unit
class TestOrderNumber:
    def test_generated_format(self):
        clock = FixedClock(datetime(2024, 3, 1, 8, 30, tzinfo=UTC))

        number = generate_order_number(clock)

        assert number == f"2024-{int(clock.now().timestamp()) % 1_000_000:06d}"
        assert is_valid_order_number(number)

    @pytest.mark.parametrize(
        "value,expected",
        [("2024-000123", True), (" 2024-999999 ", True), ("24-000123", False), ("2024-12345", False), ("", False)],
    )
    def test_validation(self, value, expected):
        assert is_valid_order_number(value) is expected
