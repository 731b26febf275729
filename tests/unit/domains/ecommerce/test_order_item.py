"""
Unit Tests for OrderItem: line pricing and fulfilment
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from erp_core.core.domain import InvalidArgumentException, Money, QuantityBoundException, ValidationException
from erp_core.domains.ecommerce.domain.entities import OrderItem
from erp_core.domains.ecommerce.domain.value_objects import OrderItemStatus


@pytest.fixture
def bulk_item(clock) -> OrderItem:
    return OrderItem.create(uuid4(), uuid4(), "BOLT-M8", "M8 bolt", 10, Money("1.50"), clock=clock)


@pytest.mark.unit
class TestOrderItemTotals:
    """Line pricing."""

    def test_happy_path_line(self, widget_item):
        assert widget_item.line_subtotal == Money("50")
        assert widget_item.line_discount == Money("10")
        assert widget_item.tax_amount == Money("3.20")
        assert widget_item.total_price == Money("43.20")
        assert widget_item.collect_errors() == []

    def test_recalculate_after_quantity_change(self, widget_item):
        widget_item.quantity = 3
        assert any(e.startswith("total price calculation mismatch") for e in widget_item.collect_errors())

        widget_item.calculate_totals()

        assert widget_item.tax_amount == Money("4.80")
        assert widget_item.total_price == Money("64.80")
        assert widget_item.collect_errors() == []

    def test_mismatch_message(self, widget_item):
        widget_item.total_price = Money("43.21")

        assert "total price calculation mismatch: expected 43.20, got 43.21" in widget_item.collect_errors()

    def test_untaxed_line(self, bulk_item):
        assert bulk_item.tax_amount == Money.zero()
        assert bulk_item.total_price == Money("15.00")

    def test_invalid_line(self, clock):
        with pytest.raises(ValidationException) as exc_info:
            OrderItem.create(
                uuid4(),
                uuid4(),
                "",
                "Widget",
                10000,
                Money("10"),
                clock=clock,
                discount_amount=Money("11"),
                tax_rate=Decimal("101"),
                dimensions="10 by 5",
            )

        errors = exc_info.value.errors
        assert "product SKU cannot be empty" in errors
        assert "quantity cannot exceed 9999" in errors
        assert "discount amount cannot exceed unit price" in errors
        assert "tax rate cannot exceed 100%" in errors
        assert "dimensions must be in format 'L x W x H'" in errors
        assert exc_info.value.message.startswith("order item validation failed: ")

    def test_zero_quantity(self, widget_item):
        widget_item.quantity = 0
        widget_item.calculate_totals()

        assert "quantity must be greater than 0" in widget_item.collect_errors()

    def test_unknown_status(self, widget_item):
        widget_item.status = "LOST"

        assert "invalid item status: LOST" in widget_item.collect_errors()

    def test_item_weight(self, clock):
        item = OrderItem.create(uuid4(), uuid4(), "BOX-1", "Box", 4, Money("3"), clock=clock, weight=1.25)

        assert item.item_weight() == 5.0


@pytest.mark.unit
class TestOrderItemFulfilment:
    """Shipment and return tracking."""

    def test_ship_then_return(self, bulk_item):
        assert bulk_item.can_be_shipped()

        bulk_item.ship_item(5)
        assert bulk_item.status == OrderItemStatus.PARTIALLY_SHIPPED
        assert bulk_item.quantity_shipped == 5
        assert not bulk_item.can_be_shipped()

        bulk_item.ship_item(5)
        assert bulk_item.status == OrderItemStatus.SHIPPED

        with pytest.raises(QuantityBoundException) as exc_info:
            bulk_item.ship_item(1)
        assert exc_info.value.limit == 0
        assert bulk_item.quantity_shipped == 10

        bulk_item.return_item(3)
        assert bulk_item.quantity_returned == 3
        assert bulk_item.status == OrderItemStatus.SHIPPED
        assert bulk_item.collect_errors() == []

    def test_full_return_marks_returned(self, bulk_item):
        bulk_item.ship_item(4)
        bulk_item.return_item(4)

        assert bulk_item.status == OrderItemStatus.RETURNED

    def test_return_more_than_shipped(self, bulk_item):
        bulk_item.ship_item(2)

        with pytest.raises(QuantityBoundException) as exc_info:
            bulk_item.return_item(3)

        assert exc_info.value.details == {"operation": "return", "requested": 3, "limit": 2}
        assert bulk_item.quantity_returned == 0

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantities(self, bulk_item, quantity):
        with pytest.raises(InvalidArgumentException):
            bulk_item.ship_item(quantity)
        with pytest.raises(InvalidArgumentException):
            bulk_item.return_item(quantity)

    def test_quantity_invariants_are_validated(self, bulk_item):
        bulk_item.quantity_shipped = 11
        bulk_item.quantity_returned = 12

        errors = bulk_item.collect_errors()
        assert "shipped quantity (11) cannot exceed ordered quantity (10)" in errors
        assert "returned quantity (12) cannot exceed shipped quantity (11)" in errors


@pytest.mark.unit
class TestOrderItemFromCatalog:
    def test_snapshot_product(self, product, draft_order):
        item = OrderItem.from_catalog_item(draft_order.id, product, 2)

        assert item.product_id == product.id
        assert item.product_sku == "LAPTOP-15"
        assert item.unit_price == Money("999.99")
        assert item.tax_rate == Decimal("8")
        assert item.weight == 2.5
        assert item.dimensions == "35 x 24 x 2"
        assert item.total_price == Money("2159.9784")

        product.update_price(Money("1099.99"))
        assert item.unit_price == Money("999.99")

    def test_non_taxable_product_snapshot(self, product, draft_order):
        product.taxable = False

        item = OrderItem.from_catalog_item(draft_order.id, product, 1)

        assert item.tax_rate == Decimal("0")
        assert item.total_price == Money("999.99")

    def test_variant_uses_owning_product_id(self, product, draft_order, clock):
        from erp_core.domains.ecommerce.domain.entities import ProductVariant

        variant = ProductVariant.create(product.id, "LAPTOP-15-RED", "Red", Money("1009.99"), clock=clock)

        item = OrderItem.from_catalog_item(draft_order.id, variant, 1, product_id=product.id)

        assert item.product_id == product.id
        assert item.product_sku == "LAPTOP-15-RED"

    def test_to_dict(self, widget_item):
        data = widget_item.to_dict()

        assert data["status"] == "ORDERED"
        assert data["total_price"] == str(widget_item.total_price)
        assert data["quantity"] == 2
