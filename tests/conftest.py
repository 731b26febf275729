"""
Shared pytest fixtures for all tests.

This module provides the pinned clock, sample catalog / customer / order
entities and mock repositories used across the unit tests.
"""

import os
from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from erp_core.config.settings import reset_settings
from erp_core.core.domain import Money
from erp_core.core.shared.clock import FixedClock
from erp_core.domains.ecommerce.domain.entities import (
    Customer,
    Order,
    OrderAddress,
    OrderItem,
    Product,
    ProductCategory,
)

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"


# ============================================================================
# SETTINGS AND CLOCK
# ============================================================================


@pytest.fixture(autouse=True)
def fresh_settings():
    """Every test reads settings from a clean cache."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to 2024-01-15 12:00 UTC."""
    return FixedClock(datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC))


# ============================================================================
# CATALOG FIXTURES
# ============================================================================


@pytest.fixture
def category(clock) -> ProductCategory:
    return ProductCategory.create("Electronics", clock=clock)


@pytest.fixture
def product(clock, category) -> Product:
    return Product.create(
        sku="LAPTOP-15",
        name="Laptop 15in",
        category_id=category.id,
        price=Money("999.99"),
        cost=Money("700.00"),
        clock=clock,
        stock_quantity=10,
        tax_rate=Decimal("8"),
        weight=2.5,
        dimensions="35 x 24 x 2",
        barcode="0123456789012",
    )


# ============================================================================
# CUSTOMER AND ADDRESS FIXTURES
# ============================================================================


@pytest.fixture
def customer(clock) -> Customer:
    return Customer.create(
        "ACME-01",
        "Ada",
        "Lovelace",
        clock=clock,
        credit_limit=Money("5000"),
        email="ada@example.com",
    )


@pytest.fixture
def shipping_address(clock, customer) -> OrderAddress:
    return OrderAddress.create(
        "Ada",
        "Lovelace",
        "12 Analytical Way",
        "Springfield",
        "IL",
        "62704",
        "US",
        customer_id=customer.id,
        clock=clock,
    )


# ============================================================================
# ORDER FIXTURES
# ============================================================================


@pytest.fixture
def draft_order(clock, customer, shipping_address) -> Order:
    return Order.create(
        customer.id,
        shipping_address.id,
        shipping_address.id,
        created_by=uuid4(),
        order_number="2024-000123",
        clock=clock,
    )


@pytest.fixture
def widget_item(clock, draft_order) -> OrderItem:
    """2 x 25.00 with 5.00 off per unit, taxed at 8%: total 43.20."""
    return OrderItem.create(
        draft_order.id,
        uuid4(),
        "WIDGET-1",
        "Widget",
        2,
        Money("25.00"),
        clock=clock,
        discount_amount=Money("5.00"),
        tax_rate=Decimal("8"),
    )


@pytest.fixture
def priced_order(draft_order, widget_item) -> Order:
    """Draft order with one item and totals 43.20 + 10.00 shipping."""
    draft_order.add_item(widget_item)
    draft_order.update_charges(shipping_amount=Money("10.00"))
    draft_order.calculate_totals()
    return draft_order


# ============================================================================
# MOCK REPOSITORIES
# ============================================================================


@pytest.fixture
def mock_order_repository():
    """Order repository whose update returns the order it was given."""
    repo = AsyncMock()
    repo.update.side_effect = lambda order: order
    return repo


@pytest.fixture
def mock_customer_repository():
    repo = AsyncMock()
    repo.update.side_effect = lambda customer: customer
    return repo


@pytest.fixture
def mock_audit_log():
    return AsyncMock()
