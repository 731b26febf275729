"""
Unit Tests for repository contracts: pagination, filters and ports
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from erp_core.core.interfaces.repository import IIdGenerator, ListFilter, Page
from erp_core.domains.ecommerce.application.ports import (
    IOrderAuditLog,
    IOrderRepository,
    OrderFilter,
    ProductFilter,
)
from erp_core.domains.ecommerce.domain.value_objects import OrderStatus


class InMemoryOrderRepository:
    """Dictionary-backed order repository used to check the port shape."""

    def __init__(self):
        self.orders = {}
        self._sequence = 0

    async def create(self, entity):
        self.orders[entity.id] = entity
        return entity

    async def get_by_id(self, id):
        return self.orders.get(id)

    async def update(self, entity):
        self.orders[entity.id] = entity
        return entity

    async def delete(self, id):
        return self.orders.pop(id, None) is not None

    async def list(self, filter):
        items = [o for o in self.orders.values() if not filter.statuses or o.status in filter.statuses]
        window = items[filter.offset : filter.offset + filter.limit]
        return Page.for_filter(window, len(items), filter)

    async def count(self, filter):
        return len((await self.list(filter)).items)

    async def get_by_order_number(self, order_number):
        return next((o for o in self.orders.values() if o.order_number == order_number), None)

    async def exists_by_order_number(self, order_number):
        return await self.get_by_order_number(order_number) is not None

    async def generate_unique_order_number(self):
        self._sequence += 1
        return f"2024-{self._sequence:06d}"


class RecordingAuditLog:
    def __init__(self):
        self.events = []

    async def record_status_change(self, event):
        self.events.append(event)


class SequentialIdGenerator:
    def __init__(self):
        self._next = 1

    def new_id(self) -> UUID:
        value = UUID(int=self._next)
        self._next += 1
        return value


@pytest.mark.unit
class TestPage:
    def test_navigation_flags(self):
        page = Page.build(items=["a", "b"], total_count=57, page=2, limit=20)

        assert page.total_pages == 3
        assert page.has_next
        assert page.has_prev

    def test_empty_page(self):
        page = Page.build(items=[], total_count=0)

        assert page.total_pages == 0
        assert not page.has_next
        assert not page.has_prev

    def test_serialization_includes_computed_fields(self):
        data = Page.build(items=[1], total_count=1).model_dump()

        assert data["total_pages"] == 1
        assert data["has_next"] is False


@pytest.mark.unit
class TestFilters:
    def test_list_filter_defaults_and_offset(self):
        list_filter = ListFilter(page=3, limit=10)

        assert list_filter.offset == 20
        assert list_filter.sort_by == "created_at"
        assert list_filter.sort_order == "desc"

    @pytest.mark.parametrize("kwargs", [{"page": 0}, {"limit": 0}, {"limit": 101}, {"sort_order": "up"}])
    def test_list_filter_rejects_bad_paging(self, kwargs):
        with pytest.raises(ValidationError):
            ListFilter(**kwargs)

    def test_order_filter_accepts_tokens(self):
        order_filter = OrderFilter(statuses=["PENDING", "SHIPPED"], min_total=Decimal("10"))

        assert order_filter.statuses == [OrderStatus.PENDING, OrderStatus.SHIPPED]

    def test_order_filter_rejects_inverted_ranges(self):
        with pytest.raises(ValidationError):
            OrderFilter(min_total=Decimal("100"), max_total=Decimal("10"))
        with pytest.raises(ValidationError):
            OrderFilter(
                start_date=datetime(2024, 2, 1, tzinfo=UTC),
                end_date=datetime(2024, 1, 1, tzinfo=UTC),
            )

    def test_product_filter_rejects_inverted_price_range(self):
        with pytest.raises(ValidationError):
            ProductFilter(min_price=Decimal("5"), max_price=Decimal("1"))


@pytest.mark.unit
class TestPorts:
    def test_structural_implementations_satisfy_ports(self):
        assert isinstance(InMemoryOrderRepository(), IOrderRepository)
        assert isinstance(RecordingAuditLog(), IOrderAuditLog)
        assert isinstance(SequentialIdGenerator(), IIdGenerator)

    def test_id_generator_yields_fresh_ids(self):
        generator = SequentialIdGenerator()

        assert generator.new_id() != generator.new_id()

    @pytest.mark.asyncio
    async def test_in_memory_repository_round_trip(self, draft_order):
        repo = InMemoryOrderRepository()
        await repo.create(draft_order)

        assert await repo.get_by_id(draft_order.id) is draft_order
        assert await repo.exists_by_order_number("2024-000123")
        assert await repo.generate_unique_order_number() == "2024-000001"

        page = await repo.list(OrderFilter(statuses=[OrderStatus.DRAFT]))
        assert page.total_count == 1
        assert await repo.count(OrderFilter(statuses=[OrderStatus.CANCELLED])) == 0
        assert await repo.delete(draft_order.id)
        assert await repo.get_by_id(uuid4()) is None
