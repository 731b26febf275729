"""
Unit Tests for the base entity classes and the clock
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from erp_core.core.domain import NIL_ID, AggregateRoot, Entity, generate_uuid, is_nil_id
from erp_core.core.shared.clock import Clock, FixedClock, SystemClock, system_clock


@dataclass(eq=False)
class Widget(Entity[UUID]):
    name: str = ""


@dataclass(eq=False)
class Basket(AggregateRoot[UUID]):
    pass


@pytest.mark.unit
class TestClock:
    def test_fixed_clock_default(self):
        assert FixedClock().now() == datetime(2024, 1, 15, 12, 0, tzinfo=UTC)

    def test_naive_datetimes_become_utc(self):
        clock = FixedClock(datetime(2024, 6, 1, 9, 0))
        clock.set(datetime(2024, 6, 2, 9, 0))

        assert clock.now().tzinfo is UTC
        assert clock.now().day == 2

    def test_advance(self):
        clock = FixedClock()

        assert clock.advance(hours=2) == datetime(2024, 1, 15, 14, 0, tzinfo=UTC)

    def test_system_clock(self):
        assert isinstance(system_clock(), SystemClock)
        assert isinstance(FixedClock(), Clock)
        assert system_clock().now().tzinfo is UTC


@pytest.mark.unit
class TestEntities:
    def test_identity_equality(self):
        shared = uuid4()

        assert Widget(id=shared, name="a") == Widget(id=shared, name="b")
        assert Widget(id=uuid4()) != Widget(id=uuid4())
        assert Widget() != Widget()
        assert Widget().is_new()

    def test_hash_follows_identity(self):
        shared = uuid4()

        assert len({Widget(id=shared), Widget(id=shared)}) == 1

    def test_touch_uses_entity_clock(self):
        clock = FixedClock()
        widget = Widget(id=generate_uuid(), clock=clock)
        clock.advance(minutes=3)

        widget.touch()

        assert widget.updated_at == clock.now()
        assert widget.now() == clock.now()

    def test_nil_id(self):
        assert is_nil_id(NIL_ID)
        assert is_nil_id(None)
        assert not is_nil_id(uuid4())

    def test_aggregate_events_and_version(self):
        basket = Basket(id=uuid4())
        basket._record_event("created")

        assert basket.get_domain_events() == ["created"]
        basket.clear_domain_events()
        assert basket.get_domain_events() == []

        basket.increment_version()
        assert basket.version == 1


@pytest.mark.unit
def test_domain_entities_keep_identity_semantics(draft_order, widget_item):
    copy = type(draft_order)(id=draft_order.id, order_number="2024-000999")

    assert copy == draft_order
    assert {draft_order, copy, widget_item} == {draft_order, widget_item}
