"""
Unit Tests for the order status state machine
"""

import itertools

import pytest

from erp_core.domains.ecommerce.domain.value_objects import (
    ORDER_STATUS_TRANSITIONS,
    OrderStatus,
    has_successors,
    is_terminal_status,
    is_valid_status_transition,
    terminal_statuses,
)

S = OrderStatus

ALLOWED = {
    (S.DRAFT, S.PENDING),
    (S.DRAFT, S.CANCELLED),
    (S.PENDING, S.CONFIRMED),
    (S.PENDING, S.CANCELLED),
    (S.PENDING, S.ON_HOLD),
    (S.CONFIRMED, S.PROCESSING),
    (S.CONFIRMED, S.CANCELLED),
    (S.CONFIRMED, S.ON_HOLD),
    (S.PROCESSING, S.SHIPPED),
    (S.PROCESSING, S.PARTIALLY_SHIPPED),
    (S.PROCESSING, S.CANCELLED),
    (S.PROCESSING, S.ON_HOLD),
    (S.PARTIALLY_SHIPPED, S.SHIPPED),
    (S.PARTIALLY_SHIPPED, S.PROCESSING),
    (S.PARTIALLY_SHIPPED, S.CANCELLED),
    (S.PARTIALLY_SHIPPED, S.ON_HOLD),
    (S.SHIPPED, S.DELIVERED),
    (S.SHIPPED, S.RETURNED),
    (S.SHIPPED, S.ON_HOLD),
    (S.DELIVERED, S.RETURNED),
    (S.DELIVERED, S.REFUNDED),
    (S.ON_HOLD, S.PENDING),
    (S.ON_HOLD, S.CONFIRMED),
    (S.ON_HOLD, S.PROCESSING),
    (S.ON_HOLD, S.CANCELLED),
    (S.CANCELLED, S.REFUNDED),
    (S.RETURNED, S.REFUNDED),
}


@pytest.mark.unit
@pytest.mark.parametrize(
    "from_status,to_status",
    list(itertools.product(OrderStatus, OrderStatus)),
    ids=lambda s: s.value,
)
def test_transition_table(from_status, to_status):
    expected = (from_status, to_status) in ALLOWED

    assert is_valid_status_transition(from_status, to_status) is expected
    assert from_status.can_transition_to(to_status) is expected


@pytest.mark.unit
class TestOrderStatus:
    def test_every_status_has_a_row(self):
        assert set(ORDER_STATUS_TRANSITIONS) == set(OrderStatus)

    def test_successors_keep_table_order(self):
        assert S.PROCESSING.get_valid_transitions() == [S.SHIPPED, S.PARTIALLY_SHIPPED, S.CANCELLED, S.ON_HOLD]

    def test_terminal_statuses(self):
        assert terminal_statuses() == [S.DELIVERED, S.CANCELLED, S.REFUNDED]
        assert is_terminal_status(S.REFUNDED)
        assert not is_terminal_status(S.SHIPPED)

    def test_status_without_successors_is_terminal(self):
        for status in OrderStatus:
            if not has_successors(status):
                assert status.is_terminal()

    @pytest.mark.parametrize(
        "status,cancellable,modifiable",
        [
            (S.DRAFT, True, True),
            (S.PENDING, True, True),
            (S.ON_HOLD, True, True),
            (S.PARTIALLY_SHIPPED, True, False),
            (S.SHIPPED, False, False),
            (S.RETURNED, True, True),
            (S.DELIVERED, False, False),
            (S.CANCELLED, False, False),
            (S.REFUNDED, False, False),
        ],
    )
    def test_cancel_and_modify_rules(self, status, cancellable, modifiable):
        assert status.can_be_cancelled() is cancellable
        assert status.can_be_modified() is modifiable
