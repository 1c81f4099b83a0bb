"""Unit tests for the order state machine and status parsing."""

from __future__ import annotations

import pytest

from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus
from modules.orders.exceptions import UnknownOrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.unit


class TestTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PLACED, OrderStatus.PROCEEDED),
            (OrderStatus.PLACED, OrderStatus.CANCELLED),
            (OrderStatus.PROCEEDED, OrderStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        assert Order(status=current).can_transition_to(target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PROCEEDED, OrderStatus.PLACED),
            (OrderStatus.PROCEEDED, OrderStatus.PROCEEDED),
            (OrderStatus.CANCELLED, OrderStatus.PLACED),
            (OrderStatus.CANCELLED, OrderStatus.PROCEEDED),
            (OrderStatus.CANCELLED, OrderStatus.CANCELLED),
            (OrderStatus.PLACED, OrderStatus.PLACED),
        ],
    )
    def test_forbidden(self, current, target):
        assert not Order(status=current).can_transition_to(target)

    def test_nothing_re_enters_placed(self):
        for targets in VALID_TRANSITIONS.values():
            assert OrderStatus.PLACED not in targets

    def test_cancelled_is_the_only_terminal_state(self):
        assert TERMINAL_STATES == {OrderStatus.CANCELLED}
        assert Order(status=OrderStatus.CANCELLED).is_terminal
        assert not Order(status=OrderStatus.PROCEEDED).is_terminal

    def test_new_orders_start_placed(self):
        assert Order().status == OrderStatus.PLACED


class TestParse:
    @pytest.mark.parametrize("raw", ["PLACED", "placed", " Placed "])
    def test_case_insensitive(self, raw):
        assert OrderStatus.parse(raw) is OrderStatus.PLACED

    def test_passes_members_through(self):
        assert OrderStatus.parse(OrderStatus.CANCELLED) is OrderStatus.CANCELLED

    def test_rejects_unknown_values(self):
        with pytest.raises(UnknownOrderStatus, match="PLACED, PROCEEDED, CANCELLED"):
            OrderStatus.parse("SHIPPED")


class TestShortId:
    def test_is_eight_character_prefix(self):
        order = Order()
        assert order.short_id == str(order.id)[:8]
        assert len(order.short_id) == 8
