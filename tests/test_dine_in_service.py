from decimal import Decimal

import pytest

from bistro.data.menu_data import MENU_ITEMS
from bistro.schemas.dine_in import DineInStatus, PaymentMethod, TableStatus
from bistro.schemas.menu import MAX_QUANTITY, CatalogItem
from bistro.services.dine_in_service import (
    DineInSession, NoActiveOrderError, OrderAlreadyActiveError, TableUnavailableError,
)

BRUSCHETTA = next(i for i in MENU_ITEMS if i.slug == "app-1")
COFFEE = next(i for i in MENU_ITEMS if i.slug == "bev-3")

def make_item(slug, price):
    return CatalogItem(id=f"00000000-0000-0000-0000-{slug:0>12}", slug=slug, name=slug,
                       price=Decimal(price), category="test")

@pytest.fixture
def session():
    return DineInSession.with_tables(6)

def table_status(session, number):
    return session.tables.find_by_number(number).status

def test_create_order_occupies_table(session):
    order = session.create_order(3)
    assert session.active_order is order
    assert order.status == DineInStatus.ACTIVE
    assert order.items == []
    assert table_status(session, 3) == TableStatus.OCCUPIED

def test_create_order_on_unknown_table_fails(session):
    with pytest.raises(TableUnavailableError):
        session.create_order(42)
    assert session.active_order is None

def test_create_order_on_occupied_table_changes_nothing(session):
    order = session.create_order(2)
    with pytest.raises(TableUnavailableError):
        session.create_order(2)
    assert session.active_order is order
    assert table_status(session, 2) == TableStatus.OCCUPIED
    assert [t.number for t in session.tables.all() if t.status == TableStatus.OCCUPIED] == [2]

def test_only_one_active_order(session):
    session.create_order(1)
    with pytest.raises(OrderAlreadyActiveError):
        session.create_order(4)
    assert table_status(session, 4) == TableStatus.AVAILABLE

def test_add_item_requires_active_order(session):
    with pytest.raises(NoActiveOrderError):
        session.add_item(BRUSCHETTA)

def test_same_item_and_notes_merge(session):
    session.create_order(1)
    session.add_item(BRUSCHETTA, 1, "no garlic")
    order = session.add_item(BRUSCHETTA, 2, "no garlic")
    assert len(order.items) == 1
    assert order.items[0].quantity == 3

def test_different_notes_make_separate_lines(session):
    session.create_order(1)
    session.add_item(BRUSCHETTA, 1, "")
    order = session.add_item(BRUSCHETTA, 1, "extra basil")
    assert len(order.items) == 2
    assert order.items[0].id != order.items[1].id

def test_line_ids_are_unique_under_rapid_adds(session):
    session.create_order(1)
    for n in range(50):
        session.add_item(BRUSCHETTA, 1, f"note {n}")
    ids = [line.id for line in session.active_order.items]
    assert len(set(ids)) == 50

def test_totals_recomputed_on_every_change(session):
    session.create_order(1)
    ten = make_item("ten", "10.00")
    five_fifty = make_item("fivefifty", "5.50")
    session.add_item(ten, 2)
    order = session.add_item(five_fifty, 1)
    assert order.subtotal == Decimal("25.50")
    assert order.tax == Decimal("2.10")
    assert order.total == Decimal("27.60")

    order = session.calculate_bill(15)
    assert (order.tip, order.total) == (Decimal("3.83"), Decimal("31.43"))

    line = order.items[1]
    order = session.remove_item(line.id)
    assert order.subtotal == Decimal("20.00")
    # Structural changes recompute with the tip they are given, 0 by default
    assert order.tip == 0

def test_update_quantity_clamps_to_one(session):
    session.create_order(1)
    order = session.add_item(COFFEE, 3)
    line_id = order.items[0].id
    for quantity in (0, -4):
        order = session.update_quantity(line_id, quantity)
        assert len(order.items) == 1
        assert order.items[0].quantity == 1
    assert order.subtotal == COFFEE.price

def test_update_notes_does_not_recompute_or_remerge(session):
    session.create_order(1)
    session.add_item(BRUSCHETTA, 1, "")
    order = session.add_item(BRUSCHETTA, 1, "extra basil")
    order = session.calculate_bill(20)
    tip_before = order.tip

    order = session.update_notes(order.items[1].id, "")
    assert len(order.items) == 2
    assert order.items[0].notes == order.items[1].notes == ""
    assert order.tip == tip_before

def test_remove_unknown_line_is_a_no_op(session):
    session.create_order(1)
    session.add_item(COFFEE)
    order = session.remove_item("missing")
    assert len(order.items) == 1

def test_negative_tip_leaves_order_untouched(session):
    session.create_order(1)
    session.add_item(COFFEE)
    with pytest.raises(ValueError):
        session.add_item(COFFEE, 1, "", Decimal("-1"))
    assert session.active_order.items[0].quantity == 1

def test_complete_then_reopen_same_table(session):
    session.create_order(5)
    session.add_item(COFFEE)
    done = session.complete_order(PaymentMethod.CASH)
    assert done.status == DineInStatus.COMPLETED
    assert done.payment_method == PaymentMethod.CASH
    assert session.active_order is None
    assert session.history == [done]
    assert table_status(session, 5) == TableStatus.AVAILABLE

    again = session.create_order(5)
    assert again.id != done.id

def test_cancel_frees_table_and_records_history(session):
    session.create_order(3)
    canceled = session.cancel_order()
    assert canceled.status == DineInStatus.CANCELED
    assert session.history[-1] is canceled
    assert session.active_order is None
    assert table_status(session, 3) == TableStatus.AVAILABLE

def test_complete_and_cancel_without_active_order_are_no_ops(session):
    assert session.complete_order() is None
    assert session.cancel_order() is None
    assert session.history == []

def test_reset(session):
    session.create_order(1)
    session.cancel_order()
    session.create_order(2)
    session.reset()
    assert session.active_order is None
    assert session.history == []
    assert all(t.status == TableStatus.AVAILABLE for t in session.tables.all())

def test_oversized_quantity_leaves_order_untouched(session):
    session.create_order(1)
    order = session.add_item(COFFEE, 2)
    line_id = order.items[0].id

    with pytest.raises(ValueError):
        session.update_quantity(line_id, 10**30)
    with pytest.raises(ValueError):
        session.add_item(COFFEE, 10**30)

    line = session.active_order.items[0]
    assert line.quantity == 2
    assert session.active_order.subtotal == COFFEE.price * line.quantity

def test_merge_past_quantity_limit_is_rejected(session):
    session.create_order(1)
    session.add_item(COFFEE, MAX_QUANTITY)
    with pytest.raises(ValueError):
        session.add_item(COFFEE, 1)
    order = session.active_order
    assert [line.quantity for line in order.items] == [MAX_QUANTITY]
    assert order.subtotal == COFFEE.price * MAX_QUANTITY

def test_remove_item_keeps_given_tip(session):
    session.create_order(1)
    session.add_item(COFFEE)
    order = session.add_item(BRUSCHETTA)
    order = session.remove_item(order.items[0].id, Decimal("20"))
    assert order.tip_percentage == Decimal("20")
    assert order.tip == Decimal("1.80")

def test_with_tables_uses_configured_count_only_when_unset():
    assert len(DineInSession.with_tables().tables.all()) == 6
    assert len(DineInSession.with_tables(2).tables.all()) == 2
    with pytest.raises(ValueError):
        DineInSession.with_tables(0)
