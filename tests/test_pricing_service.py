import pytest

from learnhub.models import CartLineItem, Course
from learnhub.services import (
    compute_cart_totals,
    discount_percent,
    remove_line,
    resolve_promo_code,
    update_quantity,
)


def _item(course_id: str, price: float, quantity: int = 1, original_price=None) -> CartLineItem:
    course = Course(id=course_id, title=course_id, price=price, original_price=original_price)
    return CartLineItem(course=course, quantity=quantity)


def test_save20_on_single_line():
    totals = compute_cart_totals([_item("a", 10, quantity=2)], "SAVE20")

    assert totals.subtotal == 20
    assert totals.discount == 4
    assert totals.total == 16
    assert totals.promo_applied == "SAVE20"


def test_empty_cart_is_all_zero():
    totals = compute_cart_totals([])

    assert totals.subtotal == 0
    assert totals.discount == 0
    assert totals.total == 0
    assert totals.original_total == 0
    assert totals.total_savings == 0
    assert totals.promo_applied is None


def test_promo_code_is_case_insensitive():
    totals = compute_cart_totals([_item("a", 50)], " save20 ")
    assert totals.discount == 10
    assert totals.promo_applied == "SAVE20"


@pytest.mark.parametrize("code", [None, "", "   ", "SAVE50", "FREE"])
def test_unknown_promo_codes_are_ignored(code):
    totals = compute_cart_totals([_item("a", 50)], code)

    assert totals.discount == 0
    assert totals.total == 50
    assert totals.promo_applied is None


def test_savings_use_original_price_when_present(courses):
    c1, c2 = courses[0], courses[1]
    items = [CartLineItem(course=c1), CartLineItem(course=c2)]

    totals = compute_cart_totals(items)
    assert totals.subtotal == pytest.approx(49.98)
    assert totals.original_total == pytest.approx(79.98)
    assert totals.total_savings == pytest.approx(30.0)

    promo = compute_cart_totals(items, "SAVE20")
    assert promo.discount == pytest.approx(10.0)
    assert promo.total == pytest.approx(39.98)
    assert promo.total_savings == pytest.approx(40.0)


def test_free_course_total_never_negative():
    totals = compute_cart_totals([_item("free", 0)], "SAVE20")
    assert totals.total == 0
    assert totals.discount == 0


def test_resolve_promo_code():
    assert resolve_promo_code("save20") == "SAVE20"
    assert resolve_promo_code("nope") is None
    assert resolve_promo_code(None) is None


def test_update_quantity_returns_new_cart():
    cart = [_item("a", 10), _item("b", 5)]

    updated = update_quantity(cart, "a", 3)
    assert [i.quantity for i in updated] == [3, 1]
    assert cart[0].quantity == 1

    assert update_quantity(cart, "a", 0) == cart


def test_remove_line():
    cart = [_item("a", 10), _item("b", 5)]
    assert [i.course.id for i in remove_line(cart, "a")] == ["b"]
    assert len(remove_line(cart, "missing")) == 2


def test_discount_percent():
    assert discount_percent(19.99, 49.99) == 60
    assert discount_percent(10, None) == 0
    assert discount_percent(10, 5) == 0
