"""Pricing service for cart totals and promo codes.

The engine computes derived amounts only; it does not validate prices or
quantities of the line items it is given.
"""

import logging
from typing import List, Optional

from langsmith import traceable

from learnhub.config import settings
from learnhub.models import CartLineItem, CartTotals

logger = logging.getLogger(__name__)


def _cents(value: float) -> float:
    # + 0.0 normalizes -0.0
    return round(value, 2) + 0.0


def resolve_promo_code(code: Optional[str]) -> Optional[str]:
    """Match a promo code against the configured table.

    Matching is case-insensitive. Unknown codes resolve to None without any
    error being raised.

    Args:
        code: Code as typed by the user

    Returns:
        Canonical upper-case code, or None
    """
    if not code or not code.strip():
        return None
    canonical = code.strip().upper()
    if settings.pricing.discount_rate(canonical) > 0:
        return canonical
    logger.debug(f"Ignoring unrecognized promo code: {code!r}")
    return None


@traceable(name="compute_cart_totals", run_type="tool")
def compute_cart_totals(
    items: List[CartLineItem],
    promo_code: Optional[str] = None,
) -> CartTotals:
    """Compute subtotal, discount, total and savings for a cart.

    Args:
        items: Cart line items in display order
        promo_code: Optional promo code; unrecognized codes are ignored

    Returns:
        CartTotals with amounts rounded to cents
    """
    subtotal = sum(item.course.price * item.quantity for item in items)
    original_total = sum(
        (item.course.original_price if item.course.original_price is not None else item.course.price)
        * item.quantity
        for item in items
    )

    applied = resolve_promo_code(promo_code)
    rate = settings.pricing.discount_rate(applied) if applied else 0.0
    discount = subtotal * rate
    total = max(0.0, subtotal - discount)

    return CartTotals(
        subtotal=_cents(subtotal),
        discount=_cents(discount),
        total=_cents(total),
        original_total=_cents(original_total),
        total_savings=_cents(original_total - total),
        promo_applied=applied,
    )


def update_quantity(
    items: List[CartLineItem],
    course_id: str,
    quantity: int,
) -> List[CartLineItem]:
    """Return a new cart with one line's quantity changed.

    Quantities below 1 are ignored and the cart is returned unchanged.
    """
    if quantity < 1:
        return list(items)
    return [
        item.model_copy(update={"quantity": quantity}) if item.course.id == course_id else item
        for item in items
    ]


def remove_line(items: List[CartLineItem], course_id: str) -> List[CartLineItem]:
    """Return a new cart without the given course."""
    return [item for item in items if item.course.id != course_id]


def discount_percent(price: float, original_price: Optional[float]) -> int:
    """Percent off the list price, 0 when there is no higher list price."""
    if not original_price or original_price <= price:
        return 0
    return int(round((1 - price / original_price) * 100))
