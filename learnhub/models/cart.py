"""Shopping cart models."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from learnhub.models.course import Course


class CartLineItem(BaseModel):
    """One course in the cart.

    Quantity is nominally mutable but is 1 for a course in practice.
    """

    id: str = Field(default="", alias="_id")
    course: Course
    quantity: int = 1

    class Config:
        populate_by_name = True

    @property
    def line_total(self) -> float:
        return self.course.price * self.quantity


@dataclass
class CartTotals:
    """Derived cart amounts.

    Attributes:
        subtotal: Sum of price x quantity
        discount: Promo discount taken off the subtotal
        total: subtotal - discount, never below zero
        original_total: Sum of list price (or price) x quantity
        total_savings: original_total - total
        promo_applied: Canonical code that was applied, None if not recognized
    """

    subtotal: float = 0.0
    discount: float = 0.0
    total: float = 0.0
    original_total: float = 0.0
    total_savings: float = 0.0
    promo_applied: Optional[str] = None
