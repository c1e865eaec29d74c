"""Shopping cart handler.

Handles cart fetch, add, remove and promo codes. Every backend mutation is
followed by a cart re-fetch.
"""

import logging
from typing import Awaitable, Callable, Optional

from langsmith import traceable

from learnhub.exceptions import LearnHubError
from learnhub.models import CartLineItem, CartTotals, Course, SessionState
from learnhub.services import (
    LearnHubClient,
    compute_cart_totals,
    remove_line,
    resolve_promo_code,
)

logger = logging.getLogger(__name__)


class CartHandler:
    """Handler for the shopping cart."""

    def __init__(
        self,
        client: Optional[LearnHubClient],
        state: SessionState,
        find_course: Callable[[str], Awaitable[Course]],
    ):
        """Initialize cart handler.

        Args:
            client: Backend client, None keeps the cart locally
            state: Session state (will be updated)
            find_course: Course lookup used for the local cart
        """
        self._client = client
        self._state = state
        self._find_course = find_course

    async def refresh(self) -> bool:
        """Re-fetch the cart; on failure the current cart is kept."""
        if self._client is None:
            return True
        try:
            self._state.cart = await self._client.get_cart()
        except LearnHubError as e:
            logger.error(f"Failed to load cart: {e}")
            self._state.notify("error", "Error", "Failed to load cart")
            return False
        return True

    @traceable(name="add_to_cart", run_type="chain")
    async def add(self, course_id: str) -> bool:
        """Add a course to the cart.

        Returns:
            True if the course was added
        """
        if self._client is None:
            if any(item.course.id == course_id for item in self._state.cart):
                self._state.notify("error", "Error", "Course already in cart")
                return False
            try:
                course = await self._find_course(course_id)
            except LearnHubError as e:
                self._state.notify("error", "Error", str(e))
                return False
            self._state.cart.append(CartLineItem(course=course))
            self._state.notify("success", "Success", "Course added to cart!")
            return True

        try:
            await self._client.add_to_cart(course_id)
        except LearnHubError as e:
            logger.error(f"Failed to add {course_id} to cart: {e}")
            self._state.notify("error", "Error", str(e) or "Failed to add to cart")
            return False

        self._state.notify("success", "Success", "Course added to cart!")
        await self.refresh()
        return True

    @traceable(name="remove_from_cart", run_type="chain")
    async def remove(self, course_id: str) -> bool:
        """Remove a course from the cart.

        Returns:
            True if the course was removed
        """
        if self._client is not None:
            try:
                response = await self._client.remove_from_cart(course_id)
            except LearnHubError as e:
                logger.error(f"Failed to remove {course_id} from cart: {e}")
                self._state.notify("error", "Error", str(e) or "Failed to remove course")
                return False
            message = response.get("message", "")
        elif any(item.course.id == course_id for item in self._state.cart):
            message = ""
        else:
            self._state.notify("error", "Error", "Course not in cart")
            return False

        self._state.cart = remove_line(self._state.cart, course_id)
        self._state.notify("success", "Course Removed", message)
        await self.refresh()
        return True

    def apply_promo(self, code: str) -> bool:
        """Apply a promo code.

        Unknown codes are ignored without a notification and leave any
        previously applied code in place.

        Returns:
            True if the code was recognized
        """
        applied = resolve_promo_code(code)
        if applied is None:
            return False
        self._state.promo_code = applied
        logger.info(f"Promo code {applied} applied")
        return True

    def totals(self) -> CartTotals:
        """Current cart totals."""
        return compute_cart_totals(self._state.cart, self._state.promo_code)
