"""LearnHub session - main orchestrator for the client.

This module contains the LearnHubSession class that owns the backend
client, the transient session state, and the view handlers.
"""

import logging
from typing import Any, Dict, List, Optional

from learnhub.exceptions import ConfigurationError, LearnHubError
from learnhub.models import Course, Notification, SessionState
from learnhub.services import LearnHubClient
from learnhub.core.handlers import (
    CatalogHandler,
    CartHandler,
    LearningHandler,
    DashboardHandler,
    InstructorHandler,
)

logger = logging.getLogger(__name__)


class LearnHubSession:
    """Client session for browsing, buying and taking courses.

    Runs either against the backend (``client``) or fully offline against an
    in-memory ``catalog``.

    Attributes:
        state: Session state with user, catalog page, cart and enrollments
        catalog: Catalog browsing handler
        cart: Shopping cart handler
        learning: Lecture player, notes and reviews handler
        dashboard: Progress dashboard handler
        instructors: Instructor profile handler

    Example:
        ```python
        session = LearnHubSession(LearnHubClient())
        await session.start()
        await session.catalog.browse(CourseFilters(search="python"))
        await session.close()
        ```
    """

    def __init__(
        self,
        client: Optional[LearnHubClient] = None,
        catalog: Optional[List[Course]] = None,
    ):
        """Initialize the session.

        Args:
            client: Backend client
            catalog: Offline course collection, used when there is no client

        Raises:
            ConfigurationError: If neither a client nor a catalog is given
        """
        if client is None and catalog is None:
            raise ConfigurationError("A backend client or an offline catalog is required")

        self.state = SessionState()
        self._client = client

        mode = "online" if client is not None else "offline"
        logger.info(f"Initializing LearnHub session ({mode})")

        self.catalog = CatalogHandler(client, self.state, catalog)
        self.cart = CartHandler(client, self.state, self.catalog.find_course)
        self.learning = LearningHandler(client, self.state, self.catalog.find_course)
        self.dashboard = DashboardHandler(client, self.state)
        self.instructors = InstructorHandler(client, self.state, catalog)

    @property
    def is_offline(self) -> bool:
        return self._client is None

    async def start(self) -> None:
        """Load the current user, cart and enrollments.

        Failures are reported as notifications; the session stays usable.
        """
        if self._client is None:
            return

        try:
            self.state.user = await self._client.fetch_user()
        except LearnHubError as e:
            logger.warning(f"Could not load user: {e}")
            self.state.user = None
            self.state.notify("error", "Error", str(e))
            return

        if self.state.user:
            await self.cart.refresh()
            await self.dashboard.refresh()

    def notifications(self) -> List[Notification]:
        """Pending notifications, cleared once read."""
        return self.state.drain_notifications()

    def clear(self) -> None:
        """Discard all transient state."""
        self.state.clear()
        self.learning.player = None
        logger.info("Session state cleared")

    def get_session_stats(self) -> Dict[str, Any]:
        """Get current session statistics.

        Returns:
            Dictionary with session statistics
        """
        page = self.state.page
        return {
            "user": (self.state.user or {}).get("name"),
            "courses_shown": len(self.state.courses),
            "total_courses": page.total if page else 0,
            "cart_items": len(self.state.cart),
            "promo_code": self.state.promo_code,
            "enrollments": len(self.state.enrollments),
            "current_course": self.state.current_course.title if self.state.current_course else None,
        }

    async def close(self) -> None:
        """Cleanup resources."""
        logger.info("Closing LearnHub session...")
        if self._client is not None:
            await self._client.close()
