"""Catalog browsing handler.

Handles course listing, search, filtering and pagination, either against the
backend or against an offline catalog held in memory.
"""

import logging
from typing import List, Optional

from langsmith import traceable

from learnhub.exceptions import CourseNotFoundError, LearnHubError
from learnhub.models import Course, CourseFilters, CoursePage, SessionState
from learnhub.services import LearnHubClient, filter_and_sort, paginate

logger = logging.getLogger(__name__)


class CatalogHandler:
    """Handler for catalog browsing."""

    def __init__(
        self,
        client: Optional[LearnHubClient],
        state: SessionState,
        catalog: Optional[List[Course]] = None,
    ):
        """Initialize catalog handler.

        Args:
            client: Backend client, None for offline use
            state: Session state (will be updated)
            catalog: Offline course collection used instead of the backend
        """
        self._client = client
        self._state = state
        self._catalog = catalog

    @traceable(name="browse_catalog", run_type="chain")
    async def browse(
        self,
        filters: Optional[CourseFilters] = None,
        page: int = 1,
    ) -> Optional[CoursePage]:
        """Load a catalog page for the given filters.

        On failure the previous page stays in place and an error
        notification is queued.

        Args:
            filters: Filters to apply, defaults to the active ones
            page: 1-based page number

        Returns:
            The loaded page, or None on failure
        """
        filters = filters if filters is not None else self._state.filters

        if self._catalog is not None:
            result = paginate(filter_and_sort(self._catalog, filters), page)
        else:
            try:
                result = await self._client.list_courses(filters, page)
            except LearnHubError as e:
                logger.error(f"Failed to load courses: {e}")
                self._state.notify("error", "Error", "Failed to load courses")
                return None

        self._state.filters = filters
        self._state.page = result
        self._state.courses = list(result.items)
        logger.info(f"Catalog page {result.page}/{result.total_pages}: {result.total} courses")
        return result

    async def search(self, text: str) -> Optional[CoursePage]:
        """Search from the first page, keeping the other filters."""
        filters = self._state.filters.model_copy(update={"search": text})
        return await self.browse(filters, page=1)

    async def next_page(self) -> Optional[CoursePage]:
        page = self._state.page
        if page is None or not page.has_next:
            return page
        return await self.browse(page=page.page + 1)

    async def previous_page(self) -> Optional[CoursePage]:
        page = self._state.page
        if page is None or not page.has_previous:
            return page
        return await self.browse(page=page.page - 1)

    async def find_course(self, course_id: str) -> Course:
        """Get a full course document.

        Raises:
            CourseNotFoundError: If the course is unknown offline
            LearnHubError: If the backend call fails
        """
        if self._catalog is not None:
            for course in self._catalog:
                if course.id == course_id:
                    return course
            raise CourseNotFoundError(course_id)
        return await self._client.get_course(course_id)
