"""Instructor handler.

Handles public instructor profiles and the signed-in instructor's own
course list.
"""

import logging
from typing import List, Optional

from langsmith import traceable

from learnhub.exceptions import LearnHubError
from learnhub.models import Course, InstructorProfile, SessionState
from learnhub.services import LearnHubClient

logger = logging.getLogger(__name__)


class InstructorHandler:
    """Handler for instructor pages."""

    def __init__(
        self,
        client: Optional[LearnHubClient],
        state: SessionState,
        catalog: Optional[List[Course]] = None,
    ):
        """Initialize instructor handler.

        Args:
            client: Backend client, None for offline use
            state: Session state (will be updated)
            catalog: Offline course collection profiles are built from
        """
        self._client = client
        self._state = state
        self._catalog = catalog

    @traceable(name="instructor_profile", run_type="chain")
    async def profile(self, instructor_id: str) -> Optional[InstructorProfile]:
        """Load an instructor's public profile.

        Offline, the profile is assembled from the catalog courses the
        instructor authored.

        Returns:
            The profile, or None if it could not be loaded
        """
        if self._client is None:
            profile = self._profile_from_catalog(instructor_id)
            if profile is None:
                self._state.notify("error", "Error", "Failed to load instructor profile")
            return profile

        try:
            return await self._client.get_instructor(instructor_id)
        except LearnHubError as e:
            logger.error(f"Failed to load instructor {instructor_id}: {e}")
            self._state.notify("error", "Error", "Failed to load instructor profile")
            return None

    def _profile_from_catalog(self, instructor_id: str) -> Optional[InstructorProfile]:
        authored = [
            course for course in self._catalog or []
            if course.instructor is not None and course.instructor.id == instructor_id
        ]
        if not authored:
            return None

        rated = [course.rating for course in authored if course.rating is not None]
        return InstructorProfile(
            **authored[0].instructor.model_dump(),
            created_courses=authored,
            total_courses=len(authored),
            total_students=sum(course.students_count for course in authored),
            average_rating=sum(rated) / len(rated) if rated else 0.0,
        )

    async def my_courses(self) -> List[Course]:
        """Courses the signed-in instructor created."""
        if self._client is None:
            self._state.notify("error", "Error", "Instructor courses need a backend connection")
            return []
        try:
            return await self._client.list_instructor_courses()
        except LearnHubError as e:
            logger.error(f"Failed to load instructor courses: {e}")
            self._state.notify("error", "Error", "Failed to fetch courses")
            return []
