"""Dashboard handler.

Handles the student's enrolled courses and aggregate progress.
"""

import logging
from typing import Dict, List, Optional

from langsmith import traceable

from learnhub.exceptions import LearnHubError
from learnhub.models import EnrollmentRecord, ProgressSummary, SessionState
from learnhub.services import LearnHubClient, split_by_status, summarize_progress

logger = logging.getLogger(__name__)


class DashboardHandler:
    """Handler for the learning dashboard."""

    def __init__(self, client: Optional[LearnHubClient], state: SessionState):
        self._client = client
        self._state = state

    async def refresh(self) -> bool:
        """Re-fetch enrollments; on failure the known ones are kept."""
        if self._client is None:
            return True
        try:
            records = await self._client.list_enrollments()
        except LearnHubError as e:
            logger.error(f"Failed to load enrolled courses: {e}")
            self._state.notify("error", "Error", "Failed to load enrolled courses")
            return False
        self._state.enrollments = {record.course.id: record for record in records}
        return True

    def enrollments(self) -> List[EnrollmentRecord]:
        """Enrollments, most recently accessed first."""
        records = list(self._state.enrollments.values())
        return sorted(
            records,
            key=lambda r: r.last_accessed.timestamp() if r.last_accessed else float("-inf"),
            reverse=True,
        )

    @traceable(name="dashboard_summary", run_type="chain")
    def summary(self) -> ProgressSummary:
        return summarize_progress(self.enrollments())

    def tabs(self) -> Dict[str, List[EnrollmentRecord]]:
        """Enrollments split into in-progress and completed."""
        return split_by_status(self.enrollments())
