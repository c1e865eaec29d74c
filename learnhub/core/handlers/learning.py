"""Learning handler.

Handles opening a course in the lecture player, lecture completion, course
notes and course reviews.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from langsmith import traceable

from learnhub.exceptions import LearnHubError
from learnhub.models import Course, EnrollmentRecord, Note, RatingSummary, SessionState
from learnhub.services import LearnHubClient, LecturePlayer, has_reviewed, summarize_reviews

logger = logging.getLogger(__name__)


class LearningHandler:
    """Handler for the course player, notes and reviews."""

    def __init__(
        self,
        client: Optional[LearnHubClient],
        state: SessionState,
        find_course: Callable[[str], Awaitable[Course]],
    ):
        """Initialize learning handler.

        Args:
            client: Backend client, None keeps completion and notes locally
            state: Session state (will be updated)
            find_course: Course lookup
        """
        self._client = client
        self._state = state
        self._find_course = find_course
        self.player: Optional[LecturePlayer] = None

    @traceable(name="open_course", run_type="chain")
    async def open_course(self, course_id: str) -> Optional[LecturePlayer]:
        """Load a course into the lecture player.

        Known completion for the course comes from its enrollment record;
        otherwise the lectures' own completion flags are used. Opening a
        course never enrolls the student in it.

        Returns:
            The player, or None if the course could not be loaded
        """
        try:
            course = await self._find_course(course_id)
        except LearnHubError as e:
            logger.error(f"Failed to load course {course_id}: {e}")
            self._state.notify("error", "Error", str(e) or "Failed to load course data")
            return None

        record = self._state.enrollments.get(course.id)
        completed = record.completed_lecture_ids if record else None
        self.player = LecturePlayer(course, completed)

        if record is not None:
            record.last_accessed = datetime.now(timezone.utc)
        self._state.current_course = course
        self._state.notes = []

        logger.info(f"Opened course {course.id} with {course.lecture_count} lectures")
        return self.player

    @traceable(name="set_lecture_completion", run_type="chain")
    async def set_completion(
        self,
        lecture_id: Optional[str] = None,
        is_completed: Optional[bool] = None,
    ) -> bool:
        """Mark a lecture completed or not completed.

        The change is applied locally, then sent to the backend; if the
        backend rejects it the previous completion set is restored.
        Offline, the first completion change starts an enrollment record.

        Args:
            lecture_id: Lecture to update, defaults to the current lecture
            is_completed: New flag, defaults to toggling

        Returns:
            True if the change was kept
        """
        if self.player is None:
            self._state.notify("error", "Error", "No course is open")
            return False

        player = self.player
        previous = set(player.completed_ids)
        lecture_id = lecture_id or player.state.current_lecture_id
        try:
            if is_completed is None:
                is_completed = player.toggle_completion(lecture_id)
            else:
                player.mark_completed(lecture_id, is_completed)
        except LearnHubError as e:
            self._state.notify("error", "Error", str(e))
            return False

        state_word = "completed" if is_completed else "incomplete"
        if self._client is not None:
            try:
                await self._client.mark_lecture(player.course.id, lecture_id, is_completed)
            except LearnHubError as e:
                logger.error(f"Failed to update lecture {lecture_id}: {e}")
                player.completed_ids = previous
                self._state.notify("error", "Error", str(e) or "Failed to update lecture completion")
                return False

        record = self._state.enrollments.get(player.course.id)
        if record is None and self._client is None:
            record = EnrollmentRecord(course=player.course, last_accessed=datetime.now(timezone.utc))
            self._state.enrollments[player.course.id] = record
        if record is not None:
            record.completed_lecture_ids = set(player.completed_ids)
        self._state.notify("success", "Success", f"Lecture marked as {state_word}")
        return True

    # -------------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------------

    async def reviews(self, course_id: str) -> Optional[RatingSummary]:
        """Fetch and summarize a course's reviews."""
        if self._client is None:
            return summarize_reviews([])
        try:
            reviews = await self._client.list_reviews(course_id)
        except LearnHubError as e:
            logger.error(f"Failed to load reviews for {course_id}: {e}")
            self._state.notify("error", "Error", "Failed to load reviews")
            return None
        return summarize_reviews(reviews)

    @traceable(name="add_review", run_type="chain")
    async def add_review(self, course_id: str, rating: int, comment: str) -> bool:
        """Post a review, at most one per student and course.

        Returns:
            True if the review was stored
        """
        if self._client is None:
            self._state.notify("error", "Error", "Reviews need a backend connection")
            return False
        if not 1 <= rating <= 5:
            self._state.notify("error", "Error", "Rating must be between 1 and 5")
            return False

        user_id = (self._state.user or {}).get("_id")
        try:
            if user_id and has_reviewed(await self._client.list_reviews(course_id), user_id):
                self._state.notify("error", "Error", "You have already reviewed this course")
                return False
            await self._client.add_review(course_id, rating, comment)
        except LearnHubError as e:
            logger.error(f"Failed to submit review for {course_id}: {e}")
            self._state.notify("error", "Error", str(e) or "Failed to submit review")
            return False

        self._state.notify("success", "Review Submitted", "Thank you for your feedback!")
        return True

    async def delete_review(self, course_id: str, review_id: str) -> bool:
        if self._client is None:
            self._state.notify("error", "Error", "Reviews need a backend connection")
            return False
        try:
            await self._client.delete_review(course_id, review_id)
        except LearnHubError as e:
            logger.error(f"Failed to delete review {review_id}: {e}")
            self._state.notify("error", "Error", str(e) or "Failed to delete review.")
            return False
        self._state.notify("success", "Review Deleted", "Your review has been successfully removed.")
        return True

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    def _open_course_id(self) -> Optional[str]:
        if self.player is None:
            self._state.notify("error", "Error", "No course is open")
            return None
        return self.player.course.id

    async def load_notes(self) -> bool:
        """Fetch notes for the open course; on failure known notes are kept."""
        course_id = self._open_course_id()
        if course_id is None:
            return False
        if self._client is None:
            return True
        try:
            self._state.notes = await self._client.list_notes(course_id)
        except LearnHubError as e:
            logger.error(f"Failed to fetch notes for {course_id}: {e}")
            self._state.notify("error", "Error", "Failed to fetch notes")
            return False
        return True

    @traceable(name="add_note", run_type="chain")
    async def add_note(self, content: str, timestamp: str = "") -> bool:
        """Add a note to the open course.

        If the backend does not echo the stored note back, the course notes
        are re-fetched.

        Returns:
            True if the note was saved
        """
        course_id = self._open_course_id()
        if course_id is None:
            return False
        if not content.strip():
            self._state.notify("error", "Error", "Note is empty")
            return False

        if self._client is None:
            note = Note(
                id=f"local-{uuid.uuid4().hex[:8]}",
                content=content,
                timestamp=timestamp,
                created_at=datetime.now(timezone.utc),
            )
        else:
            try:
                note = await self._client.add_note(course_id, content, timestamp)
            except LearnHubError as e:
                logger.error(f"Failed to add note to {course_id}: {e}")
                self._state.notify("error", "Error", "Failed to add note")
                return False
            if note is None:
                await self.load_notes()

        if note is not None:
            self._state.notes.append(note)
        self._state.notify("success", "Success", "Note added successfully")
        return True

    async def delete_note(self, note_id: str) -> bool:
        course_id = self._open_course_id()
        if course_id is None:
            return False
        if not any(note.id == note_id for note in self._state.notes):
            self._state.notify("error", "Error", f"Note not found: {note_id}")
            return False

        if self._client is not None:
            try:
                await self._client.delete_note(course_id, note_id)
            except LearnHubError as e:
                logger.error(f"Failed to delete note {note_id}: {e}")
                self._state.notify("error", "Error", "Failed to delete note")
                return False

        self._state.notes = [note for note in self._state.notes if note.id != note_id]
        self._state.notify("success", "Deleted", "Note removed successfully")
        return True
