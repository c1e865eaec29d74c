"""Lecture player control surface.

Holds playback state and lecture navigation for one course, plus the
student's lecture completion set for that course.
"""

import logging
from typing import Dict, Iterable, Optional, Set

from learnhub.config import settings
from learnhub.exceptions import LectureNotFoundError
from learnhub.models import Course, Lecture, PlayerState
from learnhub.services.progress_service import (
    course_progress,
    lecture_states,
    set_lecture_completed,
    toggle_lecture,
)

logger = logging.getLogger(__name__)


class LecturePlayer:
    """Player for the lectures of a single course.

    Lectures play in section order. The first lecture of the first section is
    selected on open.

    Attributes:
        course: Course being played
        state: Playback state
        completed_ids: Lecture ids the student has completed
    """

    def __init__(self, course: Course, completed_ids: Optional[Iterable[str]] = None):
        """Open a course in the player.

        Args:
            course: Course to play
            completed_ids: Known completed lectures; defaults to the lectures'
                own completion flags
        """
        self.course = course
        self.state = PlayerState()
        if completed_ids is None:
            states = lecture_states(course)
            self.completed_ids: Set[str] = {lid for lid, done in states.items() if done}
        else:
            self.completed_ids = set(completed_ids)

        self._order = course.lecture_ids
        if self._order:
            self.select(self._order[0])

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def current_lecture(self) -> Optional[Lecture]:
        if self.state.current_lecture_id is None:
            return None
        return self.course.find_lecture(self.state.current_lecture_id)

    def _index(self) -> int:
        if self.state.current_lecture_id is None:
            return -1
        return self._order.index(self.state.current_lecture_id)

    def select(self, lecture_id: str) -> Lecture:
        """Select a lecture and rewind playback.

        Raises:
            LectureNotFoundError: If the lecture is not part of the course
        """
        lecture = self.course.find_lecture(lecture_id)
        if lecture is None:
            raise LectureNotFoundError(lecture_id)
        self.state.current_lecture_id = lecture.id
        self.state.reset_playback(float(lecture.duration_seconds))
        logger.debug(f"Selected lecture {lecture.id}")
        return lecture

    def has_next(self) -> bool:
        return 0 <= self._index() < len(self._order) - 1

    def has_previous(self) -> bool:
        return self._index() > 0

    def next_lecture(self) -> Optional[Lecture]:
        """Advance to the next lecture, None at the end of the course."""
        if not self.has_next():
            return None
        return self.select(self._order[self._index() + 1])

    def previous_lecture(self) -> Optional[Lecture]:
        """Go back one lecture, None at the start of the course."""
        if not self.has_previous():
            return None
        return self.select(self._order[self._index() - 1])

    # -------------------------------------------------------------------------
    # Playback controls
    # -------------------------------------------------------------------------

    def toggle_play(self) -> bool:
        """Flip between playing and paused; returns the new playing flag."""
        if self.current_lecture is None:
            return False
        self.state.is_playing = not self.state.is_playing
        return self.state.is_playing

    def seek(self, seconds: float) -> float:
        """Jump to a position, clamped to the lecture length."""
        self.state.current_time = max(0.0, min(float(seconds), self.state.duration))
        return self.state.current_time

    def set_volume(self, volume: float) -> float:
        """Set volume in [0, 1]; zero volume mutes."""
        volume = max(0.0, min(float(volume), 1.0))
        self.state.volume = volume
        self.state.is_muted = volume == 0
        return volume

    def toggle_mute(self) -> bool:
        """Mute or unmute; unmuting restores the last volume, or full volume."""
        if self.state.is_muted:
            self.state.is_muted = False
            if self.state.volume == 0:
                self.state.volume = 1.0
        else:
            self.state.is_muted = True
        return self.state.is_muted

    @property
    def effective_volume(self) -> float:
        return 0.0 if self.state.is_muted else self.state.volume

    def set_playback_rate(self, rate: float) -> float:
        """Change playback speed.

        Raises:
            ValueError: If the rate is not one of the configured speeds
        """
        rate = float(rate)
        if rate not in settings.player.playback_rates:
            raise ValueError(f"Unsupported playback rate: {rate}")
        self.state.playback_rate = rate
        return rate

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------

    def toggle_completion(self, lecture_id: Optional[str] = None) -> bool:
        """Flip a lecture's completion; defaults to the current lecture.

        Returns:
            The lecture's new completion flag
        """
        lecture_id = lecture_id or self.state.current_lecture_id
        if lecture_id is None or self.course.find_lecture(lecture_id) is None:
            raise LectureNotFoundError(str(lecture_id))
        self.completed_ids = toggle_lecture(self.completed_ids, lecture_id)
        return lecture_id in self.completed_ids

    def mark_completed(self, lecture_id: str, is_completed: bool = True) -> None:
        if self.course.find_lecture(lecture_id) is None:
            raise LectureNotFoundError(lecture_id)
        self.completed_ids = set_lecture_completed(self.completed_ids, lecture_id, is_completed)

    @property
    def progress(self) -> int:
        """Course completion percentage."""
        return course_progress(self.course, self.completed_ids)

    def states(self) -> Dict[str, bool]:
        """Per-lecture completion flags for the curriculum sidebar."""
        return lecture_states(self.course, self.completed_ids)
