"""Lecture player state model."""

from typing import Optional

from pydantic import BaseModel, Field


class PlayerState(BaseModel):
    """Playback state for the lecture player.

    Attributes:
        current_lecture_id: Lecture being played
        current_time: Playback position in seconds
        duration: Length of the current lecture in seconds
        volume: Volume level between 0 and 1
        playback_rate: Playback speed multiplier
    """

    current_lecture_id: Optional[str] = None
    is_playing: bool = False
    current_time: float = Field(default=0.0, ge=0)
    duration: float = Field(default=0.0, ge=0)
    volume: float = Field(default=1.0, ge=0, le=1)
    is_muted: bool = False
    playback_rate: float = 1.0

    def reset_playback(self, duration: float = 0.0) -> None:
        """Rewind for a newly selected lecture."""
        self.is_playing = False
        self.current_time = 0.0
        self.duration = duration
