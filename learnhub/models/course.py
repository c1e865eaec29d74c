"""Course catalog data models.

These mirror the course documents served by the LearnHub backend. The backend
speaks camelCase and keys documents by ``_id``; both spellings are accepted.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Instructor(BaseModel):
    """Course author as embedded in course documents."""

    id: str = Field(default="", alias="_id")
    name: str = ""
    email: str = ""
    bio: str = ""

    class Config:
        populate_by_name = True


class Lecture(BaseModel):
    """A single lecture inside a section."""

    id: str = Field(alias="_id")
    title: str = ""
    type: Literal["Video", "Text"] = "Video"
    content: str = ""
    video_url: str = Field(default="", alias="video")
    duration_seconds: int = Field(default=0, ge=0, alias="duration")
    is_completed: bool = Field(default=False, alias="isCompleted")

    class Config:
        populate_by_name = True


class Section(BaseModel):
    """Ordered group of lectures. Order drives lecture numbering."""

    id: str = Field(alias="_id")
    title: str = ""
    lectures: List[Lecture] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class Course(BaseModel):
    """Course as fetched from the backend.

    Treated as immutable by the client: derived values are computed from it,
    never written back into it.

    Attributes:
        id: Backend document id
        price: Current price, never negative
        original_price: List price used as the savings baseline, if any
        total_duration: Total running time in seconds
        sections: Ordered sections, each with ordered lectures
    """

    id: str = Field(alias="_id")
    title: str
    subtitle: str = ""
    description: str = ""
    category: str = ""
    level: str = ""
    price: float = Field(default=0.0, ge=0)
    original_price: Optional[float] = Field(default=None, ge=0, alias="originalPrice")
    thumbnail: str = ""
    instructor: Optional[Instructor] = None
    sections: List[Section] = Field(default_factory=list)
    total_duration: int = Field(default=0, ge=0, alias="totalDuration")
    students_count: int = Field(default=0, ge=0, alias="studentsCount")
    rating: Optional[float] = None
    reviews_count: int = Field(default=0, ge=0, alias="reviewsCount")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    class Config:
        populate_by_name = True

    @property
    def lectures(self) -> List[Lecture]:
        """All lectures flattened in section order."""
        return [lecture for section in self.sections for lecture in section.lectures]

    @property
    def lecture_count(self) -> int:
        """Number of lectures across all sections."""
        return sum(len(section.lectures) for section in self.sections)

    @property
    def lecture_ids(self) -> List[str]:
        """Lecture ids in playback order."""
        return [lecture.id for lecture in self.lectures]

    def find_lecture(self, lecture_id: str) -> Optional[Lecture]:
        """Look up a lecture by id."""
        for lecture in self.lectures:
            if lecture.id == lecture_id:
                return lecture
        return None

    def find_section(self, lecture_id: str) -> Optional[Section]:
        """Find the section containing a lecture."""
        for section in self.sections:
            if any(lecture.id == lecture_id for lecture in section.lectures):
                return section
        return None
