"""Public instructor profile model."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from learnhub.models.course import Course, Instructor


class InstructorProfile(Instructor):
    """Instructor with their published courses and aggregate stats."""

    profession: str = ""
    avatar: str = ""
    expertise: List[str] = Field(default_factory=list)
    created_courses: List[Course] = Field(default_factory=list, alias="createdCourses")
    total_students: int = Field(default=0, ge=0, alias="totalStudents")
    total_courses: int = Field(default=0, ge=0, alias="totalCourses")
    average_rating: float = Field(default=0.0, alias="averageRating")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
