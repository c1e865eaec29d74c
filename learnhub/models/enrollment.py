"""Enrollment and progress models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Set

from learnhub.models.course import Course


@dataclass
class EnrollmentRecord:
    """A student's relationship to one course.

    ``completed_lecture_ids`` is a set, so a lecture counts at most once.
    """

    course: Course
    completed_lecture_ids: Set[str] = field(default_factory=set)
    last_accessed: Optional[datetime] = None

    @property
    def completed_count(self) -> int:
        """Completed lectures that belong to this course."""
        return len(self.completed_lecture_ids.intersection(self.course.lecture_ids))

    @property
    def total_lectures(self) -> int:
        return self.course.lecture_count

    @property
    def is_completed(self) -> bool:
        """Derived: every lecture of a non-empty course is done."""
        total = self.total_lectures
        return total > 0 and self.completed_count >= total


@dataclass
class ProgressSummary:
    """Aggregate learning progress across enrollments."""

    percentages: Dict[str, int] = field(default_factory=dict)
    completed_courses: int = 0
    in_progress_courses: int = 0
    total_lectures: int = 0
    completed_lectures: int = 0
    total_seconds: int = 0
