"""Data models for LearnHub."""

from learnhub.models.course import (
    Instructor,
    Lecture,
    Section,
    Course,
)
from learnhub.models.enrollment import (
    EnrollmentRecord,
    ProgressSummary,
)
from learnhub.models.cart import (
    CartLineItem,
    CartTotals,
)
from learnhub.models.filters import (
    SortKey,
    CourseFilters,
    CoursePage,
)
from learnhub.models.player import PlayerState
from learnhub.models.note import Note
from learnhub.models.instructor import InstructorProfile
from learnhub.models.review import (
    Review,
    ReviewAuthor,
    RatingBucket,
    RatingSummary,
)
from learnhub.models.state import Notification, SessionState

__all__ = [
    # Course models
    "Instructor",
    "Lecture",
    "Section",
    "Course",
    # Enrollment models
    "EnrollmentRecord",
    "ProgressSummary",
    # Cart models
    "CartLineItem",
    "CartTotals",
    # Filter models
    "SortKey",
    "CourseFilters",
    "CoursePage",
    # Player models
    "PlayerState",
    # Note models
    "Note",
    # Instructor models
    "InstructorProfile",
    # Review models
    "Review",
    "ReviewAuthor",
    "RatingBucket",
    "RatingSummary",
    # State models
    "Notification",
    "SessionState",
]
