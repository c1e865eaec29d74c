"""Session state management models."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from learnhub.models.cart import CartLineItem
from learnhub.models.course import Course
from learnhub.models.enrollment import EnrollmentRecord
from learnhub.models.filters import CourseFilters, CoursePage
from learnhub.models.note import Note


class Notification(BaseModel):
    """Transient message surfaced to the user."""

    level: Literal["success", "error"] = "success"
    title: str = ""
    message: str = ""


class SessionState(BaseModel):
    """Transient client state for one session.

    Everything here comes from server responses and is discarded on
    navigation or refresh; nothing is persisted by the client.

    Attributes:
        user: Authenticated user document, if any
        courses: Courses on the current catalog page
        page: Pagination metadata for the current catalog page
        filters: Active catalog filters
        cart: Cart line items as last fetched
        promo_code: Promo code that was accepted for the cart
        current_course: Course open in the player
        enrollments: Enrollment records keyed by course id
        notes: Notes on the course open in the player
        notifications: Pending user notifications
    """

    user: Optional[Dict[str, Any]] = None
    courses: List[Course] = Field(default_factory=list)
    page: Optional[CoursePage] = None
    filters: CourseFilters = Field(default_factory=CourseFilters)
    cart: List[CartLineItem] = Field(default_factory=list)
    promo_code: Optional[str] = None
    current_course: Optional[Course] = None
    enrollments: Dict[str, EnrollmentRecord] = Field(default_factory=dict)
    notes: List[Note] = Field(default_factory=list)
    notifications: List[Notification] = Field(default_factory=list)

    class Config:
        arbitrary_types_allowed = True

    def notify(self, level: str, title: str, message: str) -> Notification:
        """Queue a notification."""
        notification = Notification(level=level, title=title, message=message)
        self.notifications.append(notification)
        return notification

    def drain_notifications(self) -> List[Notification]:
        """Return and clear pending notifications."""
        pending = list(self.notifications)
        self.notifications.clear()
        return pending

    def clear(self) -> None:
        """Clear all state."""
        self.user = None
        self.courses.clear()
        self.page = None
        self.filters = CourseFilters()
        self.cart.clear()
        self.promo_code = None
        self.current_course = None
        self.enrollments.clear()
        self.notes.clear()
        self.notifications.clear()
