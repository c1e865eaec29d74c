"""Formatting utilities for course display.

Provides functions to format durations, prices and course data for the
terminal client.
"""

from typing import Dict, Iterable, List, Optional, Set

from learnhub.models import (
    CartLineItem,
    CartTotals,
    Course,
    CourseFilters,
    CoursePage,
    EnrollmentRecord,
    InstructorProfile,
    Note,
    ProgressSummary,
    RatingSummary,
)


def format_duration(seconds: Optional[float] = None) -> str:
    """Format a running time as "Xh Ym" or "Ym".

    Any positive duration under a minute rounds up to "1m".

    Args:
        seconds: Duration in seconds, may be None

    Returns:
        Human-readable duration string
    """
    if not seconds or seconds <= 0:
        return "0m"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes == 0:
        return "1m"
    return f"{minutes}m"


def format_time(seconds: float) -> str:
    """Format a player position as M:SS."""
    seconds = max(0.0, seconds)
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def format_price(amount: float) -> str:
    return f"${amount:.2f}"


def total_duration(courses: Iterable[Course]) -> int:
    """Sum the running time of several courses in seconds."""
    return sum(course.total_duration or 0 for course in courses)


def describe_filters(filters: Optional[CourseFilters]) -> str:
    """Create human-readable filter description.

    Args:
        filters: Active catalog filters

    Returns:
        Human-readable description string
    """
    if filters is None:
        return "None"

    parts = []
    if filters.search.strip():
        parts.append(f'matching "{filters.search.strip()}"')
    if filters.category:
        parts.append(f"in {filters.category}")
    if filters.level:
        parts.append(f"{filters.level} level")
    if filters.sort:
        parts.append(f"sorted by {filters.sort}")

    return ", ".join(parts) if parts else "None"


def format_courses(courses: List[Course], start: int = 1) -> str:
    """Format a numbered course list.

    Args:
        courses: Courses to show
        start: Number of the first entry

    Returns:
        Multi-line course listing
    """
    if not courses:
        return "No courses found."

    lines = []
    for i, course in enumerate(courses, start):
        instructor = course.instructor.name if course.instructor and course.instructor.name else "Unknown"
        rating = f"{course.rating:.1f} ({course.reviews_count})" if course.rating else "no ratings"
        lines.append(f"{i}. {course.title}  [{course.id}]")
        lines.append(
            f"   {format_price(course.price)} | {course.level or 'All Levels'} | "
            f"{format_duration(course.total_duration)} | {course.lecture_count} lectures | "
            f"{rating} | by {instructor}"
        )
    return "\n".join(lines)


def format_page_footer(page: CoursePage, window: List[int]) -> str:
    """Format the "Showing x to y of z" pagination footer."""
    pages = " ".join(f"[{n}]" if n == page.page else str(n) for n in window)
    return (
        f"Showing {page.first_index} to {page.last_index} of {page.total} courses"
        f"   {pages}"
    )


def format_cart(items: List[CartLineItem], totals: CartTotals) -> str:
    """Format the cart and its order summary.

    Args:
        items: Cart line items
        totals: Derived cart totals

    Returns:
        Multi-line cart summary
    """
    if not items:
        return "Your cart is empty."

    noun = "course" if len(items) == 1 else "courses"
    lines = [f"{len(items)} {noun} in your cart", ""]
    for item in items:
        course = item.course
        lines.append(f"- {course.title}  [{course.id}]")
        lines.append(
            f"  Qty: {item.quantity}  {format_price(item.line_total)}  "
            f"{format_duration(course.total_duration)}, {course.lecture_count} lectures"
        )

    lines.append("")
    lines.append(f"Subtotal:        {format_price(totals.subtotal)}")
    if totals.discount > 0:
        lines.append(f"Promo Discount: -{format_price(totals.discount)}")
    lines.append(f"Total Savings:  -{format_price(totals.total_savings)}")
    lines.append(f"Total:           {format_price(totals.total)}")
    if totals.promo_applied:
        lines.append(f"{totals.promo_applied} applied")
    return "\n".join(lines)


def format_curriculum(
    course: Course,
    states: Dict[str, bool],
    current_lecture_id: Optional[str] = None,
) -> str:
    """Format a course outline with completion marks.

    Lectures are numbered "section.lecture" in section order.
    """
    lines = [course.title]
    for s_index, section in enumerate(course.sections, 1):
        lines.append(f"Section {s_index}: {section.title}")
        for l_index, lecture in enumerate(section.lectures, 1):
            mark = "x" if states.get(lecture.id) else " "
            pointer = ">" if lecture.id == current_lecture_id else " "
            lines.append(
                f" {pointer}[{mark}] {s_index}.{l_index} {lecture.title} "
                f"({format_time(lecture.duration_seconds)})"
            )
    return "\n".join(lines)


def format_dashboard(enrollments: List[EnrollmentRecord], summary: ProgressSummary) -> str:
    """Format the learning dashboard.

    Args:
        enrollments: Enrollment records
        summary: Aggregate progress

    Returns:
        Multi-line dashboard text
    """
    if not enrollments:
        return "You are not enrolled in any courses yet."

    lines = [
        f"Courses completed:  {summary.completed_courses}",
        f"Courses in progress: {summary.in_progress_courses}",
        f"Lectures completed: {summary.completed_lectures}/{summary.total_lectures}",
        f"Total content:      {format_duration(summary.total_seconds)}",
        "",
    ]
    for record in enrollments:
        course = record.course
        percent = summary.percentages.get(course.id, 0)
        lines.append(
            f"- {course.title}: {percent}% complete "
            f"({record.completed_count}/{record.total_lectures} lectures)"
        )
    return "\n".join(lines)


def format_reviews(summary: RatingSummary) -> str:
    """Format a rating overview with star distribution."""
    noun = "review" if summary.total == 1 else "reviews"
    lines = [f"{summary.average:.1f} average from {summary.total} {noun}"]
    for bucket in summary.distribution:
        bar = "#" * int(round(bucket.percentage / 5))
        lines.append(f"{bucket.stars} star | {bar:<20} | {bucket.count}")
    return "\n".join(lines)


def format_notes(notes: List[Note]) -> str:
    """Format lecture notes, one per line with their video position."""
    if not notes:
        return "No notes yet."
    lines = []
    for note in notes:
        position = f"[{note.timestamp}] " if note.timestamp else ""
        lines.append(f"- {position}{note.content}  ({note.id})")
    return "\n".join(lines)


def format_instructor(profile: InstructorProfile) -> str:
    """Format an instructor profile with stats and published courses.

    Args:
        profile: Instructor profile

    Returns:
        Multi-line profile text
    """
    title = f"{profile.name} - {profile.profession}" if profile.profession else profile.name
    lines = [title]
    if profile.bio:
        lines.append(profile.bio)
    if profile.expertise:
        lines.append(f"Expertise: {', '.join(profile.expertise)}")
    lines.append(
        f"{profile.total_students:,} students | {profile.total_courses} courses | "
        f"{profile.average_rating:.1f} average rating"
    )
    lines.append("")
    lines.append(format_courses(profile.created_courses))
    return "\n".join(lines)


def completed_ids_from(states: Dict[str, bool]) -> Set[str]:
    """Collect lecture ids marked complete in a state map."""
    return {lecture_id for lecture_id, done in states.items() if done}
