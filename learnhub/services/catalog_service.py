"""Catalog service for filtering, sorting and paginating courses.

Every function returns a new list; the source collection is never mutated
and results only ever contain courses from the input.
"""

import logging
import math
from typing import Callable, Dict, List, Optional, Tuple

from langsmith import traceable

from learnhub.config import settings
from learnhub.models import Course, CourseFilters, CoursePage

logger = logging.getLogger(__name__)


# =============================================================================
# Filtering
# =============================================================================

def matches_filters(course: Course, filters: CourseFilters) -> bool:
    """Check a course against all active predicates (logical AND)."""
    query = filters.search.strip().lower()
    if query:
        in_title = query in course.title.lower()
        in_description = query in course.description.lower()
        if not (in_title or in_description):
            return False

    if filters.category and course.category != filters.category:
        return False

    if filters.level and course.level != filters.level:
        return False

    return True


@traceable(name="filter_courses", run_type="tool")
def filter_courses(courses: List[Course], filters: CourseFilters) -> List[Course]:
    """Filter courses by search text, category and level.

    Args:
        courses: Source courses
        filters: Filter criteria

    Returns:
        Matching courses in their original relative order
    """
    if filters.is_empty:
        return list(courses)
    return [course for course in courses if matches_filters(course, filters)]


# =============================================================================
# Sorting
# =============================================================================

def _created_key(course: Course) -> float:
    # Missing timestamps sort as the oldest
    return course.created_at.timestamp() if course.created_at else float("-inf")


_SORTS: Dict[str, Tuple[Callable[[Course], float], bool]] = {
    "newest": (_created_key, True),
    "oldest": (_created_key, False),
    "price-low": (lambda c: c.price, False),
    "price-high": (lambda c: c.price, True),
    "popularity": (lambda c: c.students_count, True),
    "rating": (lambda c: c.rating or 0.0, True),
}


@traceable(name="sort_courses", run_type="tool")
def sort_courses(courses: List[Course], sort_by: Optional[str] = None) -> List[Course]:
    """Sort courses by a catalog sort key.

    Sorting is stable, so ties keep their original relative order.

    Args:
        courses: Courses to sort
        sort_by: One of newest, oldest, price-low, price-high, popularity,
            rating; None keeps the current order

    Returns:
        Sorted copy of the courses

    Raises:
        ValueError: If the sort key is unknown
    """
    if not sort_by:
        return list(courses)
    if sort_by == "popular":
        sort_by = "popularity"
    if sort_by not in _SORTS:
        raise ValueError(f"Unknown sort key: {sort_by}")

    key, reverse = _SORTS[sort_by]
    return sorted(courses, key=key, reverse=reverse)


@traceable(name="filter_and_sort", run_type="chain")
def filter_and_sort(courses: List[Course], filters: CourseFilters) -> List[Course]:
    """Produce the catalog view list for a set of filters."""
    filtered = filter_courses(courses, filters)
    result = sort_courses(filtered, filters.sort)
    logger.debug(f"Catalog view: {len(result)} of {len(courses)} courses")
    return result


# =============================================================================
# Pagination
# =============================================================================

def paginate(
    courses: List[Course],
    page: int = 1,
    per_page: Optional[int] = None,
) -> CoursePage:
    """Slice one page out of a course list.

    The page number is clamped to the available range.

    Args:
        courses: Full result list
        page: 1-based page number
        per_page: Page size, defaults to the catalog setting

    Returns:
        CoursePage with items and counts
    """
    per_page = per_page or settings.catalog.per_page
    total = len(courses)
    total_pages = max(1, math.ceil(total / per_page))
    page = max(1, min(page, total_pages))
    start = (page - 1) * per_page

    return CoursePage(
        items=courses[start:start + per_page],
        page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
    )


def page_window(current: int, total_pages: int, size: Optional[int] = None) -> List[int]:
    """Page numbers for the pagination buttons.

    Shows up to ``size`` consecutive pages, centered on the current page
    where possible.
    """
    size = size or settings.catalog.page_window
    count = min(size, max(total_pages, 0))
    if count == 0:
        return []
    start = max(1, min(total_pages - size + 1, current - size // 2))
    return list(range(start, start + count))
