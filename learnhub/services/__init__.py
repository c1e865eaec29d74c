"""Services layer for LearnHub.

This module provides business logic services:
- Catalog service for filter, sort, paginate
- Pricing service for cart totals and promo codes
- Progress service for lecture completion and percentages
- Review service for rating summaries
- Lecture player control surface
- API client for the LearnHub backend
"""

from learnhub.services.catalog_service import (
    matches_filters,
    filter_courses,
    sort_courses,
    filter_and_sort,
    paginate,
    page_window,
)
from learnhub.services.pricing_service import (
    resolve_promo_code,
    compute_cart_totals,
    update_quantity,
    remove_line,
    discount_percent,
)
from learnhub.services.progress_service import (
    percentage,
    calculate_progress,
    course_progress,
    lecture_states,
    toggle_lecture,
    set_lecture_completed,
    summarize_progress,
    split_by_status,
)
from learnhub.services.review_service import summarize_reviews, has_reviewed
from learnhub.services.player_service import LecturePlayer
from learnhub.services.api_client import LearnHubClient

__all__ = [
    # Catalog Service
    "matches_filters",
    "filter_courses",
    "sort_courses",
    "filter_and_sort",
    "paginate",
    "page_window",
    # Pricing Service
    "resolve_promo_code",
    "compute_cart_totals",
    "update_quantity",
    "remove_line",
    "discount_percent",
    # Progress Service
    "percentage",
    "calculate_progress",
    "course_progress",
    "lecture_states",
    "toggle_lecture",
    "set_lecture_completed",
    "summarize_progress",
    "split_by_status",
    # Review Service
    "summarize_reviews",
    "has_reviewed",
    # Player
    "LecturePlayer",
    # API Client
    "LearnHubClient",
]
