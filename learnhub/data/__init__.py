"""Data access layer for LearnHub.

This module provides:
- Loose value parsing (price, counts)
- Backend payload validation into models
- Offline catalog loading and caching
"""

from learnhub.data.repository import (
    # Parsing utilities
    parse_number,
    parse_price,
    # Payload conversion
    parse_course,
    parse_courses,
    parse_cart,
    parse_enrollments,
    parse_reviews,
    parse_notes,
    parse_instructor,
    # Catalog files
    load_catalog,
    # Cache management
    clear_cache,
    get_cache_stats,
)

__all__ = [
    "parse_number",
    "parse_price",
    "parse_course",
    "parse_courses",
    "parse_cart",
    "parse_enrollments",
    "parse_reviews",
    "parse_notes",
    "parse_instructor",
    "load_catalog",
    "clear_cache",
    "get_cache_stats",
]
