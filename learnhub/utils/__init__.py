"""Utility functions for LearnHub.

Provides parsing and formatting utilities used throughout the client.
"""

from learnhub.utils.parsers import (
    parse_filters,
    build_query_params,
    filters_to_link_params,
    parse_page_number,
)
from learnhub.utils.formatters import (
    format_duration,
    format_time,
    format_price,
    total_duration,
    describe_filters,
    format_courses,
    format_page_footer,
    format_cart,
    format_curriculum,
    format_dashboard,
    format_reviews,
    format_notes,
    format_instructor,
    completed_ids_from,
)

__all__ = [
    # Parsers
    "parse_filters",
    "build_query_params",
    "filters_to_link_params",
    "parse_page_number",
    # Formatters
    "format_duration",
    "format_time",
    "format_price",
    "total_duration",
    "describe_filters",
    "format_courses",
    "format_page_footer",
    "format_cart",
    "format_curriculum",
    "format_dashboard",
    "format_reviews",
    "format_notes",
    "format_instructor",
    "completed_ids_from",
]
