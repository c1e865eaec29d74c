"""Parsing utilities for catalog query parameters and user input."""

from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from learnhub.config import settings
from learnhub.models import CourseFilters


def parse_filters(params: Mapping[str, Any]) -> CourseFilters:
    """Parse catalog filters from query parameters.

    A missing or unknown sort key falls back to the configured default, so a
    stale link still opens the catalog.

    Args:
        params: Mapping with optional search, category, level and sort keys

    Returns:
        Validated filters
    """
    params = params or {}
    default_sort = settings.catalog.default_sort
    raw = {
        "search": str(params.get("search") or ""),
        "category": params.get("category") or None,
        "level": params.get("level") or None,
        "sort": params.get("sort") or default_sort,
    }
    try:
        return CourseFilters(**raw)
    except ValidationError:
        raw["sort"] = default_sort
        return CourseFilters(**raw)


def build_query_params(
    filters: CourseFilters,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> Dict[str, str]:
    """Build query parameters for the course listing endpoint.

    Inactive filters are omitted.

    Args:
        filters: Active filters
        page: 1-based page number
        per_page: Page size

    Returns:
        Query parameter dictionary
    """
    params: Dict[str, str] = {}
    if page is not None:
        params["page"] = str(page)
    if per_page is not None:
        params["limit"] = str(per_page)
    if filters.search.strip():
        params["search"] = filters.search.strip()
    if filters.category:
        params["category"] = filters.category
    if filters.level:
        params["level"] = filters.level
    if filters.sort:
        params["sort"] = filters.sort
    return params


def filters_to_link_params(filters: CourseFilters) -> Dict[str, str]:
    """Query parameters for a shareable catalog link.

    The default sort is left out, matching what the catalog writes to the URL.
    """
    params = build_query_params(filters)
    if params.get("sort") == settings.catalog.default_sort:
        del params["sort"]
    return params


def parse_page_number(value: Any, default: int = 1) -> int:
    """Parse a page number, falling back to default on bad input."""
    try:
        page = int(str(value).strip())
    except (ValueError, TypeError):
        return default
    return page if page >= 1 else default
