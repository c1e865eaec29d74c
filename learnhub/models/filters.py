"""Catalog filter and pagination models."""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from learnhub.models.course import Course


# Supported sort keys
SortKey = Literal[
    "newest",
    "oldest",
    "price-low",
    "price-high",
    "popularity",
    "rating",
]

# The catalog UI sends "popular" for the popularity sort
SORT_ALIASES = {"popular": "popularity"}


class CourseFilters(BaseModel):
    """Criteria for narrowing and ordering the course catalog.

    All active predicates are combined with logical AND. Empty strings and
    None mean "no filter".

    Attributes:
        search: Case-insensitive substring matched against title and description
        category: Exact category to keep
        level: Exact level to keep
        sort: Sort key, None keeps the source order
    """

    search: str = Field(default="", description="Case-insensitive search text")
    category: Optional[str] = Field(default=None, description="Category equality filter")
    level: Optional[str] = Field(default=None, description="Level equality filter")
    sort: Optional[SortKey] = Field(default=None, description="Sort key")

    @field_validator("sort", mode="before")
    @classmethod
    def _resolve_sort_alias(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            if not value:
                return None
            return SORT_ALIASES.get(value, value)
        return value

    @field_validator("category", "level", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_empty(self) -> bool:
        """True when no predicate is active."""
        return not self.search.strip() and not self.category and not self.level


class CoursePage(BaseModel):
    """One page of catalog results."""

    items: List[Course] = Field(default_factory=list)
    page: int = 1
    per_page: int = 4
    total: int = 0
    total_pages: int = 1

    @property
    def first_index(self) -> int:
        """1-based index of the first item shown, 0 when empty."""
        if self.total == 0:
            return 0
        return (self.page - 1) * self.per_page + 1

    @property
    def last_index(self) -> int:
        """1-based index of the last item shown."""
        return min(self.page * self.per_page, self.total)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
