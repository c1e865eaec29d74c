"""Course review models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ReviewAuthor(BaseModel):
    id: str = Field(default="", alias="_id")
    name: str = ""
    avatar: Optional[str] = None

    class Config:
        populate_by_name = True


class Review(BaseModel):
    """A student's review of a course."""

    id: str = Field(default="", alias="_id")
    user: ReviewAuthor = Field(default_factory=ReviewAuthor)
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    helpful: int = 0

    class Config:
        populate_by_name = True


@dataclass
class RatingBucket:
    """Share of reviews with a given star count."""

    stars: int
    count: int = 0
    percentage: float = 0.0


@dataclass
class RatingSummary:
    """Average rating and 5..1 star distribution."""

    average: float = 0.0
    total: int = 0
    distribution: List[RatingBucket] = field(default_factory=list)
