"""Lecture note model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Note(BaseModel):
    """A private note a student keeps on a course.

    Attributes:
        timestamp: Free-form video position the note refers to, e.g. "4:32"
    """

    id: str = Field(default="", alias="_id")
    content: str = ""
    timestamp: str = Field(default="", alias="timeStamp")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    class Config:
        populate_by_name = True
