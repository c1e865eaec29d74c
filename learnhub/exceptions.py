"""Custom exceptions for LearnHub.

This module defines a hierarchy of exceptions for handling
different error conditions in the client.
"""

from typing import Optional


class LearnHubError(Exception):
    """Base exception for all LearnHub errors."""

    pass


class ConfigurationError(LearnHubError):
    """Raised when configuration is invalid or missing."""

    pass


class ApiError(LearnHubError):
    """Raised when a backend API call fails or reports failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DataError(LearnHubError):
    """Raised when backend data cannot be interpreted."""

    pass


class CourseNotFoundError(DataError):
    """Raised when a requested course is not found."""

    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__(f"Course not found: {course_id}")


class LectureNotFoundError(DataError):
    """Raised when a lecture is not part of the current course."""

    def __init__(self, lecture_id: str):
        self.lecture_id = lecture_id
        super().__init__(f"Lecture not found: {lecture_id}")
