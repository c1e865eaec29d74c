"""HTTP client for the LearnHub backend API.

This module wraps ``httpx.AsyncClient`` with the backend's response envelope
(``success`` / ``message``), retry on transport failures, and conversion of
payloads into models.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
from langsmith import traceable

from learnhub.config import settings
from learnhub.data import (
    parse_cart,
    parse_course,
    parse_courses,
    parse_enrollments,
    parse_instructor,
    parse_notes,
    parse_reviews,
)
from learnhub.exceptions import ApiError, CourseNotFoundError
from learnhub.models import (
    CartLineItem,
    Course,
    CourseFilters,
    CoursePage,
    EnrollmentRecord,
    InstructorProfile,
    Note,
    Review,
)
from learnhub.utils import build_query_params

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class LearnHubClient:
    """Async client for the LearnHub REST API.

    Session cookies are kept by the underlying client, so calls made after
    the backend sets its auth cookie are authenticated.

    Example:
        ```python
        async with LearnHubClient() as client:
            page = await client.list_courses(CourseFilters(search="react"))
        ```
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cookies: Optional[Dict[str, str]] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Backend URL, defaults to the configured one
            timeout: Request timeout in seconds
            transport: Custom transport (used by tests)
            cookies: Initial cookies, e.g. an existing session
        """
        self._api_settings = settings.api
        self._client = httpx.AsyncClient(
            base_url=base_url or self._api_settings.base_url,
            timeout=timeout or self._api_settings.timeout,
            transport=transport,
            cookies=cookies,
        )

    async def __aenter__(self) -> "LearnHubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    @traceable(name="api_request", run_type="tool")
    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request and unwrap the response envelope.

        Args:
            method: HTTP method
            path: Path below the API prefix
            params: Query parameters
            json: JSON body

        Returns:
            Decoded response body

        Raises:
            ApiError: On transport failure after retries, HTTP error status,
                or ``success: false``
        """
        url = f"{API_PREFIX}{path}"
        max_retries = self._api_settings.max_retries

        response = None
        last_error: Optional[Exception] = None
        for attempt in range(max_retries):
            try:
                response = await self._client.request(method, url, params=params, json=json)
                break
            except httpx.TransportError as e:
                last_error = e
                logger.warning(f"{method} {url} failed (attempt {attempt + 1}): {e}")
                if attempt < max_retries - 1:
                    await asyncio.sleep(self._api_settings.retry_delay * (attempt + 1))

        if response is None:
            logger.error(f"All attempts failed for {method} {url}: {last_error}")
            raise ApiError(f"Could not reach LearnHub backend: {last_error}")

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {"data": data}

        if response.is_error:
            message = data.get("message") or f"Request failed with status {response.status_code}"
            logger.error(f"{method} {url} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        if data.get("success") is False:
            message = data.get("message") or "Request was not successful"
            logger.error(f"{method} {url} reported failure: {message}")
            raise ApiError(message, status_code=response.status_code)

        return data

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    async def fetch_user(self) -> Optional[Dict[str, Any]]:
        """Get the authenticated user, None when not logged in."""
        data = await self._request("GET", "/users/user-authenticated")
        return data.get("user")

    async def list_enrollments(self) -> List[EnrollmentRecord]:
        """Get the student's enrolled courses with completed lectures."""
        data = await self._request("GET", "/users/enrolled-courses")
        return parse_enrollments(data.get("enrolledCourses"))

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    async def list_courses(
        self,
        filters: Optional[CourseFilters] = None,
        page: int = 1,
        per_page: Optional[int] = None,
    ) -> CoursePage:
        """Fetch one page of the course catalog.

        Args:
            filters: Search, category, level and sort criteria
            page: 1-based page number
            per_page: Page size, defaults to the catalog setting

        Returns:
            CoursePage from the backend
        """
        per_page = per_page or settings.catalog.per_page
        params = build_query_params(filters or CourseFilters(), page, per_page)
        data = await self._request("GET", "/course/all", params=params)

        courses = parse_courses(data.get("courses"))
        return CoursePage(
            items=courses,
            page=page,
            per_page=per_page,
            total=int(data.get("totalCourses") or len(courses)),
            total_pages=max(1, int(data.get("totalPages") or 1)),
        )

    async def get_course(self, course_id: str) -> Course:
        """Fetch a full course with sections and lectures.

        Raises:
            CourseNotFoundError: If the backend returns no course
        """
        data = await self._request("GET", f"/course/c/{course_id}")
        payload = data.get("course")
        if not payload:
            raise CourseNotFoundError(course_id)
        return parse_course(payload)

    async def mark_lecture(self, course_id: str, lecture_id: str, is_completed: bool) -> Dict[str, Any]:
        """Record a lecture as completed or not completed."""
        return await self._request(
            "POST",
            f"/course/{course_id}/lecture/{lecture_id}/complete",
            json={"isCompleted": is_completed},
        )

    # -------------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------------

    async def get_cart(self) -> List[CartLineItem]:
        data = await self._request("GET", "/users/cart/get")
        return parse_cart(data.get("cart"))

    async def add_to_cart(self, course_id: str) -> Dict[str, Any]:
        return await self._request("POST", "/users/cart/add", json={"courseId": course_id})

    async def remove_from_cart(self, course_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/users/cart/delete/{course_id}")

    # -------------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------------

    async def list_reviews(self, course_id: str) -> List[Review]:
        data = await self._request("GET", f"/review/course/review/{course_id}")
        return parse_reviews(data.get("reviews"))

    async def add_review(self, course_id: str, rating: int, comment: str) -> Dict[str, Any]:
        """Post a review for a course."""
        return await self._request(
            "POST",
            f"/review/course/review/{course_id}",
            json={"rating": rating, "comment": comment},
        )

    async def delete_review(self, course_id: str, review_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/review/course/{course_id}/review/{review_id}")

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    async def list_notes(self, course_id: str) -> List[Note]:
        data = await self._request("GET", f"/note/{course_id}/notes")
        return parse_notes(data.get("notes"))

    async def add_note(self, course_id: str, content: str, timestamp: str = "") -> Optional[Note]:
        """Save a note on a course.

        Returns:
            The stored note, or None if the backend did not echo it back
        """
        data = await self._request(
            "POST",
            f"/note/{course_id}/add",
            json={"content": content, "timeStamp": timestamp},
        )
        notes = parse_notes([data["note"]] if data.get("note") else [])
        return notes[0] if notes else None

    async def delete_note(self, course_id: str, note_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/note/{course_id}/{note_id}")

    # -------------------------------------------------------------------------
    # Instructors
    # -------------------------------------------------------------------------

    async def get_instructor(self, instructor_id: str) -> InstructorProfile:
        """Fetch a public instructor profile with their courses.

        Raises:
            ApiError: If the backend returns no instructor
        """
        data = await self._request("GET", f"/instructor/get/instructor/{instructor_id}")
        payload = data.get("instructor")
        if not payload:
            raise ApiError(f"Instructor not found: {instructor_id}", status_code=404)
        return parse_instructor(payload)

    async def list_instructor_courses(self) -> List[Course]:
        """Courses created by the authenticated instructor."""
        data = await self._request("GET", "/instructor/courses")
        return parse_courses(data.get("courses"))
