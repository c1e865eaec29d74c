"""Course data access helpers.

This module turns backend payloads into models and loads offline catalog
files, with a small in-memory cache for the latter.
"""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from pydantic import ValidationError

from learnhub.exceptions import DataError
from learnhub.models import (
    CartLineItem,
    Course,
    EnrollmentRecord,
    InstructorProfile,
    Note,
    Review,
)

logger = logging.getLogger(__name__)

# In-memory cache for loaded catalog files
_catalog_cache: Dict[str, List[Course]] = {}


# =============================================================================
# Parsing Utilities
# =============================================================================

def parse_number(value: Any) -> int:
    """Parse number from values like 12345, '12,345' or '1.2K'.

    Args:
        value: Raw number value

    Returns:
        Parsed integer value, 0 if parsing fails
    """
    if value is None or value == "":
        return 0
    value = str(value).strip().replace(",", "")
    multiplier = 1
    if value.upper().endswith("K"):
        value, multiplier = value[:-1], 1000
    elif value.upper().endswith("M"):
        value, multiplier = value[:-1], 1000000
    try:
        return int(float(value) * multiplier)
    except (ValueError, TypeError, OverflowError):
        return 0


def parse_price(value: Any) -> float:
    """Parse price from values like 12.99, '$1,299.99' or 'Free'.

    Negative amounts are clamped to 0.

    Args:
        value: Raw price value

    Returns:
        Price as float, 0.0 for free or invalid
    """
    if value is None or value == "":
        return 0.0
    if isinstance(value, (int, float)):
        return max(0.0, float(value))
    value = str(value).strip().lower().replace(",", "").replace("$", "")
    if value == "free":
        return 0.0
    match = re.search(r"-?\d*\.?\d+", value)
    if match:
        try:
            return max(0.0, float(match.group()))
        except ValueError:
            return 0.0
    return 0.0


# =============================================================================
# Payload conversion
# =============================================================================

def parse_course(payload: Dict[str, Any]) -> Course:
    """Validate a course document.

    Raises:
        DataError: If the document does not describe a course
    """
    if not isinstance(payload, dict):
        raise DataError(f"Expected a course object, got {type(payload).__name__}")

    payload = dict(payload)
    # Instructor profiles embed courses with their own count keys
    for key, fallback in (("studentsCount", "studentsEnrolled"), ("reviewsCount", "totalRatings")):
        if key not in payload and fallback in payload:
            payload[key] = payload[fallback]
    for key in ("price", "originalPrice"):
        if isinstance(payload.get(key), str):
            payload[key] = parse_price(payload[key])
    for key in ("studentsCount", "reviewsCount"):
        if isinstance(payload.get(key), str):
            payload[key] = parse_number(payload[key])

    try:
        return Course.model_validate(payload)
    except ValidationError as e:
        raise DataError(f"Invalid course data: {e}") from e


def parse_courses(payloads: Optional[List[Dict[str, Any]]]) -> List[Course]:
    """Validate a list of course documents.

    Entries that fail validation are logged and skipped so one bad document
    does not blank the catalog.
    """
    courses = []
    for payload in payloads or []:
        try:
            courses.append(parse_course(payload))
        except DataError as e:
            logger.warning(f"Skipping course entry: {e}")
    return courses


def parse_cart(payloads: Optional[List[Dict[str, Any]]]) -> List[CartLineItem]:
    """Validate cart entries; entries without a course are skipped."""
    items = []
    for payload in payloads or []:
        if not isinstance(payload, dict) or not isinstance(payload.get("course"), dict):
            logger.warning("Skipping cart entry without course data")
            continue
        try:
            items.append(CartLineItem.model_validate(payload))
        except ValidationError as e:
            logger.warning(f"Skipping cart entry: {e}")
    return items


def _lecture_ref(value: Any) -> str:
    if isinstance(value, dict):
        return str(value.get("_id") or value.get("id") or "")
    return str(value)


def parse_enrollments(payloads: Optional[List[Dict[str, Any]]]) -> List[EnrollmentRecord]:
    """Build enrollment records from progress entries.

    Each entry carries a ``course`` document and ``completedLectures`` given
    as ids or lecture objects. Duplicate courses keep the first entry.
    """
    records = []
    seen: Set[str] = set()
    for payload in payloads or []:
        if not isinstance(payload, dict) or not isinstance(payload.get("course"), dict):
            logger.warning("Skipping enrollment entry without course data")
            continue
        try:
            course = parse_course(payload["course"])
        except DataError as e:
            logger.warning(f"Skipping enrollment entry: {e}")
            continue
        if course.id in seen:
            continue
        seen.add(course.id)

        completed = {_lecture_ref(ref) for ref in payload.get("completedLectures") or []}
        completed.discard("")
        records.append(
            EnrollmentRecord(
                course=course,
                completed_lecture_ids=completed,
                last_accessed=_parse_timestamp(payload.get("lastAccessed")),
            )
        )
    return records


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_reviews(payloads: Optional[List[Dict[str, Any]]]) -> List[Review]:
    """Validate review entries, skipping malformed ones."""
    reviews = []
    for payload in payloads or []:
        try:
            reviews.append(Review.model_validate(payload))
        except ValidationError as e:
            logger.warning(f"Skipping review entry: {e}")
    return reviews


def parse_notes(payloads: Optional[List[Dict[str, Any]]]) -> List[Note]:
    notes = []
    for payload in payloads or []:
        try:
            notes.append(Note.model_validate(payload))
        except ValidationError as e:
            logger.warning(f"Skipping note entry: {e}")
    return notes


def parse_instructor(payload: Dict[str, Any]) -> InstructorProfile:
    """Validate a public instructor profile.

    Courses in ``createdCourses`` go through the same loose parsing as
    catalog entries; malformed ones are skipped.

    Raises:
        DataError: If the document does not describe an instructor
    """
    if not isinstance(payload, dict):
        raise DataError(f"Expected an instructor object, got {type(payload).__name__}")

    payload = dict(payload)
    payload["createdCourses"] = parse_courses(payload.get("createdCourses"))
    try:
        return InstructorProfile.model_validate(payload)
    except ValidationError as e:
        raise DataError(f"Invalid instructor data: {e}") from e


# =============================================================================
# Catalog files
# =============================================================================

def load_catalog(file_path: Path) -> List[Course]:
    """Load an offline course catalog from a JSON file with caching.

    The file holds either a list of course documents or an object with a
    ``courses`` list, the shape the listing endpoint returns.

    Args:
        file_path: Path to JSON file

    Returns:
        List of courses

    Raises:
        DataError: If the file is missing or not valid JSON
    """
    key = str(file_path)
    if key in _catalog_cache:
        return _catalog_cache[key]

    if not file_path.exists():
        raise DataError(f"Catalog file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DataError(f"Invalid catalog file {file_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("courses", [])

    courses = parse_courses(data)
    _catalog_cache[key] = courses
    logger.info(f"Loaded {len(courses)} courses from {file_path}")
    return courses


def clear_cache() -> None:
    """Clear the catalog cache."""
    _catalog_cache.clear()
    logger.info("Catalog cache cleared")


def get_cache_stats() -> Dict[str, int]:
    """Get cache statistics.

    Returns:
        Dictionary with cache stats
    """
    return {
        "cached_catalogs": len(_catalog_cache),
        "cached_courses": sum(len(courses) for courses in _catalog_cache.values()),
    }
