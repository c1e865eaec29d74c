"""Progress service for lecture completion and course percentages.

All functions are pure: they read a snapshot of completion data and return
new values. Callers re-invoke them after completion state changes.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Set

from langsmith import traceable

from learnhub.models import Course, EnrollmentRecord, ProgressSummary

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(completed: int, total: int) -> int:
    """Integer completion percentage, clamped to 0-100.

    A total of zero yields 0 instead of dividing by zero.
    """
    if total <= 0:
        return 0
    value = _round_half_up(100 * completed / total)
    return max(0, min(100, value))


# =============================================================================
# Per-course progress
# =============================================================================

def calculate_progress(
    record: EnrollmentRecord,
    total_lectures: Optional[int] = None,
) -> int:
    """Compute the completion percentage of an enrollment.

    Only completed ids that belong to the course are counted. When
    ``total_lectures`` is given it overrides the course's own lecture count.

    Args:
        record: Enrollment snapshot
        total_lectures: Total lecture count of the course

    Returns:
        Percentage between 0 and 100
    """
    total = record.total_lectures if total_lectures is None else total_lectures
    return percentage(record.completed_count, total)


def course_progress(course: Course, completed_ids: Iterable[str]) -> int:
    """Completion percentage of a course for a set of completed lecture ids."""
    done = set(completed_ids).intersection(course.lecture_ids)
    return percentage(len(done), course.lecture_count)


def lecture_states(
    course: Course,
    completed_ids: Optional[Iterable[str]] = None,
) -> Dict[str, bool]:
    """Map each lecture id to its completion flag.

    When ``completed_ids`` is given, membership in it decides completion and
    the lecture's own ``is_completed`` flag is ignored.
    """
    if completed_ids is None:
        return {lecture.id: lecture.is_completed for lecture in course.lectures}
    done = set(completed_ids)
    return {lecture.id: lecture.id in done for lecture in course.lectures}


def toggle_lecture(completed_ids: Iterable[str], lecture_id: str) -> Set[str]:
    """Return a new completion set with one lecture flipped."""
    updated = set(completed_ids)
    if lecture_id in updated:
        updated.discard(lecture_id)
    else:
        updated.add(lecture_id)
    return updated


def set_lecture_completed(
    completed_ids: Iterable[str],
    lecture_id: str,
    is_completed: bool,
) -> Set[str]:
    """Return a new completion set with a lecture forced on or off."""
    updated = set(completed_ids)
    if is_completed:
        updated.add(lecture_id)
    else:
        updated.discard(lecture_id)
    return updated


# =============================================================================
# Aggregates
# =============================================================================

@traceable(name="summarize_progress", run_type="tool")
def summarize_progress(enrollments: List[EnrollmentRecord]) -> ProgressSummary:
    """Aggregate progress across enrollments for the dashboard.

    A course counts as completed when every lecture is done; every other
    enrollment, including untouched ones, counts as in progress.

    Args:
        enrollments: Enrollment records

    Returns:
        ProgressSummary with per-course percentages and counts
    """
    summary = ProgressSummary()

    for record in enrollments:
        course = record.course
        summary.percentages[course.id] = calculate_progress(record)
        summary.total_lectures += record.total_lectures
        summary.completed_lectures += record.completed_count
        summary.total_seconds += course.total_duration
        if record.is_completed:
            summary.completed_courses += 1
        else:
            summary.in_progress_courses += 1

    logger.debug(
        f"Progress: {summary.completed_courses} completed, "
        f"{summary.in_progress_courses} in progress"
    )
    return summary


def split_by_status(enrollments: List[EnrollmentRecord]) -> Dict[str, List[EnrollmentRecord]]:
    """Group enrollments into "in_progress" and "completed" tabs."""
    groups: Dict[str, List[EnrollmentRecord]] = {"in_progress": [], "completed": []}
    for record in enrollments:
        key = "completed" if record.is_completed else "in_progress"
        groups[key].append(record)
    return groups
