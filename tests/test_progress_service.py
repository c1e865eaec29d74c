from datetime import datetime, timezone

import pytest

from learnhub.models import Course, EnrollmentRecord
from learnhub.services import (
    calculate_progress,
    course_progress,
    lecture_states,
    percentage,
    set_lecture_completed,
    split_by_status,
    summarize_progress,
    toggle_lecture,
)


@pytest.mark.parametrize(
    "completed, total, expected",
    [
        (0, 0, 0),
        (3, 0, 0),
        (0, 4, 0),
        (3, 4, 75),
        (4, 4, 100),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (3, 8, 38),
        (199, 200, 100),
        (5, 4, 100),
    ],
)
def test_percentage(completed, total, expected):
    assert percentage(completed, total) == expected


def test_calculate_progress_counts_only_course_lectures(course_by_id):
    record = EnrollmentRecord(
        course=course_by_id["c1"],
        completed_lecture_ids={"c1-l1", "c2-l1", "unknown"},
    )
    assert record.completed_count == 1
    assert calculate_progress(record) == 33


def test_calculate_progress_with_explicit_total(course_by_id):
    record = EnrollmentRecord(course=course_by_id["c2"], completed_lecture_ids={"c2-l1", "c2-l2"})
    assert calculate_progress(record) == 50
    assert calculate_progress(record, total_lectures=0) == 0


def test_course_without_lectures_has_zero_progress(course_by_id):
    record = EnrollmentRecord(course=course_by_id["c5"], completed_lecture_ids={"x"})
    assert calculate_progress(record) == 0
    assert not record.is_completed


def test_course_progress(course_by_id):
    course = course_by_id["c1"]
    assert course_progress(course, []) == 0
    assert course_progress(course, ["c1-l1", "c1-l2", "c1-l3"]) == 100


def test_lecture_states_uses_flags_without_completion_set():
    course = Course.model_validate({
        "_id": "x",
        "title": "Flags",
        "sections": [{
            "_id": "s",
            "lectures": [
                {"_id": "a", "isCompleted": True},
                {"_id": "b", "isCompleted": False},
            ],
        }],
    })
    assert lecture_states(course) == {"a": True, "b": False}
    assert lecture_states(course, {"b"}) == {"a": False, "b": True}


def test_toggle_lecture_returns_new_set():
    original = {"a"}
    added = toggle_lecture(original, "b")
    removed = toggle_lecture(added, "a")

    assert original == {"a"}
    assert added == {"a", "b"}
    assert removed == {"b"}


def test_set_lecture_completed_is_idempotent():
    assert set_lecture_completed({"a"}, "a", True) == {"a"}
    assert set_lecture_completed({"a"}, "b", False) == {"a"}
    assert set_lecture_completed({"a"}, "a", False) == set()


def test_summarize_progress(course_by_id):
    c1, c2 = course_by_id["c1"], course_by_id["c2"]
    records = [
        EnrollmentRecord(course=c1, completed_lecture_ids={"c1-l1", "c1-l2", "c1-l3"}),
        EnrollmentRecord(course=c2, completed_lecture_ids={"c2-l1"}),
    ]

    summary = summarize_progress(records)

    assert summary.percentages == {"c1": 100, "c2": 25}
    assert summary.completed_courses == 1
    assert summary.in_progress_courses == 1
    assert summary.total_lectures == 7
    assert summary.completed_lectures == 4
    assert summary.total_seconds == 1800 + 2400


def test_rounded_hundred_is_not_completed():
    lectures = [{"_id": f"l{i}"} for i in range(200)]
    course = Course.model_validate({
        "_id": "big",
        "title": "Big",
        "sections": [{"_id": "s", "lectures": lectures}],
    })
    record = EnrollmentRecord(course=course, completed_lecture_ids={f"l{i}" for i in range(199)})

    assert calculate_progress(record) == 100
    assert not record.is_completed
    assert summarize_progress([record]).in_progress_courses == 1


def test_split_by_status(course_by_id):
    done = EnrollmentRecord(
        course=course_by_id["c3"],
        completed_lecture_ids={"c3-l1"},
        last_accessed=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    started = EnrollmentRecord(course=course_by_id["c1"])

    groups = split_by_status([done, started])
    assert groups["completed"] == [done]
    assert groups["in_progress"] == [started]
