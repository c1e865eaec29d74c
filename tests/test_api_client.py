import json

import httpx
import pytest

from learnhub.config import settings
from learnhub.exceptions import ApiError, CourseNotFoundError
from learnhub.models import CourseFilters


@pytest.mark.asyncio
async def test_list_courses_sends_filters_and_builds_page(backend, make_client, course_payloads):
    backend.routes[("GET", "/api/v1/course/all")] = (
        200,
        {"success": True, "courses": [course_payloads[0]], "totalCourses": 5, "totalPages": 2},
    )

    async with make_client() as client:
        page = await client.list_courses(CourseFilters(search="react", sort="price-low"), page=2, per_page=4)

    params = backend.requests[0].url.params
    assert params["page"] == "2"
    assert params["limit"] == "4"
    assert params["search"] == "react"
    assert params["sort"] == "price-low"
    assert "category" not in params

    assert [c.id for c in page.items] == ["c1"]
    assert page.total == 5
    assert page.total_pages == 2
    assert page.has_previous
    assert not page.has_next


@pytest.mark.asyncio
async def test_get_course(backend, make_client, course_payloads):
    backend.routes[("GET", "/api/v1/course/c/c1")] = (200, {"success": True, "course": course_payloads[0]})

    async with make_client() as client:
        course = await client.get_course("c1")

    assert course.title == "React Fundamentals"
    assert course.lecture_count == 3


@pytest.mark.asyncio
async def test_get_course_without_document(backend, make_client):
    backend.routes[("GET", "/api/v1/course/c/zz")] = (200, {"success": True, "course": None})

    async with make_client() as client:
        with pytest.raises(CourseNotFoundError):
            await client.get_course("zz")


@pytest.mark.asyncio
async def test_success_false_raises_with_backend_message(backend, make_client):
    backend.routes[("POST", "/api/v1/users/cart/add")] = (
        200,
        {"success": False, "message": "Course already in cart"},
    )

    async with make_client() as client:
        with pytest.raises(ApiError) as exc_info:
            await client.add_to_cart("c1")

    assert exc_info.value.message == "Course already in cart"
    assert json.loads(backend.requests[0].content) == {"courseId": "c1"}


@pytest.mark.asyncio
async def test_http_error_status(backend, make_client):
    backend.routes[("GET", "/api/v1/users/cart/get")] = (401, {"success": False, "message": "Unauthorized"})
    backend.routes[("GET", "/api/v1/review/course/review/c1")] = lambda request: httpx.Response(
        502, text="Bad gateway"
    )

    async with make_client() as client:
        with pytest.raises(ApiError) as unauthorized:
            await client.get_cart()
        with pytest.raises(ApiError) as gateway:
            await client.list_reviews("c1")

    assert unauthorized.value.status_code == 401
    assert str(unauthorized.value) == "Unauthorized"
    assert gateway.value.status_code == 502
    assert gateway.value.message == "Request failed with status 502"


@pytest.mark.asyncio
async def test_transport_errors_are_retried_then_raised(backend, make_client):
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    backend.routes[("GET", "/api/v1/users/user-authenticated")] = unreachable

    async with make_client() as client:
        with pytest.raises(ApiError) as exc_info:
            await client.fetch_user()

    assert len(backend.requests) == settings.api.max_retries
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_transport_error_then_success(backend, make_client):
    attempts = []

    def flaky(request):
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(200, json={"success": True, "user": {"_id": "u1", "name": "Ada"}})

    backend.routes[("GET", "/api/v1/users/user-authenticated")] = flaky

    async with make_client() as client:
        user = await client.fetch_user()

    assert user["name"] == "Ada"
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_mark_lecture(backend, make_client):
    path = "/api/v1/course/c1/lecture/c1-l2/complete"
    backend.routes[("POST", path)] = (200, {"success": True, "message": "Lecture updated"})

    async with make_client() as client:
        response = await client.mark_lecture("c1", "c1-l2", True)

    assert response["message"] == "Lecture updated"
    assert json.loads(backend.calls("POST", path)[0].content) == {"isCompleted": True}


@pytest.mark.asyncio
async def test_cart_and_enrollments(backend, make_client, course_payloads):
    backend.routes[("GET", "/api/v1/users/cart/get")] = (
        200,
        {"success": True, "cart": [{"_id": "i1", "course": course_payloads[1]}]},
    )
    backend.routes[("GET", "/api/v1/users/enrolled-courses")] = (
        200,
        {"success": True, "enrolledCourses": [{"course": course_payloads[0], "completedLectures": ["c1-l1"]}]},
    )
    backend.routes[("DELETE", "/api/v1/users/cart/delete/c2")] = (
        200,
        {"success": True, "message": "Course removed from cart"},
    )

    async with make_client() as client:
        cart = await client.get_cart()
        enrollments = await client.list_enrollments()
        removed = await client.remove_from_cart("c2")

    assert [item.course.id for item in cart] == ["c2"]
    assert enrollments[0].completed_lecture_ids == {"c1-l1"}
    assert removed["message"] == "Course removed from cart"


@pytest.mark.asyncio
async def test_reviews(backend, make_client):
    path = "/api/v1/review/course/review/c1"
    backend.routes[("GET", path)] = (
        200,
        {"success": True, "reviews": [{"_id": "r1", "rating": 5}, {"_id": "r2", "rating": 3}]},
    )
    backend.routes[("POST", path)] = (201, {"success": True, "message": "Review added"})

    async with make_client() as client:
        reviews = await client.list_reviews("c1")
        await client.add_review("c1", 4, "Clear and practical")

    assert [r.rating for r in reviews] == [5, 3]
    assert json.loads(backend.calls("POST", path)[0].content) == {
        "rating": 4,
        "comment": "Clear and practical",
    }


@pytest.mark.asyncio
async def test_delete_review(backend, make_client):
    path = "/api/v1/review/course/c1/review/r9"
    backend.routes[("DELETE", path)] = (200, {"success": True, "message": "Review deleted"})

    async with make_client() as client:
        response = await client.delete_review("c1", "r9")

    assert response["message"] == "Review deleted"
    assert len(backend.calls("DELETE", path)) == 1


@pytest.mark.asyncio
async def test_notes(backend, make_client):
    backend.routes[("GET", "/api/v1/note/c1/notes")] = (
        200,
        {"success": True, "notes": [{"_id": "n1", "content": "Hooks run in order", "timeStamp": "2:10"}]},
    )
    backend.routes[("POST", "/api/v1/note/c1/add")] = (
        201,
        {"success": True, "note": {"_id": "n2", "content": "Keys matter", "timeStamp": "5:00"}},
    )
    backend.routes[("DELETE", "/api/v1/note/c1/n1")] = (200, {"success": True})

    async with make_client() as client:
        notes = await client.list_notes("c1")
        added = await client.add_note("c1", "Keys matter", "5:00")
        await client.delete_note("c1", "n1")

    assert [(n.id, n.timestamp) for n in notes] == [("n1", "2:10")]
    assert added.id == "n2"
    assert json.loads(backend.calls("POST", "/api/v1/note/c1/add")[0].content) == {
        "content": "Keys matter",
        "timeStamp": "5:00",
    }
    assert backend.calls("DELETE", "/api/v1/note/c1/n1")


@pytest.mark.asyncio
async def test_add_note_without_echo(backend, make_client):
    backend.routes[("POST", "/api/v1/note/c1/add")] = (201, {"success": True, "message": "Note added"})

    async with make_client() as client:
        assert await client.add_note("c1", "Keys matter") is None


@pytest.mark.asyncio
async def test_get_instructor(backend, make_client, course_payloads):
    backend.routes[("GET", "/api/v1/instructor/get/instructor/i1")] = (
        200,
        {
            "success": True,
            "instructor": {
                "_id": "i1",
                "name": "Grace Hopper",
                "createdCourses": [course_payloads[0]],
                "totalStudents": 500,
                "totalCourses": 1,
                "averageRating": 4.5,
            },
        },
    )
    backend.routes[("GET", "/api/v1/instructor/get/instructor/zz")] = (200, {"success": True})

    async with make_client() as client:
        profile = await client.get_instructor("i1")
        with pytest.raises(ApiError) as exc_info:
            await client.get_instructor("zz")

    assert profile.name == "Grace Hopper"
    assert [c.id for c in profile.created_courses] == ["c1"]
    assert profile.total_students == 500
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_instructor_courses(backend, make_client, course_payloads):
    backend.routes[("GET", "/api/v1/instructor/courses")] = (
        200,
        {"success": True, "courses": course_payloads[:2]},
    )

    async with make_client() as client:
        courses = await client.list_instructor_courses()

    assert [c.id for c in courses] == ["c1", "c2"]
