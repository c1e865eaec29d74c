"""
Pytest configuration and fixtures for LearnHub tests
"""

import copy
from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

from learnhub.config import settings
from learnhub.data import clear_cache, parse_courses
from learnhub.services import LearnHubClient


def _lecture(lecture_id: str, duration: int, title: str = "") -> Dict[str, Any]:
    return {
        "_id": lecture_id,
        "title": title or f"Lecture {lecture_id}",
        "type": "Video",
        "video": f"https://cdn.example.com/{lecture_id}.mp4",
        "duration": duration,
    }


COURSE_PAYLOADS: List[Dict[str, Any]] = [
    {
        "_id": "c1",
        "title": "React Fundamentals",
        "description": "Learn React hooks and components",
        "category": "Web Development",
        "level": "Beginner",
        "price": 19.99,
        "originalPrice": 49.99,
        "instructor": {"_id": "i1", "name": "Grace Hopper"},
        "sections": [
            {
                "_id": "c1-s1",
                "title": "Getting Started",
                "lectures": [_lecture("c1-l1", 300), _lecture("c1-l2", 600)],
            },
            {"_id": "c1-s2", "title": "State", "lectures": [_lecture("c1-l3", 900)]},
        ],
        "totalDuration": 1800,
        "studentsCount": 500,
        "rating": 4.5,
        "reviewsCount": 40,
        "createdAt": "2024-03-01T00:00:00Z",
    },
    {
        "_id": "c2",
        "title": "Python for Data Science",
        "description": "pandas and numpy from scratch",
        "category": "Data Science",
        "level": "Intermediate",
        "price": 29.99,
        "sections": [
            {
                "_id": "c2-s1",
                "title": "Basics",
                "lectures": [_lecture(f"c2-l{i}", 600) for i in range(1, 5)],
            },
        ],
        "totalDuration": 2400,
        "studentsCount": 1200,
        "rating": 4.8,
        "reviewsCount": 210,
        "createdAt": "2024-01-15T00:00:00Z",
    },
    {
        "_id": "c3",
        "title": "Advanced React Patterns",
        "description": "Render props, compound components and hooks",
        "category": "Web Development",
        "level": "Advanced",
        "price": 9.99,
        "originalPrice": 19.99,
        "sections": [
            {"_id": "c3-s1", "title": "Patterns", "lectures": [_lecture("c3-l1", 1200)]},
        ],
        "totalDuration": 1200,
        "studentsCount": 300,
    },
    {
        "_id": "c4",
        "title": "Machine Learning A-Z",
        "description": "Regression, classification and clustering",
        "category": "Machine Learning",
        "level": "Beginner",
        "price": 49.99,
        "sections": [
            {
                "_id": "c4-s1",
                "title": "Regression",
                "lectures": [_lecture("c4-l1", 1800), _lecture("c4-l2", 1800)],
            },
        ],
        "totalDuration": 3600,
        "studentsCount": 1200,
        "rating": 4.2,
        "reviewsCount": 95,
        "createdAt": "2024-06-01T00:00:00Z",
    },
    {
        "_id": "c5",
        "title": "Photography Basics",
        "description": "Cameras, light and composition",
        "category": "Photography",
        "level": "Beginner",
        "price": 0,
        "sections": [],
        "studentsCount": 50,
        "rating": 3.9,
        "reviewsCount": 4,
        "createdAt": "2023-12-01T00:00:00Z",
    },
]


@pytest.fixture
def course_payloads() -> List[Dict[str, Any]]:
    """Raw course documents as the backend serves them"""
    return copy.deepcopy(COURSE_PAYLOADS)


@pytest.fixture
def courses(course_payloads):
    """Validated sample courses c1..c5"""
    return parse_courses(course_payloads)


@pytest.fixture
def course_by_id(courses):
    return {course.id: course for course in courses}


@pytest.fixture(autouse=True)
def fast_retries(monkeypatch):
    """Disable retry backoff so transport failures fail fast"""
    monkeypatch.setattr(settings.api, "retry_delay", 0.0)


@pytest.fixture(autouse=True)
def reset_catalog_cache():
    clear_cache()
    yield
    clear_cache()


Route = Tuple[str, str]


class FakeBackend:
    """Routes requests by (method, path) to canned JSON responses.

    A route value is either ``(status, body)`` or a callable taking the
    request and returning an ``httpx.Response``. Unrouted requests get a 404.
    """

    def __init__(self, routes: Dict[Route, Any] = None):
        self.routes: Dict[Route, Any] = dict(routes or {})
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def make_client(backend) -> Callable[[], LearnHubClient]:
    """Build a client wired to the fake backend"""
    def _make() -> LearnHubClient:
        return LearnHubClient(base_url="http://test", transport=httpx.MockTransport(backend))
    return _make
