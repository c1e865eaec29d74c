import pytest

from learnhub.data import parse_reviews
from learnhub.services import has_reviewed, summarize_reviews


@pytest.fixture
def reviews():
    return parse_reviews([
        {"_id": "r1", "user": {"_id": "u1", "name": "Ada"}, "rating": 5, "comment": "Great"},
        {"_id": "r2", "user": {"_id": "u2", "name": "Linus"}, "rating": 5},
        {"_id": "r3", "user": {"_id": "u3", "name": "Grace"}, "rating": 4},
        {"_id": "r4", "user": {"_id": "u4", "name": "Alan"}, "rating": 1},
    ])


def test_summarize_reviews(reviews):
    summary = summarize_reviews(reviews)

    assert summary.average == pytest.approx(3.75)
    assert summary.total == 4
    assert [b.stars for b in summary.distribution] == [5, 4, 3, 2, 1]
    assert [b.count for b in summary.distribution] == [2, 1, 0, 0, 1]
    assert [b.percentage for b in summary.distribution] == [50.0, 25.0, 0.0, 0.0, 25.0]


def test_summarize_no_reviews():
    summary = summarize_reviews([])

    assert summary.average == 0
    assert summary.total == 0
    assert len(summary.distribution) == 5
    assert all(b.count == 0 and b.percentage == 0 for b in summary.distribution)


def test_has_reviewed(reviews):
    assert has_reviewed(reviews, "u3")
    assert not has_reviewed(reviews, "u9")
