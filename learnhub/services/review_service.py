"""Review service for course rating summaries."""

from typing import List

from learnhub.models import RatingBucket, RatingSummary, Review


def summarize_reviews(reviews: List[Review]) -> RatingSummary:
    """Summarize reviews into an average and a 5..1 star distribution.

    Args:
        reviews: Course reviews

    Returns:
        RatingSummary; averages and percentages are 0 when there are no reviews
    """
    total = len(reviews)
    average = sum(review.rating for review in reviews) / total if total else 0.0

    distribution = []
    for stars in (5, 4, 3, 2, 1):
        count = sum(1 for review in reviews if review.rating == stars)
        share = count / total * 100 if total else 0.0
        distribution.append(RatingBucket(stars=stars, count=count, percentage=share))

    return RatingSummary(average=average, total=total, distribution=distribution)


def has_reviewed(reviews: List[Review], user_id: str) -> bool:
    """Whether a user already left a review."""
    return any(review.user.id == user_id for review in reviews)
