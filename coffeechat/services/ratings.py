# coffeechat/services/ratings.py
"""
Rating aggregate kept on the user row.

users.average_rating / users.total_reviews are a denormalized copy of the
reviews table. They are recomputed from every review of the reviewee on
each ledger write, inside the caller's transaction, rather than adjusted
incrementally, so the stored pair never drifts from its source rows.
"""
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from coffeechat.core.errors import NotFound
from coffeechat.core.logging import get_logger
from coffeechat.db.models.review import Review
from coffeechat.db.models.user import User
from coffeechat.schemas.review import RatingBucket

log = get_logger(__name__)

RATING_VALUES = range(1, 6)


def lock_user(db: Session, user_id: str) -> User | None:
    """
    Load a user row with a row lock held until the transaction ends.
    Review writers for the same reviewee serialize on this lock.
    """
    return db.query(User).filter(User.id == user_id).with_for_update().first()


def recompute_rating(db: Session, reviewee_id: str) -> Tuple[float, int]:
    """
    Recompute (average_rating, total_reviews) for a reviewee and write it
    onto their user row. Does not commit.
    """
    db.flush()

    avg, count = (
        db.query(func.avg(Review.rating), func.count(Review.id))
        .filter(Review.reviewee_id == reviewee_id)
        .one()
    )
    average = float(avg) if avg is not None else 0.0
    total = int(count or 0)

    user = db.query(User).filter(User.id == reviewee_id).first()
    if not user:
        raise NotFound("User not found")
    user.average_rating = average
    user.total_reviews = total
    db.flush()

    log.info("rating_recomputed", reviewee_id=reviewee_id, average_rating=average, total_reviews=total)
    return average, total


def rating_distribution(db: Session, user_id: str) -> List[RatingBucket]:
    """Dense histogram over ratings 1..5; missing values count 0."""
    rows = (
        db.query(Review.rating, func.count(Review.id))
        .filter(Review.reviewee_id == user_id)
        .group_by(Review.rating)
        .all()
    )
    counts = {rating: count for rating, count in rows}
    return [RatingBucket(rating=value, count=counts.get(value, 0)) for value in RATING_VALUES]
