# coffeechat/services/reviews.py
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from coffeechat.core.config import settings
from coffeechat.core.errors import Conflict, Forbidden, InvalidInput, NotFound
from coffeechat.core.logging import get_logger
from coffeechat.db.base import atomic
from coffeechat.db.models.review import Review
from coffeechat.db.models.user import User
from coffeechat.schemas.common import Pagination
from coffeechat.schemas.review import RatingBucket
from coffeechat.services.pagination import build_pagination, clamp_limit, page_offset
from coffeechat.services.ratings import lock_user, rating_distribution, recompute_rating

log = get_logger(__name__)


def _validate(rating: int, feedback: Optional[str]) -> None:
    if not isinstance(rating, int) or isinstance(rating, bool) or not 1 <= rating <= 5:
        raise InvalidInput("Rating must be an integer between 1 and 5")
    if feedback is not None and len(feedback) > settings.FEEDBACK_MAX_LENGTH:
        raise InvalidInput(f"Feedback must be less than {settings.FEEDBACK_MAX_LENGTH} characters")


def create_review(
    db: Session, reviewer_id: str, reviewee_id: str, rating: int, feedback: Optional[str] = None
) -> Review:
    if reviewer_id == reviewee_id:
        raise InvalidInput("Cannot review yourself")
    _validate(rating, feedback)

    with atomic(db):
        if not lock_user(db, reviewee_id):
            raise NotFound("User not found")

        review = Review(
            reviewer_id=reviewer_id,
            reviewee_id=reviewee_id,
            rating=rating,
            feedback=feedback,
        )
        db.add(review)
        # the unique constraint decides duplicates; no read-then-insert
        try:
            db.flush()
        except IntegrityError as exc:
            raise Conflict("You have already reviewed this user") from exc

        recompute_rating(db, reviewee_id)

    db.refresh(review)
    log.info("review_created", review_id=review.id, reviewer_id=reviewer_id, reviewee_id=reviewee_id)
    return review


def update_review(
    db: Session, review_id: int, requester_id: str, rating: int, feedback: Optional[str] = None
) -> Review:
    """
    Change rating/feedback of an existing review. Only its author may do so;
    reviewer and reviewee never change.
    """
    _validate(rating, feedback)

    with atomic(db):
        review = db.query(Review).filter(Review.id == review_id).first()
        if not review:
            raise NotFound("Review not found")
        if review.reviewer_id != requester_id:
            raise Forbidden("Can only update your own reviews")

        lock_user(db, review.reviewee_id)

        review.rating = rating
        review.feedback = feedback
        db.flush()

        recompute_rating(db, review.reviewee_id)

    db.refresh(review)
    log.info("review_updated", review_id=review.id, reviewer_id=requester_id, reviewee_id=review.reviewee_id)
    return review


def list_reviews(
    db: Session, user_id: str, page: int = 1, limit: int = settings.REVIEWS_DEFAULT_LIMIT
) -> Tuple[List[Review], List[RatingBucket], User, Pagination]:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")

    limit = clamp_limit(limit, settings.REVIEWS_MAX_LIMIT)
    offset = page_offset(page, limit)

    q = db.query(Review).filter(Review.reviewee_id == user_id)
    total = q.count()
    reviews = q.order_by(Review.created_at.desc(), Review.id.desc()).offset(offset).limit(limit).all()

    return reviews, rating_distribution(db, user_id), user, build_pagination(page, limit, total)
