# coffeechat/api/routes/review.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from coffeechat.core.config import settings
from coffeechat.core.security import get_current_user
from coffeechat.db.base import get_db
from coffeechat.db.models.user import User
from coffeechat.schemas.review import ReviewCreate, ReviewList, ReviewResponse, ReviewUpdate
from coffeechat.schemas.user import RatingSummary
from coffeechat.services.reviews import create_review, list_reviews, update_review

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


# Create review; the reviewee's rating aggregate is refreshed in the same transaction
@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def post_review(
    review_in: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return create_review(db, current_user.id, review_in.reviewee_id, review_in.rating, review_in.feedback)


# Reviews for a user (public), newest first
@router.get("/user/{user_id}", response_model=ReviewList)
def user_reviews(
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.REVIEWS_DEFAULT_LIMIT),
    db: Session = Depends(get_db),
):
    reviews, distribution, user, pagination = list_reviews(db, user_id, page, limit)
    return ReviewList(
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
        rating_distribution=distribution,
        # rounded for display only; the stored value keeps full precision
        summary=RatingSummary(
            average_rating=round(user.average_rating or 0.0, 2),
            total_reviews=user.total_reviews or 0,
        ),
        pagination=pagination,
    )


# Update own review
@router.put("/{review_id}", response_model=ReviewResponse)
def put_review(
    review_id: int,
    review_in: ReviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return update_review(db, review_id, current_user.id, review_in.rating, review_in.feedback)
