# coffeechat/schemas/review.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, conint

from coffeechat.core.config import settings
from coffeechat.schemas.common import CamelModel, Pagination
from coffeechat.schemas.user import RatingSummary, UserSummary


class ReviewUpdate(CamelModel):
    rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    feedback: Optional[str] = Field(None, max_length=settings.FEEDBACK_MAX_LENGTH)


class ReviewCreate(ReviewUpdate):
    reviewee_id: str = Field(..., min_length=1)


class ReviewResponse(CamelModel):
    id: int
    reviewer_id: str
    reviewee_id: str
    rating: int
    feedback: Optional[str]
    created_at: datetime
    updated_at: datetime
    reviewer: Optional[UserSummary] = None


class RatingBucket(CamelModel):
    rating: int
    count: int


class ReviewList(CamelModel):
    reviews: List[ReviewResponse]
    rating_distribution: List[RatingBucket]
    summary: RatingSummary
    pagination: Pagination
