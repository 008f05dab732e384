# coffeechat/db/models/review.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from coffeechat.db.base import Base, utcnow


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        # one review per (reviewer, reviewee) ordered pair
        UniqueConstraint("reviewer_id", "reviewee_id", name="uq_review_reviewer_reviewee"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
        CheckConstraint("reviewer_id <> reviewee_id", name="ck_review_not_self"),
    )

    id = Column(Integer, primary_key=True, index=True)
    reviewer_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    reviewee_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    rating = Column(Integer, nullable=False)   # 1..5
    feedback = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    reviewer = relationship("User", foreign_keys=[reviewer_id])
