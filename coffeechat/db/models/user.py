# coffeechat/db/models/user.py
from sqlalchemy import Column, DateTime, Float, Integer, String

from coffeechat.db.base import Base, utcnow


class User(Base):
    """
    Account row. Identity (id, email) comes from the external identity
    provider; average_rating/total_reviews are written only by
    coffeechat.services.ratings.recompute_rating.
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)

    image = Column(String, nullable=True)  # profile picture url
    bio = Column(String, nullable=True)

    average_rating = Column(Float, nullable=False, default=0.0, server_default="0")
    total_reviews = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime, default=utcnow)
