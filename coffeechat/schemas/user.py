# coffeechat/schemas/user.py
from typing import Optional

from coffeechat.schemas.common import CamelModel


class UserSummary(CamelModel):
    id: str
    name: str
    image: Optional[str] = None


class RatingSummary(CamelModel):
    average_rating: float
    total_reviews: int
