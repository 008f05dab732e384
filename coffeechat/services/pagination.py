# coffeechat/services/pagination.py
import math

from coffeechat.core.errors import InvalidInput
from coffeechat.schemas.common import Pagination


def clamp_limit(limit: int, max_limit: int) -> int:
    return max(1, min(limit, max_limit))


def page_offset(page: int, limit: int) -> int:
    if page < 1:
        raise InvalidInput("page must be >= 1")
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit) if total else 0,
    )
