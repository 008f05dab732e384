# coffeechat/services/messages.py
"""
Message store: an insert-only log of directed messages between two users.
"""
from typing import List, Tuple

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from coffeechat.core.config import settings
from coffeechat.core.errors import InvalidInput, NotFound
from coffeechat.core.logging import get_logger
from coffeechat.db.base import atomic
from coffeechat.db.models.message import Message
from coffeechat.db.models.user import User
from coffeechat.services.pagination import page_offset

log = get_logger(__name__)


def _pair_filter(user_a: str, user_b: str):
    return or_(
        and_(Message.sender_id == user_a, Message.recipient_id == user_b),
        and_(Message.sender_id == user_b, Message.recipient_id == user_a),
    )


def send_message(db: Session, sender_id: str, recipient_id: str, content: str) -> Message:
    if sender_id == recipient_id:
        raise InvalidInput("Cannot send a message to yourself")
    if not content:
        raise InvalidInput("Message content is required")
    if len(content) > settings.MESSAGE_MAX_LENGTH:
        raise InvalidInput(f"Message must be less than {settings.MESSAGE_MAX_LENGTH} characters")

    recipient = db.query(User).filter(User.id == recipient_id).first()
    if not recipient:
        raise NotFound("Recipient not found")

    message = Message(sender_id=sender_id, recipient_id=recipient_id, content=content)
    with atomic(db):
        db.add(message)
    db.refresh(message)

    log.info("message_sent", message_id=message.id, sender_id=sender_id, recipient_id=recipient_id)
    return message


def list_between(db: Session, user_a: str, user_b: str, page: int, limit: int) -> Tuple[List[Message], int]:
    """
    One page of the messages exchanged by two users, oldest first,
    plus the total number of messages in the pair.
    """
    offset = page_offset(page, limit)
    q = db.query(Message).filter(_pair_filter(user_a, user_b))
    total = q.count()
    rows = (
        q.order_by(Message.created_at.asc(), Message.id.asc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return rows, total
