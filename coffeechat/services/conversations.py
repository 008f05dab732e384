# coffeechat/services/conversations.py
"""
Conversation index, derived on every read from the message log.

A user's inbox has one entry per counterparty: the latest message
exchanged with them, newest conversation first. Nothing is materialized,
so a partner without messages can never show up.
"""
from typing import List, Tuple

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from coffeechat.core.config import settings
from coffeechat.core.errors import NotFound
from coffeechat.db.models.message import Message
from coffeechat.db.models.user import User
from coffeechat.schemas.common import Pagination
from coffeechat.schemas.message import ConversationEntry, LastMessage
from coffeechat.services.messages import list_between
from coffeechat.services.pagination import build_pagination, clamp_limit


def list_conversations(db: Session, user_id: str) -> List[ConversationEntry]:
    partner = case(
        (Message.sender_id == user_id, Message.recipient_id),
        else_=Message.sender_id,
    )
    # rank each partner's messages newest first; (created_at, id) is a total order
    latest = (
        db.query(
            Message.id.label("message_id"),
            partner.label("partner_id"),
            func.row_number()
            .over(
                partition_by=partner,
                order_by=(Message.created_at.desc(), Message.id.desc()),
            )
            .label("rn"),
        )
        .filter(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
        .subquery()
    )

    rows = (
        db.query(Message, User)
        .join(latest, Message.id == latest.c.message_id)
        .join(User, User.id == latest.c.partner_id)
        .filter(latest.c.rn == 1)
        .order_by(Message.created_at.desc(), Message.id.desc())
        .all()
    )

    return [
        ConversationEntry(
            partner_id=partner_user.id,
            partner_name=partner_user.name,
            partner_profile_picture=partner_user.image,
            last_message=LastMessage(
                content=msg.content,
                created_at=msg.created_at,
                sender_id=msg.sender_id,
            ),
        )
        for msg, partner_user in rows
    ]


def get_thread(
    db: Session, user_id: str, partner_id: str, page: int = 1, limit: int = settings.THREAD_DEFAULT_LIMIT
) -> Tuple[List[Message], User, Pagination]:
    partner = db.query(User).filter(User.id == partner_id).first()
    if not partner:
        raise NotFound("User not found")

    limit = clamp_limit(limit, settings.THREAD_MAX_LIMIT)
    messages, total = list_between(db, user_id, partner_id, page, limit)
    return messages, partner, build_pagination(page, limit, total)
