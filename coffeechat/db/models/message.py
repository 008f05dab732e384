# coffeechat/db/models/message.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from coffeechat.db.base import Base, utcnow


class Message(Base):
    """
    Directed message between two users. Rows are insert-only.
    Ordering everywhere is (created_at, id).

    created_at is stamped by the inserting process (microsecond UTC) rather
    than a server-side now(), which is second-granular on SQLite. Clock skew
    between app processes can put created_at slightly out of id order; the
    id tie-break keeps every ordering total either way.
    """
    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint("sender_id <> recipient_id", name="ck_message_not_self"),
        Index("ix_messages_sender_created", "sender_id", "created_at"),
        Index("ix_messages_recipient_created", "recipient_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    content = Column(String(1000), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    sender = relationship("User", foreign_keys=[sender_id])
