# coffeechat/schemas/message.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from coffeechat.core.config import settings
from coffeechat.schemas.common import CamelModel, Pagination
from coffeechat.schemas.user import UserSummary


class MessageCreate(CamelModel):
    recipient_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, max_length=settings.MESSAGE_MAX_LENGTH)


class MessageResponse(CamelModel):
    id: int
    sender_id: str
    recipient_id: str
    content: str
    created_at: datetime
    sender: Optional[UserSummary] = None


class LastMessage(CamelModel):
    content: str
    created_at: datetime
    sender_id: str


class ConversationEntry(CamelModel):
    partner_id: str
    partner_name: str
    partner_profile_picture: Optional[str] = None
    last_message: LastMessage


class ConversationList(CamelModel):
    conversations: List[ConversationEntry]


class ThreadResponse(CamelModel):
    messages: List[MessageResponse]
    other_user: UserSummary
    pagination: Pagination
