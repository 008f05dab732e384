# coffeechat/api/routes/messages.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from coffeechat.core.config import settings
from coffeechat.core.security import get_current_user
from coffeechat.db.base import get_db
from coffeechat.db.models.user import User
from coffeechat.schemas.message import ConversationList, MessageCreate, MessageResponse, ThreadResponse
from coffeechat.schemas.user import UserSummary
from coffeechat.services.conversations import get_thread, list_conversations
from coffeechat.services.messages import send_message

router = APIRouter(prefix="/api/messages", tags=["messages"])


# Send a message
@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_message(
    message_in: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return send_message(db, current_user.id, message_in.recipient_id, message_in.content)


# Inbox: one entry per partner, most recent conversation first
@router.get("/conversations", response_model=ConversationList)
def conversations(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ConversationList(conversations=list_conversations(db, current_user.id))


# Full thread with one partner, oldest first
@router.get("/conversations/{user_id}", response_model=ThreadResponse)
def conversation_thread(
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.THREAD_DEFAULT_LIMIT),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    messages, partner, pagination = get_thread(db, current_user.id, user_id, page, limit)
    return ThreadResponse(
        messages=[MessageResponse.model_validate(m) for m in messages],
        other_user=UserSummary.model_validate(partner),
        pagination=pagination,
    )
