# coffeechat/core/security.py
"""
Principal resolution.

Sessions are issued by the external identity provider as signed bearer
tokens whose ``sub`` claim is the user's stable id. This module only
verifies them and resolves the id to a user row.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from coffeechat.core.config import settings
from coffeechat.core.errors import Unauthorized
from coffeechat.db.base import get_db
from coffeechat.db.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=12))
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.AUTH_SECRET, algorithm=settings.AUTH_ALGORITHM)


def resolve_principal(token: str) -> str:
    """Return the user id carried by a token, or raise Unauthorized."""
    try:
        payload = jwt.decode(token, settings.AUTH_SECRET, algorithms=[settings.AUTH_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Session expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Authentication failed")

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("Authentication failed")
    return user_id


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise Unauthorized("Authentication required")

    user_id = resolve_principal(credentials.credentials)
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise Unauthorized("Authentication failed")
    return user
