"""
Shared FastAPI dependencies: the request clock and the authenticated user.
"""
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.errors import NotAuthenticatedError
from app.db.base import get_db
from app.models.user import User
from app.services.auth import resolve_token

_bearer = HTTPBearer(auto_error=False)


def get_now() -> datetime:
    """Current instant (UTC). Overridden in tests to pin "today"."""
    return datetime.now(tz=timezone.utc)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or not credentials.credentials:
        raise NotAuthenticatedError()
    return resolve_token(db, credentials.credentials)
