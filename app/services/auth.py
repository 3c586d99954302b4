"""
Auth service: registration, login and bearer-token resolution.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.models.user import User

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == _normalize_email(email)).first()


def register_user(db: Session, name: str, email: str, password: str) -> tuple[User, str]:
    """Create a user and return it with a fresh access token."""
    if get_user_by_email(db, email) is not None:
        raise EmailAlreadyRegisteredError(email=email)

    user = User(
        name=name,
        email=_normalize_email(email),
        password_hash=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise EmailAlreadyRegisteredError(email=email)
    db.refresh(user)
    logger.info("Registered user id=%s", user.id)
    return user, create_access_token(user.id)


def authenticate_user(db: Session, email: str, password: str) -> tuple[User, str]:
    """
    Check credentials and issue a token.
    Unknown email and wrong password raise the same error.
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise InvalidCredentialsError()
    return user, create_access_token(user.id)


def resolve_token(db: Session, token: str) -> User:
    """Map a bearer token to its owner, or raise InvalidTokenError."""
    user_id = decode_access_token(token)
    if user_id is None:
        raise InvalidTokenError()
    user = db.get(User, user_id)
    if user is None:
        raise InvalidTokenError()
    return user
