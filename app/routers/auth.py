"""
Auth router.

POST /register
POST /login
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.user import User
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserOut
from app.schemas.common import ErrorResponse
from app.services.auth import authenticate_user, register_user

router = APIRouter(tags=["auth"])


def _auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(
        user=UserOut(id=user.id, name=user.name, email=user.email),
        token=token,
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        201: {"description": "User created; token issued."},
        409: {"model": ErrorResponse, "description": "Email already registered."},
    },
)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user, token = register_user(
        db=db, name=payload.name, email=payload.email, password=payload.password
    )
    return _auth_response(user, token)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Exchange credentials for a bearer token",
    responses={
        200: {"description": "Login successful."},
        401: {"model": ErrorResponse, "description": "Invalid email or password."},
    },
)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user, token = authenticate_user(db=db, email=payload.email, password=payload.password)
    return _auth_response(user, token)
