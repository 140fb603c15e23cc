from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional

from agrimandi.auth.security import (
    SESSION_TTL,
    encode_session_cookie,
    get_optional_user,
    get_password_hash,
    get_session_store,
    get_session_token,
    verify_password,
)
from agrimandi.auth.sessions import SessionStore
from agrimandi.core.config import settings
from agrimandi.core.errors import Conflict, Unauthenticated
from agrimandi.core.logger import logger
from agrimandi.db.session import get_db
from agrimandi.models.user import User
from agrimandi.schemas.base import MessageResponse
from agrimandi.schemas.user import AuthResponse, AuthStatus, SessionUser, UserCreate, UserLogin

router = APIRouter(tags=["auth"])

# Hash checked against when the email is unknown so both failure paths do the same work.
_DUMMY_HASH = get_password_hash("agrimandi-dummy-password")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_user(user_data: UserCreate, db: Session = Depends(get_db)):
    email = user_data.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise Conflict("User with this email already exists")

    db_user = User(
        email=email,
        hashed_password=get_password_hash(user_data.password),
        name=user_data.name,
        role=user_data.role,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("User with this email already exists")
    db.refresh(db_user)

    logger.info("User registered", extra={"user_id": db_user.id})
    return AuthResponse(message="User registered successfully", user=SessionUser.model_validate(db_user))


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionStore = Depends(get_session_store),
):
    user = db.query(User).filter(User.email == credentials.email.strip().lower()).first()
    hashed = user.hashed_password if user else _DUMMY_HASH
    if not verify_password(credentials.password, hashed) or user is None:
        logger.warning("Failed login attempt")
        raise Unauthenticated("Invalid credentials")

    identity = SessionUser.model_validate(user)
    sessions.purge_expired()
    token = sessions.create(identity)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=encode_session_cookie(token),
        max_age=int(SESSION_TTL.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    logger.info("User logged in", extra={"user_id": user.id})
    return AuthResponse(message="Logged in successfully", user=identity)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
):
    if sessions.destroy(token):
        logger.info("User logged out")
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}


@router.get("/status", response_model=AuthStatus)
def auth_status(user: Optional[SessionUser] = Depends(get_optional_user)):
    return AuthStatus(loggedIn=user is not None, user=user)
