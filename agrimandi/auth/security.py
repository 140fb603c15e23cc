from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from typing import Optional
from fastapi import Depends, Request

from agrimandi.auth.sessions import SessionStore
from agrimandi.core.config import settings
from agrimandi.core.errors import Forbidden, Unauthenticated
from agrimandi.schemas.user import MAX_PASSWORD_BYTES, SessionUser

SESSION_TTL = timedelta(minutes=settings.SESSION_TTL_MINUTES)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # bcrypt would compare only the first 72 bytes
    if len(plain_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def encode_session_cookie(token: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or SESSION_TTL)
    return jwt.encode({"sid": token, "exp": expire}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_cookie(value: Optional[str]) -> Optional[str]:
    """Return the session token carried by a cookie, or None if it is absent, tampered or expired."""
    if not value:
        return None
    try:
        payload = jwt.decode(value, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    return payload.get("sid")


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_session_token(request: Request) -> Optional[str]:
    return decode_session_cookie(request.cookies.get(settings.SESSION_COOKIE_NAME))


def get_optional_user(
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
) -> Optional[SessionUser]:
    return sessions.get(token)


def get_current_user(user: Optional[SessionUser] = Depends(get_optional_user)) -> SessionUser:
    if user is None:
        raise Unauthenticated()
    return user


def require_role(role: str):
    def role_gate(user: SessionUser = Depends(get_current_user)) -> SessionUser:
        if user.role != role:
            raise Forbidden(f"Forbidden: Requires {role} role")
        return user
    return role_gate


is_farmer = require_role("farmer")
is_buyer = require_role("buyer")
is_admin = require_role("admin")
