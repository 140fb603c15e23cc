from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator

Role = Literal["farmer", "buyer", "admin"]

# bcrypt only looks at the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72


class UserCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=100)
    role: Role

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserLogin(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SessionUser(BaseModel):
    """Identity bound to a session; every authorization decision reads this."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: Role


class AuthResponse(BaseModel):
    message: str
    user: SessionUser


class AuthStatus(BaseModel):
    loggedIn: bool
    user: Optional[SessionUser] = None
