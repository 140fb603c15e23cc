from sqlalchemy import Column, String, Enum
from agrimandi.models.base import BaseModel

ROLES = ("farmer", "buyer", "admin")

class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(Enum(*ROLES, name='user_roles'), nullable=False)
