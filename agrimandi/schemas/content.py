from datetime import datetime
from typing import Optional
from pydantic import Field
from agrimandi.schemas.base import BaseSchema


class ContentCreate(BaseSchema):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    link: Optional[str] = Field(default=None, max_length=255)


class ContentItem(BaseSchema):
    id: int
    collection: str
    title: str
    content: str
    link: Optional[str] = None
    created_at: datetime
