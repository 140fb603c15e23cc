from sqlalchemy import Column, String, Text, Enum
from agrimandi.models.base import BaseModel

CONTENT_COLLECTIONS = ("news", "schemes", "advisory")

class ContentItem(BaseModel):
    __tablename__ = "content_items"

    collection = Column(Enum(*CONTENT_COLLECTIONS, name='content_collections'), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    link = Column(String(255))
