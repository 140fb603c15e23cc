from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from agrimandi.core.errors import NotFound
from agrimandi.core.logger import logger
from agrimandi.db.session import get_db
from agrimandi.models.content import ContentItem as ContentItemModel
from agrimandi.schemas.base import MessageResponse
from agrimandi.schemas.content import ContentCreate, ContentItem
from agrimandi.schemas.user import SessionUser
from agrimandi.auth.security import is_admin


def make_content_router(collection: str) -> APIRouter:
    """Public read, admin write CRUD over one named content collection."""
    router = APIRouter()

    @router.get("", response_model=List[ContentItem])
    def read_items(db: Session = Depends(get_db)):
        return (
            db.query(ContentItemModel)
            .filter(ContentItemModel.collection == collection)
            .order_by(ContentItemModel.id.desc())
            .all()
        )

    @router.post("", response_model=ContentItem, status_code=status.HTTP_201_CREATED)
    def add_item(
        item: ContentCreate,
        db: Session = Depends(get_db),
        current_user: SessionUser = Depends(is_admin)
    ):
        db_item = ContentItemModel(collection=collection, **item.model_dump())
        db.add(db_item)
        db.commit()
        db.refresh(db_item)
        logger.info(f"Item added to {collection}", extra={"user_id": current_user.id})
        return db_item

    @router.delete("/{item_id}", response_model=MessageResponse)
    def delete_item(
        item_id: int,
        db: Session = Depends(get_db),
        current_user: SessionUser = Depends(is_admin)
    ):
        deleted = (
            db.query(ContentItemModel)
            .filter(ContentItemModel.id == item_id, ContentItemModel.collection == collection)
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            db.rollback()
            raise NotFound("Item not found")
        db.commit()
        logger.info(f"Item deleted from {collection}", extra={"user_id": current_user.id})
        return {"message": "Item deleted successfully"}

    return router


news = make_content_router("news")
schemes = make_content_router("schemes")
advisory = make_content_router("advisory")
