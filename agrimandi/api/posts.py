from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Union

from agrimandi.core.errors import InvalidInput
from agrimandi.db.session import get_db
from agrimandi.models.post import POST_KINDS
from agrimandi.schemas.base import MessageResponse
from agrimandi.schemas.post import BuyerRequest, FarmerListing
from agrimandi.schemas.user import SessionUser
from agrimandi.auth.security import get_current_user
from agrimandi.services import ledger

router = APIRouter()

@router.put("/posts/{collection}/{post_id}/complete", response_model=MessageResponse)
def complete_post(
    collection: str,
    post_id: int,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user)
):
    model = POST_KINDS.get(collection)
    if model is None:
        raise InvalidInput("Invalid post type.")
    ledger.complete_post(db, model, post_id, current_user)
    return {"message": "Post marked as complete."}

@router.get("/my-posts", response_model=Union[List[BuyerRequest], List[FarmerListing]])
def read_my_posts(
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user)
):
    posts = ledger.my_posts(db, current_user)
    schema = BuyerRequest if current_user.role == "buyer" else FarmerListing
    return [schema.model_validate(p) for p in posts]
