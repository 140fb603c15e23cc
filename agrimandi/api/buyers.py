from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Literal, Optional

from agrimandi.db.session import get_db
from agrimandi.models.post import BuyerRequest as BuyerRequestModel
from agrimandi.schemas.base import MessageResponse
from agrimandi.schemas.post import BuyerRequest, BuyerRequestCreate
from agrimandi.schemas.user import SessionUser
from agrimandi.auth.security import get_current_user, is_buyer
from agrimandi.services import ledger

router = APIRouter()

@router.get("", response_model=List[BuyerRequest])
def read_requests(
    crop: Optional[str] = None,
    status: Optional[Literal["open", "completed"]] = None,
    db: Session = Depends(get_db),
):
    return ledger.list_requests(db, crop=crop, status=status)

@router.post("", response_model=BuyerRequest, status_code=status.HTTP_201_CREATED)
def create_request(
    request: BuyerRequestCreate,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(is_buyer)
):
    return ledger.create_request(
        db,
        current_user,
        crop=request.crop,
        quantity=request.quantity,
        contact=request.contact_number,
    )

@router.get("/{request_id}", response_model=BuyerRequest)
def read_request(request_id: int, db: Session = Depends(get_db)):
    return ledger.get_post(db, BuyerRequestModel, request_id)

@router.delete("/{request_id}", response_model=MessageResponse)
def delete_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user)
):
    ledger.delete_post(db, BuyerRequestModel, request_id, current_user)
    return {"message": "Request deleted successfully."}
