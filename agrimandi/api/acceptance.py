from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrimandi.db.session import get_db
from agrimandi.schemas.post import AcceptRequest, BuyerRequest
from agrimandi.schemas.user import SessionUser
from agrimandi.auth.security import is_farmer
from agrimandi.services import ledger

router = APIRouter()

@router.post("/{request_id}/accept", response_model=BuyerRequest)
def accept_request(
    request_id: int,
    payload: AcceptRequest,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(is_farmer)
):
    return ledger.accept_request(db, request_id, current_user, payload.farmer_contact)
