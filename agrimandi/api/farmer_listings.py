from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Literal, Optional

from agrimandi.db.session import get_db
from agrimandi.models.post import FarmerListing as FarmerListingModel
from agrimandi.schemas.base import MessageResponse
from agrimandi.schemas.post import FarmerListing, FarmerListingCreate
from agrimandi.schemas.user import SessionUser
from agrimandi.auth.security import get_current_user, is_farmer
from agrimandi.services import ledger

router = APIRouter()

@router.get("", response_model=List[FarmerListing])
def read_listings(
    crop: Optional[str] = None,
    status: Optional[Literal["available", "completed"]] = None,
    db: Session = Depends(get_db),
):
    return ledger.list_listings(db, crop=crop, status=status)

@router.post("", response_model=FarmerListing, status_code=status.HTTP_201_CREATED)
def create_listing(
    listing: FarmerListingCreate,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(is_farmer)
):
    return ledger.create_listing(
        db,
        current_user,
        crop=listing.crop,
        quantity=listing.quantity,
        price=listing.price,
        contact=listing.contact_number,
    )

@router.get("/{listing_id}", response_model=FarmerListing)
def read_listing(listing_id: int, db: Session = Depends(get_db)):
    return ledger.get_post(db, FarmerListingModel, listing_id)

@router.delete("/{listing_id}", response_model=MessageResponse)
def delete_listing(
    listing_id: int,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user)
):
    ledger.delete_post(db, FarmerListingModel, listing_id, current_user)
    return {"message": "Listing deleted successfully."}
