# agrimandi/services/ledger.py

"""
Post Ledger

Concepts:
 - farmer listings: crop lots a farmer offers, status available -> completed
 - buyer requests: crops a buyer wants, status open -> completed
 - a buyer request leaves ``open`` either by its owner completing it or by a
   farmer accepting it; both are the same terminal state, acceptance also
   records who accepted
 - every transition is one conditional UPDATE/DELETE; the row count tells
   whether this call won
"""

from typing import List, Optional, Type

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from agrimandi.auth.ownership import guard_mutation
from agrimandi.core.errors import NotFound
from agrimandi.core.logger import logger
from agrimandi.models.post import COMPLETED, BuyerRequest, FarmerListing, OwnedPost
from agrimandi.schemas.user import SessionUser


def _newest_first(query, model: Type[OwnedPost]):
    return query.order_by(model.created_at.desc(), model.id.desc())


def _filtered(db: Session, model: Type[OwnedPost], crop: Optional[str], status: Optional[str]):
    query = db.query(model)
    if crop:
        query = query.filter(func.lower(model.crop) == crop.strip().lower())
    if status:
        query = query.filter(model.status == status)
    return _newest_first(query, model)


def _commit(db: Session):
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


# -------------------------
# Farmer listings
# -------------------------
def create_listing(
    db: Session,
    owner: SessionUser,
    crop: str,
    quantity: float,
    price: float,
    contact: str,
) -> FarmerListing:
    listing = FarmerListing(
        farmer_id=owner.id,
        farmer_name=owner.name,
        contact_number=contact,
        crop=crop,
        quantity=float(quantity),
        price=float(price),
        status=FarmerListing.open_status,
    )
    db.add(listing)
    _commit(db)
    db.refresh(listing)
    logger.info("Listing posted", extra={"user_id": owner.id, "path": f"farmer_listings/{listing.id}"})
    return listing


def list_listings(db: Session, crop: Optional[str] = None, status: Optional[str] = None) -> List[FarmerListing]:
    return _filtered(db, FarmerListing, crop, status).all()


# -------------------------
# Buyer requests
# -------------------------
def create_request(
    db: Session,
    owner: SessionUser,
    crop: str,
    quantity: float,
    contact: str,
) -> BuyerRequest:
    request = BuyerRequest(
        buyer_id=owner.id,
        buyer_name=owner.name,
        contact_number=contact,
        crop=crop,
        quantity=float(quantity),
        status=BuyerRequest.open_status,
    )
    db.add(request)
    _commit(db)
    db.refresh(request)
    logger.info("Buyer request submitted", extra={"user_id": owner.id, "path": f"buyer_requests/{request.id}"})
    return request


def list_requests(db: Session, crop: Optional[str] = None, status: Optional[str] = None) -> List[BuyerRequest]:
    return _filtered(db, BuyerRequest, crop, status).all()


def accept_request(db: Session, request_id: int, farmer: SessionUser, farmer_contact: str) -> BuyerRequest:
    """
    Farmer takes an open buyer request.

    Status check and write are one statement, so of several farmers racing
    for the same request exactly one sees a row updated.
    """
    updated = (
        db.query(BuyerRequest)
        .filter(BuyerRequest.id == request_id, BuyerRequest.status == BuyerRequest.open_status)
        .update(
            {
                BuyerRequest.status: COMPLETED,
                BuyerRequest.completed_at: func.now(),
                BuyerRequest.accepted_by_farmer_id: farmer.id,
                BuyerRequest.accepted_by_farmer_name: farmer.name,
                BuyerRequest.accepted_by_farmer_contact: farmer_contact,
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise NotFound("Request not found or already accepted.")
    _commit(db)

    logger.info("Buyer request accepted", extra={"user_id": farmer.id, "path": f"buyer_requests/{request_id}"})
    return db.get(BuyerRequest, request_id, populate_existing=True)


# -------------------------
# Shared owner-only mutations
# -------------------------
def get_post(db: Session, model: Type[OwnedPost], post_id: int) -> OwnedPost:
    post = db.get(model, post_id)
    if post is None:
        raise NotFound(f"{model.label} not found.")
    return post


def delete_post(db: Session, model: Type[OwnedPost], post_id: int, caller: SessionUser) -> None:
    guard_mutation(db, model, post_id, caller)

    owner_column = getattr(model, model.owner_field)
    deleted = (
        db.query(model)
        .filter(model.id == post_id, owner_column == caller.id)
        .delete(synchronize_session=False)
    )
    if deleted == 0:
        db.rollback()
        raise NotFound(f"{model.label} not found.")
    _commit(db)
    logger.info(f"{model.label} deleted", extra={"user_id": caller.id, "path": f"{model.__tablename__}/{post_id}"})


def complete_post(db: Session, model: Type[OwnedPost], post_id: int, caller: SessionUser) -> OwnedPost:
    guard_mutation(db, model, post_id, caller)

    owner_column = getattr(model, model.owner_field)
    updated = (
        db.query(model)
        .filter(
            model.id == post_id,
            owner_column == caller.id,
            model.status == model.open_status,
        )
        .update(
            {model.status: COMPLETED, model.completed_at: func.now()},
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise NotFound("Post not found or already completed.")
    _commit(db)

    logger.info("Post marked as complete", extra={"user_id": caller.id, "path": f"{model.__tablename__}/{post_id}"})
    return db.get(model, post_id, populate_existing=True)


# -------------------------
# My posts
# -------------------------
def my_posts(db: Session, caller: SessionUser) -> List[OwnedPost]:
    if caller.role == "buyer":
        model = BuyerRequest
    elif caller.role == "farmer":
        model = FarmerListing
    else:
        return []
    owner_column = getattr(model, model.owner_field)
    return _newest_first(db.query(model).filter(owner_column == caller.id), model).all()
