from sqlalchemy import Column, String, Float, Integer, ForeignKey, TIMESTAMP, CheckConstraint
from sqlalchemy.orm import validates
from agrimandi.models.base import BaseModel

COMPLETED = "completed"


class OwnedPost(BaseModel):
    """Shared shape of the two marketplace post families.

    ``owner_field`` names the column holding the owning user id and
    ``open_status`` the only status a post may leave (towards ``completed``).
    """
    __abstract__ = True

    owner_field = None
    open_status = None
    label = "Post"

    contact_number = Column(String(30), nullable=False)
    crop = Column(String(100), nullable=False, index=True)
    quantity = Column(Float, nullable=False)
    completed_at = Column(TIMESTAMP, nullable=True)

    def _fix_owner(self, key, value):
        current = getattr(self, key)
        if current is not None and current != value:
            raise ValueError(f"{key} is fixed at creation")
        return value


class FarmerListing(OwnedPost):
    __tablename__ = "farmer_listings"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_listing_quantity_positive"),
        CheckConstraint("price > 0", name="ck_listing_price_positive"),
        CheckConstraint("status IN ('available', 'completed')", name="ck_listing_status"),
    )

    owner_field = "farmer_id"
    open_status = "available"
    label = "Listing"

    farmer_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    farmer_name = Column(String(100), nullable=False)
    price = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default="available")

    @validates("farmer_id")
    def _validate_owner(self, key, value):
        return self._fix_owner(key, value)


class BuyerRequest(OwnedPost):
    __tablename__ = "buyer_requests"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_request_quantity_positive"),
        CheckConstraint("status IN ('open', 'completed')", name="ck_request_status"),
    )

    owner_field = "buyer_id"
    open_status = "open"
    label = "Request"

    buyer_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    buyer_name = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False, default="open")
    accepted_by_farmer_id = Column(Integer, ForeignKey('users.id'), nullable=True)
    accepted_by_farmer_name = Column(String(100), nullable=True)
    accepted_by_farmer_contact = Column(String(30), nullable=True)

    @validates("buyer_id")
    def _validate_owner(self, key, value):
        return self._fix_owner(key, value)


# URL collection name -> model
POST_KINDS = {
    "farmer-listings": FarmerListing,
    "buyers": BuyerRequest,
}
