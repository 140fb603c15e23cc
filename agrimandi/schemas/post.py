from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, Field
from agrimandi.schemas.base import BaseSchema

CONTACT_ALIASES = AliasChoices("contact", "contactNumber", "contact_number")


class FarmerListingCreate(BaseSchema):
    crop: str = Field(min_length=1, max_length=100)
    quantity: float = Field(gt=0, allow_inf_nan=False)
    price: float = Field(gt=0, allow_inf_nan=False)
    contact_number: str = Field(min_length=1, max_length=30, validation_alias=CONTACT_ALIASES)


class BuyerRequestCreate(BaseSchema):
    crop: str = Field(min_length=1, max_length=100)
    quantity: float = Field(gt=0, allow_inf_nan=False)
    contact_number: str = Field(min_length=1, max_length=30, validation_alias=CONTACT_ALIASES)


class AcceptRequest(BaseSchema):
    farmer_contact: str = Field(min_length=1, max_length=30)


class FarmerListing(BaseSchema):
    id: int
    farmer_id: int
    farmer_name: str
    contact_number: str
    crop: str
    quantity: float
    price: float
    status: str
    created_at: datetime
    completed_at: Optional[datetime] = None


class BuyerRequest(BaseSchema):
    id: int
    buyer_id: int
    buyer_name: str
    contact_number: str
    crop: str
    quantity: float
    status: str
    created_at: datetime
    completed_at: Optional[datetime] = None
    accepted_by_farmer_id: Optional[int] = None
    accepted_by_farmer_name: Optional[str] = None
    accepted_by_farmer_contact: Optional[str] = None
