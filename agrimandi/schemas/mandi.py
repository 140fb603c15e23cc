from datetime import datetime
from typing import Optional
from pydantic import Field
from agrimandi.schemas.base import BaseSchema


class MandiPriceUpdate(BaseSchema):
    state: str = Field(min_length=1, max_length=100)
    crop: str = Field(min_length=1, max_length=100)
    price: float = Field(gt=0, allow_inf_nan=False)
    district: Optional[str] = None


class MandiPrice(BaseSchema):
    id: int
    state: str
    district: Optional[str] = None
    crop: str
    price: float
    previous_price: Optional[float] = None
    updated_at: Optional[datetime] = None
