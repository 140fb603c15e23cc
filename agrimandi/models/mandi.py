from sqlalchemy import Column, String, Float, TIMESTAMP, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func
from agrimandi.models.base import BaseModel

class MandiPrice(BaseModel):
    __tablename__ = "mandi_prices"
    __table_args__ = (
        UniqueConstraint("state", "crop", name="uq_mandi_state_crop"),
        CheckConstraint("price > 0", name="ck_mandi_price_positive"),
    )

    state = Column(String(100), nullable=False)
    district = Column(String(100))
    crop = Column(String(100), nullable=False)
    price = Column(Float, nullable=False)
    previous_price = Column(Float)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
