from sqlalchemy.orm import Session

from agrimandi.core.logger import logger
from agrimandi.db.session import Base
from agrimandi.models.user import User  # noqa: F401
from agrimandi.models.post import FarmerListing, BuyerRequest  # noqa: F401
from agrimandi.models.mandi import MandiPrice
from agrimandi.models.content import ContentItem  # noqa: F401

DEFAULT_MANDI_PRICES = [
    {"state": "Maharashtra", "district": "Pune", "crop": "Wheat", "price": 2150, "previous_price": 2120},
    {"state": "Maharashtra", "district": "Pune", "crop": "Rice", "price": 1800, "previous_price": 1820},
    {"state": "Maharashtra", "district": "Nashik", "crop": "Onion", "price": 1500, "previous_price": 1480},
    {"state": "Karnataka", "district": "Bengaluru", "crop": "Potato", "price": 2500, "previous_price": 2550},
    {"state": "Karnataka", "district": "Mysuru", "crop": "Tomato", "price": 1200, "previous_price": 1150},
    {"state": "Uttar Pradesh", "district": "Varanasi", "crop": "Gram", "price": 3500, "previous_price": 3450},
    {"state": "Uttar Pradesh", "district": "Lucknow", "crop": "Maize", "price": 1600, "previous_price": 1580},
]


def init_db(engine):
    # Create all tables
    Base.metadata.create_all(bind=engine)


def seed_mandi_prices(db: Session) -> int:
    if db.query(MandiPrice).count() > 0:
        return 0
    db.add_all([MandiPrice(**row) for row in DEFAULT_MANDI_PRICES])
    db.commit()
    logger.info("Mandi prices pre-populated")
    return len(DEFAULT_MANDI_PRICES)
