from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List

from agrimandi.core.errors import Conflict
from agrimandi.core.logger import logger
from agrimandi.db.session import get_db
from agrimandi.models.mandi import MandiPrice as MandiPriceModel
from agrimandi.schemas.mandi import MandiPrice, MandiPriceUpdate
from agrimandi.schemas.user import SessionUser
from agrimandi.auth.security import is_admin

router = APIRouter()

@router.get("", response_model=List[MandiPrice])
def read_prices(db: Session = Depends(get_db)):
    return (
        db.query(MandiPriceModel)
        .order_by(MandiPriceModel.state, MandiPriceModel.crop)
        .all()
    )

@router.put("/update", response_model=MandiPrice)
def upsert_price(
    update: MandiPriceUpdate,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(is_admin)
):
    row = db.query(MandiPriceModel).filter(
        MandiPriceModel.state == update.state,
        MandiPriceModel.crop == update.crop,
    ).with_for_update().first()

    if row is None:
        row = MandiPriceModel(
            state=update.state,
            crop=update.crop,
            district=update.district,
            price=update.price,
        )
        db.add(row)
    else:
        row.previous_price = row.price
        row.price = update.price
        if update.district:
            row.district = update.district

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Price for this state and crop was updated concurrently; retry.")
    db.refresh(row)

    logger.info(
        f"Mandi price updated: {update.state}/{update.crop}",
        extra={"user_id": current_user.id},
    )
    return row
