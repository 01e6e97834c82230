#storefront/data/models/basket.py
from sqlalchemy import Column, Integer, String, JSON

from storefront.data.database import Base


class BasketModel(Base):
    __tablename__ = "baskets"

    id = Column(Integer, primary_key=True)
    basket_id = Column(String(32), unique=True, index=True, nullable=False)

    #title -> quantity
    items = Column(JSON, nullable=False, default=dict)
    promo = Column(String, nullable=False, default="")
    version = Column(Integer, nullable=False, default=1)
