from sqlalchemy import Column, Integer, String, Numeric, JSON, Text

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    title = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False, default="")

    price = Column(Numeric(10, 2), nullable=False)
    discount_price = Column(Numeric(10, 2), nullable=True)
    #effective price, used by catalog price filters and sorting
    sort_price = Column(Numeric(10, 2), nullable=False)

    dev_company = Column(String, nullable=False, default="")
    header_img = Column(String, nullable=True)

    categories = Column(JSON, nullable=False, default=list)
    genres = Column(JSON, nullable=False, default=list)
    themes = Column(JSON, nullable=False, default=list)

    @property
    def effective_price(self):
        return self.discount_price if self.discount_price is not None else self.price
