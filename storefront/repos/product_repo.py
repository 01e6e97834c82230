# storefront/repos/product_repo.py
from decimal import Decimal
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_title(self, title: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(ProductModel.title == title)
        ).scalar_one_or_none()

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def get_all(self) -> List[ProductModel]:
        return list(
            self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars().all()
        )

    def get_random(self, num: int, discounted_only: bool = False) -> List[ProductModel]:
        stmt = select(ProductModel)
        if discounted_only:
            stmt = stmt.where(ProductModel.discount_price.is_not(None))
        stmt = stmt.order_by(func.random()).limit(num)
        return list(self.db.execute(stmt).scalars().all())

    def get_in_price_range(self, min_price: Decimal, max_price: Decimal | None) -> List[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.sort_price >= min_price)
        if max_price is not None:
            stmt = stmt.where(ProductModel.sort_price <= max_price)
        return list(self.db.execute(stmt.order_by(ProductModel.id)).scalars().all())

    def search_titles(self, query: str, limit: int = 5) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .where(func.lower(ProductModel.title).contains(query.lower(), autoescape=True))
                .order_by(ProductModel.title)
                .limit(limit)
            ).scalars().all()
        )
