# storefront/repos/basket_repo.py
from typing import Any, Dict

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from storefront.data.models.basket import BasketModel


class BasketRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_basket(self, basket_id: str) -> BasketModel | None:
        return self.db.execute(
            select(BasketModel).where(BasketModel.basket_id == basket_id)
        ).scalar_one_or_none()

    def create_basket(self, basket: BasketModel) -> BasketModel:
        self.db.add(basket)
        self.db.commit()
        self.db.refresh(basket)
        return basket

    def update_basket_version(
        self,
        basket_id: str,
        old_version: int,
        new_data: Dict[str, Any],
    ) -> int:
        # UPDATE baskets SET ... WHERE basket_id = :id AND version = :old
        result = self.db.execute(
            update(BasketModel)
            .where(
                BasketModel.basket_id == basket_id,
                BasketModel.version == old_version,
            )
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_basket(self, basket_id: str) -> int:
        result = self.db.execute(
            delete(BasketModel).where(BasketModel.basket_id == basket_id)
        )
        return result.rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
