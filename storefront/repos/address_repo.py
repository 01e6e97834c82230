from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_address(self, address_id: int) -> AddressModel | None:
        return self.db.get(AddressModel, address_id)

    def get_addresses(self, user_id: int, kind: str) -> List[AddressModel]:
        return list(
            self.db.execute(
                select(AddressModel)
                .where(AddressModel.user_id == user_id, AddressModel.kind == kind)
                .order_by(AddressModel.id)
            ).scalars().all()
        )

    def delete_address(self, address: AddressModel) -> None:
        self.db.delete(address)
        self.db.commit()

    def commit(self) -> None:
        self.db.commit()
