from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.token import TokenModel


class TokenRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: int) -> TokenModel | None:
        return self.db.execute(
            select(TokenModel).where(TokenModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_by_token(self, refresh_token: str) -> TokenModel | None:
        return self.db.execute(
            select(TokenModel).where(TokenModel.refresh_token == refresh_token)
        ).scalars().first()

    def save(self, record: TokenModel) -> TokenModel:
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def delete_by_token(self, refresh_token: str) -> int:
        result = self.db.execute(
            delete(TokenModel).where(TokenModel.refresh_token == refresh_token)
        )
        self.db.commit()
        return result.rowcount

    def delete_by_user(self, user_id: int) -> int:
        result = self.db.execute(
            delete(TokenModel).where(TokenModel.user_id == user_id)
        )
        self.db.commit()
        return result.rowcount
