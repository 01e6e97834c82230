from sqlalchemy import Column, Integer, String, ForeignKey

from storefront.data.database import Base


class TokenModel(Base):
    __tablename__ = "tokens"

    id = Column(Integer, primary_key=True)
    # only one stored refresh token per user
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    refresh_token = Column(String, index=True, nullable=False)
