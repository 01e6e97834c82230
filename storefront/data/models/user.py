from sqlalchemy import Column, Integer, String, Boolean, Date
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    birthday = Column(Date, nullable=True)

    is_activated = Column(Boolean, nullable=False, default=False)
    activation_link = Column(String, unique=True, index=True, nullable=True)

    # one basket per user, set by BasketService.attach_to_user
    basket_id = Column(String(32), nullable=True)

    addresses = relationship(
        "AddressModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )
