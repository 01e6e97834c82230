# storefront/domain/schemas.py
from datetime import date
from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


# users / auth

class RegistrationIn(BaseModel):
    """Account data plus the first shipping and billing address."""

    first_name: str = Field(..., min_length=2, max_length=32)
    last_name: str = Field(..., min_length=2, max_length=32)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    dob: date | None = None

    default_shipping: bool = False
    ship_country: str = Field(..., min_length=1)
    ship_city: str = Field(..., min_length=1)
    ship_street: str = Field(..., min_length=1)
    ship_postal_code: str = Field(..., min_length=1)

    # billing falls back to the shipping fields
    default_billing: bool = False
    bill_country: str | None = None
    bill_city: str | None = None
    bill_street: str | None = None
    bill_postal_code: str | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    birthday: date | None = None
    is_activated: bool
    basket_id: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AuthOut(BaseModel):
    access_token: str
    refresh_token: str
    user: UserOut


class UserUpdateIn(BaseModel):
    first_name: str | None = Field(None, min_length=2, max_length=32)
    last_name: str | None = Field(None, min_length=2, max_length=32)
    birthday: date | None = None


class PasswordCheckIn(BaseModel):
    password: str = Field(..., min_length=1)


class AddressOut(BaseModel):
    id: int
    kind: str
    country: str
    city: str
    street: str
    postal_code: str
    is_default: bool

    model_config = ConfigDict(from_attributes=True)


class AddressUpdate(BaseModel):
    id: int = Field(..., gt=0)
    country: str | None = Field(None, min_length=1)
    city: str | None = Field(None, min_length=1)
    street: str | None = Field(None, min_length=1)
    postal_code: str | None = Field(None, min_length=1)
    is_default: bool | None = None


class AddressesUpdateIn(BaseModel):
    addresses: List[AddressUpdate]


# basket

class BasketIdIn(BaseModel):
    basket_id: str = Field(..., min_length=1)


class MergeBasketsIn(BaseModel):
    basket_anon_id: str = Field(..., min_length=1)
    basket_user_id: str = Field(..., min_length=1)


class ItemIn(BaseModel):
    title: str = Field(..., min_length=1)


class ChangeQuantityIn(BaseModel):
    # negative values are rejected by BasketService
    item_updates: Dict[str, int]


class PromoIn(BaseModel):
    promo: str = Field(..., min_length=1)


class BasketItemsOut(BaseModel):
    basket_id: str
    items: Dict[str, int]
    promo: str


class BasketLineOut(BaseModel):
    quantity: int
    price: Decimal
    promo_price: Decimal
    header_img: str | None = None


# catalog

class ProductOut(BaseModel):
    title: str
    description: str
    price: Decimal
    discount_price: Decimal | None = None
    dev_company: str
    header_img: str | None = None
    categories: List[str]
    genres: List[str]
    themes: List[str]

    model_config = ConfigDict(from_attributes=True)


class ProductSearchOut(BaseModel):
    title: str
    price: Decimal
    discount_price: Decimal | None = None
    header_img: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CatalogIn(BaseModel):
    page_number: int = Field(1, ge=1)
    page_limit: int = Field(20, ge=1, le=100)
    sort_column: str = "title"
    sort_direction: str = "up"
    tags: List[str] = []
    themes: List[str] = []
    genres: List[str] = []
    min_price: Decimal = Field(Decimal("0"), ge=0)
    max_price: Decimal | None = Field(None, ge=0)


class CatalogFilters(BaseModel):
    themes: List[str]
    genres: List[str]
    tags: List[str]


class CatalogOut(BaseModel):
    products: List[ProductOut]
    filters: CatalogFilters
    total_products: int
