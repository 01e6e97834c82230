#import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.address import AddressModel
from storefront.data.models.basket import BasketModel
from storefront.data.models.token import TokenModel
from storefront.data.models.product import ProductModel

__all__ = ["UserModel", "AddressModel", "BasketModel", "TokenModel", "ProductModel"]
