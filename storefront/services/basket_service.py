from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, List
from uuid import uuid4

from sqlalchemy.orm import Session

from storefront.data.models.basket import BasketModel
from storefront.domain.exceptions import BadRequestError, UnauthorizedError
from storefront.repos.basket_repo import BasketRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.token_service import TokenService
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENTS = Decimal("0.01")

PROMO_DISCOUNTS: Dict[str, Callable[[Decimal], Decimal]] = {
    "SAVE10": lambda price: price * Decimal("0.9"),
    "SAVE20": lambda price: price * Decimal("0.8"),
    "FIRST ORDER": lambda price: price * Decimal("0.75"),
}


def promo_price(price: Decimal, promo: str | None) -> Decimal:
    """Price after promo, rounded half-up to cents. Unknown promo leaves the price as is."""
    discount = PROMO_DISCOUNTS.get(promo or "")
    adjusted = discount(price) if discount else price
    return adjusted.quantize(CENTS, rounding=ROUND_HALF_UP)


class BasketService:
    """
    Basket use cases.
    Every command is read -> modify a copy of items/promo -> versioned update,
    so a failed command never persists anything.
    """

    def __init__(
        self,
        db: Session,
        token_service: TokenService,
        promo_codes: List[str] | None = None,
    ):
        self.repo = BasketRepo(db)
        self.user_repo = UserRepo(db)
        self.product_repo = ProductRepo(db)
        self.token_service = token_service
        self.promo_codes = promo_codes if promo_codes is not None else settings.PROMO_CODES

    def _get_or_fail(self, basket_id: str) -> BasketModel:
        basket = self.repo.get_basket(basket_id)
        if not basket:
            raise BadRequestError(f"Basket {basket_id} not found")
        return basket

    def _save(self, basket: BasketModel, new_data: Dict[str, Any], commit: bool = True) -> None:
        rowcount = self.repo.update_basket_version(
            basket_id=basket.basket_id,
            old_version=basket.version,
            new_data={**new_data, "version": basket.version + 1},
        )
        if rowcount == 0:
            self.repo.rollback()
            raise BadRequestError("Basket was modified by another operation")
        if commit:
            self.repo.commit()

    #queries
    def get_items(self, basket_id: str) -> Dict[str, Any]:
        basket = self._get_or_fail(basket_id)
        return {
            "basket_id": basket.basket_id,
            "items": dict(basket.items or {}),
            "promo": basket.promo or "",
        }

    def price(self, basket_id: str) -> Dict[str, Dict[str, Any]]:
        basket = self._get_or_fail(basket_id)

        lines = {}
        for title, quantity in (basket.items or {}).items():
            product = self.product_repo.get_by_title(title)
            if not product:
                logger.warning(f"Basket {basket_id}: product {title!r} not in catalog, skipped")
                continue

            price = Decimal(str(product.effective_price))
            lines[title] = {
                "quantity": quantity,
                "price": price.quantize(CENTS, rounding=ROUND_HALF_UP),
                "promo_price": promo_price(price, basket.promo),
                "header_img": product.header_img,
            }
        return lines

    #commands
    def create(self) -> str:
        basket_id = uuid4().hex
        self.repo.create_basket(BasketModel(basket_id=basket_id, items={}, promo="", version=1))
        logger.info(f"Created basket {basket_id}")
        return basket_id

    def attach_to_user(self, basket_id: str, refresh_token: str | None) -> str:
        identity = self.token_service.verify_refresh(refresh_token)
        if not identity:
            raise UnauthorizedError()

        user = self.user_repo.get_user(identity.get("id"))
        if not user:
            raise UnauthorizedError()

        self._get_or_fail(basket_id)

        if user.basket_id:
            logger.warning(f"User {user.id} already has basket {user.basket_id}")
            raise BadRequestError("User already has a basket.")

        user.basket_id = basket_id
        self.user_repo.save(user)
        logger.info(f"Basket {basket_id} attached to user {user.id}")
        return basket_id

    def merge(self, source_id: str, target_id: str) -> str:
        source = self.repo.get_basket(source_id)
        if not source:
            raise BadRequestError(f"Source basket {source_id} not found")
        target = self.repo.get_basket(target_id)
        if not target:
            raise BadRequestError(f"Target basket {target_id} not found")
        if source.basket_id == target.basket_id:
            raise BadRequestError("Cannot merge a basket into itself")

        merged = dict(target.items or {})
        for title, quantity in (source.items or {}).items():
            merged[title] = merged.get(title, 0) + quantity

        self._save(target, {"items": merged}, commit=False)
        self.repo.delete_basket(source_id)
        self.repo.commit()

        logger.info(f"Merged basket {source_id} into {target_id}")
        return target_id

    def clear(self, basket_id: str) -> str:
        basket = self._get_or_fail(basket_id)
        self._save(basket, {"items": {}, "promo": ""})
        logger.info(f"Cleared basket {basket_id}")
        return basket_id

    def add_item(self, basket_id: str, title: str) -> str:
        basket = self._get_or_fail(basket_id)

        items = dict(basket.items or {})
        if title in items:
            raise BadRequestError(f"Item {title!r} is already in the basket")

        items[title] = 1
        self._save(basket, {"items": items})
        logger.info(f"Added {title!r} to basket {basket_id}")
        return basket_id

    def change_quantity(self, basket_id: str, updates: Dict[str, int]) -> str:
        basket = self._get_or_fail(basket_id)

        #applied in request order on a copy; first bad entry aborts the whole call
        items = dict(basket.items or {})
        for title, quantity in updates.items():
            if quantity < 0:
                raise BadRequestError(f"Quantity for {title!r} cannot be negative")
            if title not in items:
                raise BadRequestError(f"Item {title!r} is not in the basket")
            items[title] = quantity

        self._save(basket, {"items": items})
        logger.info(f"Changed quantities in basket {basket_id}: {updates}")
        return basket_id

    def remove_item(self, basket_id: str, title: str) -> str:
        basket = self._get_or_fail(basket_id)

        items = dict(basket.items or {})
        if title not in items:
            raise BadRequestError(f"Item {title!r} is not in the basket")

        del items[title]
        self._save(basket, {"items": items})
        logger.info(f"Removed {title!r} from basket {basket_id}")
        return basket_id

    def add_promo(self, basket_id: str, promo: str) -> str:
        basket = self._get_or_fail(basket_id)

        if promo not in self.promo_codes:
            raise BadRequestError(f"Promo code {promo!r} is not valid")

        self._save(basket, {"promo": promo})
        logger.info(f"Promo {promo!r} applied to basket {basket_id}")
        return basket_id

    def delete_promo(self, basket_id: str) -> BasketModel:
        basket = self._get_or_fail(basket_id)
        self._save(basket, {"promo": ""})
        logger.info(f"Promo removed from basket {basket_id}")
        return self._get_or_fail(basket_id)
