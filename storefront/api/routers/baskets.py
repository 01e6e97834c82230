#storefront/api/routers/baskets.py
from typing import Dict

from fastapi import APIRouter, Depends

from storefront.api.deps import get_basket_service, get_refresh_token
from storefront.domain.schemas import (
    BasketIdIn,
    BasketItemsOut,
    BasketLineOut,
    ChangeQuantityIn,
    ItemIn,
    MergeBasketsIn,
    PromoIn,
)
from storefront.services.basket_service import BasketService

router = APIRouter(prefix="/basket", tags=["basket"])


@router.post("/create")
def create_basket(svc: BasketService = Depends(get_basket_service)) -> str:
    return svc.create()


@router.post("/add-to-user")
def add_to_user(
    payload: BasketIdIn,
    refresh_token: str | None = Depends(get_refresh_token),
    svc: BasketService = Depends(get_basket_service),
) -> str:
    return svc.attach_to_user(payload.basket_id, refresh_token)


@router.post("/merge-baskets")
def merge_baskets(
    payload: MergeBasketsIn,
    svc: BasketService = Depends(get_basket_service),
) -> str:
    return svc.merge(payload.basket_anon_id, payload.basket_user_id)


@router.get("/{basket_id}/get-basket-items", response_model=BasketItemsOut)
def get_basket_items(basket_id: str, svc: BasketService = Depends(get_basket_service)):
    return svc.get_items(basket_id)


@router.get("/{basket_id}/get-basket-full", response_model=Dict[str, BasketLineOut])
def get_basket_full(basket_id: str, svc: BasketService = Depends(get_basket_service)):
    return svc.price(basket_id)


@router.delete("/{basket_id}/clear")
def clear_basket(basket_id: str, svc: BasketService = Depends(get_basket_service)) -> str:
    return svc.clear(basket_id)


@router.post("/{basket_id}/add-item")
def add_item(
    basket_id: str,
    payload: ItemIn,
    svc: BasketService = Depends(get_basket_service),
) -> str:
    return svc.add_item(basket_id, payload.title)


@router.patch("/{basket_id}/change-quantity")
def change_quantity(
    basket_id: str,
    payload: ChangeQuantityIn,
    svc: BasketService = Depends(get_basket_service),
) -> str:
    return svc.change_quantity(basket_id, payload.item_updates)


@router.post("/{basket_id}/remove-item")
def remove_item(
    basket_id: str,
    payload: ItemIn,
    svc: BasketService = Depends(get_basket_service),
) -> str:
    return svc.remove_item(basket_id, payload.title)


@router.post("/{basket_id}/add-promo")
def add_promo(
    basket_id: str,
    payload: PromoIn,
    svc: BasketService = Depends(get_basket_service),
) -> str:
    return svc.add_promo(basket_id, payload.promo)


@router.delete("/{basket_id}/delete-promo", response_model=BasketItemsOut)
def delete_promo(basket_id: str, svc: BasketService = Depends(get_basket_service)):
    basket = svc.delete_promo(basket_id)
    return {"basket_id": basket.basket_id, "items": basket.items or {}, "promo": basket.promo}
