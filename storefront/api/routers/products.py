from typing import List

from fastapi import APIRouter, Depends, Query

from storefront.api.deps import get_product_service
from storefront.domain.schemas import CatalogIn, CatalogOut, ProductOut, ProductSearchOut
from storefront.services.product_service import ProductService

router = APIRouter(tags=["products"])


@router.get("/product/{title}", response_model=ProductOut)
def get_product(title: str, svc: ProductService = Depends(get_product_service)):
    return svc.get_product(title)


@router.get("/random-products", response_model=List[ProductOut])
def random_products(
    num: int = Query(4, ge=1, le=50),
    svc: ProductService = Depends(get_product_service),
):
    return svc.get_random(num)


@router.get("/random-products-discount", response_model=List[ProductOut])
def random_products_discount(
    num: int = Query(4, ge=1, le=50),
    svc: ProductService = Depends(get_product_service),
):
    return svc.get_random_with_discount(num)


@router.post("/product/catalog", response_model=CatalogOut)
def catalog(payload: CatalogIn, svc: ProductService = Depends(get_product_service)):
    result = svc.get_catalog(
        page_number=payload.page_number,
        page_limit=payload.page_limit,
        sort_column=payload.sort_column,
        sort_direction=payload.sort_direction,
        tags=payload.tags,
        themes=payload.themes,
        genres=payload.genres,
        min_price=payload.min_price,
        max_price=payload.max_price,
    )
    return CatalogOut(
        products=[ProductOut.model_validate(p) for p in result["products"]],
        filters=result["filters"],
        total_products=result["total_products"],
    )


@router.get("/categories", response_model=List[str])
def all_categories(svc: ProductService = Depends(get_product_service)):
    return svc.get_all_categories()


@router.get("/top-categories", response_model=List[str])
def top_categories(svc: ProductService = Depends(get_product_service)):
    return svc.get_top_categories()


@router.get("/top-genres", response_model=List[str])
def top_genres(svc: ProductService = Depends(get_product_service)):
    return svc.get_top_first_genres()


@router.get("/top-themes", response_model=List[str])
def top_themes(svc: ProductService = Depends(get_product_service)):
    return svc.get_top_first_themes()


@router.get("/search", response_model=List[ProductSearchOut])
def search(
    query: str = Query(..., min_length=1),
    svc: ProductService = Depends(get_product_service),
):
    return svc.search(query)
