# storefront/services/product_service.py
from collections import Counter
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.exceptions import BadRequestError
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SORT_COLUMNS = {
    "title": lambda p: p.title.lower(),
    "price": lambda p: p.sort_price,
    "dev_company": lambda p: (p.dev_company or "").lower(),
}
SORT_DIRECTIONS = ("up", "down")
HIDDEN_CATEGORY_MARKERS = ("Steam", "Valve")
TOP_LIMIT = 8


def _is_hidden_category(category: str) -> bool:
    return any(marker in category for marker in HIDDEN_CATEGORY_MARKERS)


def _contains_all(values: Iterable[str], required: List[str]) -> bool:
    return set(required).issubset(values or [])


def _top(counter: Counter) -> List[str]:
    # ties keep first-seen order
    return [name for name, _ in counter.most_common(TOP_LIMIT)]


class ProductService:
    """
    Catalog queries, read only.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def get_product(self, title: str) -> ProductModel:
        product = self.repo.get_by_title(title)
        if not product:
            raise BadRequestError(f'Product with title "{title}" not found')
        return product

    def get_random(self, num: int) -> List[ProductModel]:
        products = self.repo.get_random(num)
        if not products:
            raise BadRequestError("No random products found")
        return products

    def get_random_with_discount(self, num: int) -> List[ProductModel]:
        products = self.repo.get_random(num, discounted_only=True)
        if not products:
            raise BadRequestError("No random products with discount found")
        return products

    def get_catalog(
        self,
        page_number: int,
        page_limit: int,
        sort_column: str,
        sort_direction: str,
        tags: List[str] | None = None,
        themes: List[str] | None = None,
        genres: List[str] | None = None,
        min_price: Decimal = Decimal("0"),
        max_price: Decimal | None = None,
    ) -> Dict[str, Any]:
        if sort_column not in SORT_COLUMNS:
            raise BadRequestError("Invalid sort_column")
        if sort_direction not in SORT_DIRECTIONS:
            raise BadRequestError("Invalid sort_direction")

        tags, themes, genres = tags or [], themes or [], genres or []

        # price range in SQL, list containment in python (JSON columns)
        matching = [
            p
            for p in self.repo.get_in_price_range(min_price, max_price)
            if _contains_all(p.categories, tags)
            and _contains_all(p.themes, themes)
            and _contains_all(p.genres, genres)
        ]

        ordered = sorted(
            matching,
            key=SORT_COLUMNS[sort_column],
            reverse=sort_direction == "down",
        )
        skip = (page_number - 1) * page_limit

        logger.info(
            f"Catalog page {page_number} (limit {page_limit}): "
            f"{len(matching)} matching products"
        )
        return {
            "products": ordered[skip:skip + page_limit],
            "filters": {
                "themes": sorted({t for p in matching for t in p.themes or []}),
                "genres": sorted({g for p in matching for g in p.genres or []}),
                "tags": sorted({c for p in matching for c in p.categories or []}),
            },
            "total_products": len(matching),
        }

    def get_all_categories(self) -> List[str]:
        categories = {c for p in self.repo.get_all() for c in p.categories or []}
        return sorted(c for c in categories if not _is_hidden_category(c))

    def get_top_categories(self) -> List[str]:
        counter = Counter(
            c
            for p in self.repo.get_all()
            for c in p.categories or []
            if not _is_hidden_category(c)
        )
        return _top(counter)

    def get_top_first_genres(self) -> List[str]:
        return _top(Counter(p.genres[0] for p in self.repo.get_all() if p.genres))

    def get_top_first_themes(self) -> List[str]:
        return _top(Counter(p.themes[0] for p in self.repo.get_all() if p.themes))

    def search(self, query: str) -> List[ProductModel]:
        if not query or not query.strip():
            raise BadRequestError("Invalid search query")
        return self.repo.search_titles(query.strip())
