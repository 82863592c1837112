"""
Catalog Repository
==================

Read-only access to the product catalog used by CatalogService and the
FilterPredicateBuilder. The Django implementation is wired by
``infrastructure.container``; tests may inject their own implementation.
"""

from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

from django.db.models import Prefetch, QuerySet

from marketplace.catalog.domain.models import Category, OfferTag, Product, ProductVariant, Size, Store, SubCategory
from marketplace.catalog.domain.services.filters import ProductPredicates


class CatalogRepository(ABC):
    """Abstract interface for catalog reads."""

    @abstractmethod
    def lookup_category_id(self, url: str) -> Optional[Any]:
        """Return the id of the category with this url, or None."""
        pass

    @abstractmethod
    def lookup_sub_category_id(self, url: str) -> Optional[Any]:
        """Return the id of the sub category with this url, or None."""
        pass

    @abstractmethod
    def lookup_offer_tag_id(self, url: str) -> Optional[Any]:
        """Return the id of the offer tag with this url, or None."""
        pass

    @abstractmethod
    def lookup_store_id(self, url: str) -> Optional[Any]:
        """Return the id of the store with this url, or None."""
        pass

    @abstractmethod
    def get_product_by_slug(self, slug: str) -> Optional[Product]:
        """Product with this slug and its store, or None."""
        pass

    @abstractmethod
    def count_products(self, predicates: ProductPredicates) -> int:
        """Number of products matching the predicates."""
        pass

    @abstractmethod
    def fetch_products(
        self, predicates: ProductPredicates, ordering: Sequence[str], offset: int, limit: int
    ) -> List[Product]:
        """
        One ordered window of matching products.

        Variants (restricted by the variant predicates), their images, sizes and
        colors are loaded eagerly.
        """
        pass

    @abstractmethod
    def fetch_ranking_rows(
        self, predicates: ProductPredicates, ordering: Sequence[str]
    ) -> List[Tuple[Any, List[Tuple[Any, Any]]]]:
        """
        Every matching product id, in ``ordering``, with the ``(price, discount)``
        pairs of all sizes of all its variants.
        """
        pass

    @abstractmethod
    def fetch_products_by_ids(self, product_ids: Sequence[Any], predicates: ProductPredicates) -> List[Product]:
        """Products for the given ids, returned in the same order, eagerly loaded."""
        pass


class DjangoCatalogRepository(CatalogRepository):
    """CatalogRepository backed by the Django ORM."""

    def lookup_category_id(self, url: str) -> Optional[Any]:
        return Category.objects.filter(url=url).values_list("id", flat=True).first()

    def lookup_sub_category_id(self, url: str) -> Optional[Any]:
        return SubCategory.objects.filter(url=url).values_list("id", flat=True).first()

    def lookup_offer_tag_id(self, url: str) -> Optional[Any]:
        return OfferTag.objects.filter(url=url).values_list("id", flat=True).first()

    def lookup_store_id(self, url: str) -> Optional[Any]:
        return Store.objects.filter(url=url).values_list("id", flat=True).first()

    def get_product_by_slug(self, slug: str) -> Optional[Product]:
        return Product.objects.select_related("store").filter(slug=slug).first()

    def _matching(self, predicates: ProductPredicates) -> QuerySet:
        return Product.objects.filter(*predicates.product_conditions)

    def _with_card_relations(self, queryset: QuerySet, predicates: ProductPredicates) -> QuerySet:
        variants = ProductVariant.objects.filter(*predicates.variant_conditions).prefetch_related(
            "images", "sizes", "colors"
        )
        return queryset.prefetch_related(Prefetch("variants", queryset=variants))

    def count_products(self, predicates: ProductPredicates) -> int:
        return self._matching(predicates).count()

    def fetch_products(
        self, predicates: ProductPredicates, ordering: Sequence[str], offset: int, limit: int
    ) -> List[Product]:
        queryset = self._with_card_relations(self._matching(predicates).order_by(*ordering), predicates)
        return list(queryset[offset : offset + limit])

    def fetch_ranking_rows(
        self, predicates: ProductPredicates, ordering: Sequence[str]
    ) -> List[Tuple[Any, List[Tuple[Any, Any]]]]:
        matching = self._matching(predicates)
        product_ids = list(matching.order_by(*ordering).values_list("pk", flat=True))

        prices: Dict[Any, List[Tuple[Any, Any]]] = defaultdict(list)
        size_rows = Size.objects.filter(variant__product__in=matching.order_by().values("pk")).values_list(
            "variant__product_id", "price", "discount"
        )
        for product_id, price, discount in size_rows:
            prices[product_id].append((price, discount))

        return [(product_id, prices.get(product_id, [])) for product_id in product_ids]

    def fetch_products_by_ids(self, product_ids: Sequence[Any], predicates: ProductPredicates) -> List[Product]:
        if not product_ids:
            return []
        queryset = self._with_card_relations(Product.objects.filter(pk__in=product_ids), predicates)
        by_id = {product.pk: product for product in queryset}
        return [by_id[product_id] for product_id in product_ids if product_id in by_id]
