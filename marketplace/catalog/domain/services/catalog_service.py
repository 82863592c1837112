"""
CatalogService - Product browsing

Resolves a browse request (filters, sort key, page) into a page of simplified
product cards for the storefront catalog.
"""

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Union

from marketplace.catalog.domain.models.catalog import Product
from marketplace.catalog.domain.services.filters import FilterPredicateBuilder, ProductFilterRequest
from marketplace.catalog.domain.services.pricing_service import VariantPriceResolver
from marketplace.infra.observability.metrics import catalog_queries_total, catalog_query_results
from marketplace.infra.observability.tracing import tracer
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


logger = logging.getLogger(__name__)

SORT_MOST_POPULAR = "most-popular"
SORT_NEW_ARRIVALS = "new-arrivals"
SORT_TOP_RATED = "top-rated"
SORT_PRICE_LOW_TO_HIGH = "price-low-to-high"
SORT_PRICE_HIGH_TO_LOW = "price-high-to-low"

DEFAULT_ORDERING = ["-created_at", "pk"]

# Structural sorts are pushed down to the database; "-created_at", "pk" keep ties deterministic.
STRUCTURAL_ORDERINGS = {
    SORT_MOST_POPULAR: ["-views", "-created_at", "pk"],
    SORT_NEW_ARRIVALS: DEFAULT_ORDERING,
    SORT_TOP_RATED: ["-rating", "-created_at", "pk"],
}

# Price sorts rank by the lowest discounted size price (value: descending?)
PRICE_SORTS = {
    SORT_PRICE_LOW_TO_HIGH: False,
    SORT_PRICE_HIGH_TO_LOW: True,
}

SORT_KEYS = tuple(STRUCTURAL_ORDERINGS) + tuple(PRICE_SORTS)


class CatalogService(BaseService):
    """
    Service for browsing the product catalog.

    Responsibilities:
    - Compose filter predicates (FilterPredicateBuilder)
    - Sort by views, recency, rating or discounted price (VariantPriceResolver)
    - Paginate and project products into card dicts

    Price sorts rank the whole filtered set before the page is cut, so page 2 of
    ``price-low-to-high`` continues where page 1 stopped.
    """

    def __init__(self, repository=None, price_resolver: Optional[VariantPriceResolver] = None):
        """
        Initialize CatalogService.

        Args:
            repository: CatalogRepository (injected via DI container)
            price_resolver: VariantPriceResolver used for price ranking
        """
        super().__init__()
        if repository is None:
            from infrastructure.container import container

            repository = container.catalog_repository()
        self.repository = repository
        self.price_resolver = price_resolver or VariantPriceResolver()
        self.predicate_builder = FilterPredicateBuilder(repository)

    @BaseService.log_performance
    def list_products(
        self,
        filters: Optional[Union[ProductFilterRequest, Mapping[str, Any]]] = None,
        sort_key: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        List products matching the filters, sorted and paginated.

        Args:
            filters: ProductFilterRequest, or a dict of its snake_case fields
            sort_key: most-popular, new-arrivals, top-rated, price-low-to-high or
                      price-high-to-low; anything else keeps newest first
            page: Page number (1-indexed)
            page_size: Items per page

        Returns:
            ServiceResult with {products, total_pages, current_page, page_size, total_count}

        Example:
            >>> result = catalog_service.list_products(
            ...     filters={"category": "fashion", "size": ["M"]},
            ...     sort_key="price-low-to-high",
            ...     page=1,
            ... )
            >>> if result.ok:
            ...     cards = result.value["products"]
        """
        with tracer.start_as_current_span("catalog_list_products") as span:
            if not isinstance(page, int) or page < 1:
                return service_err(ErrorCodes.INVALID_INPUT, f"page must be an integer >= 1, got {page!r}")
            if not isinstance(page_size, int) or page_size < 1:
                return service_err(ErrorCodes.INVALID_INPUT, f"page_size must be an integer >= 1, got {page_size!r}")

            if not isinstance(filters, ProductFilterRequest):
                filters = ProductFilterRequest.from_dict(filters)

            sort_label = sort_key if sort_key in SORT_KEYS else "default"
            span.set_attribute("sort", sort_label)
            span.set_attribute("page", page)

            try:
                predicates = self.predicate_builder.build(filters)
                offset = (page - 1) * page_size

                if sort_key in PRICE_SORTS:
                    rows = self.repository.fetch_ranking_rows(predicates, DEFAULT_ORDERING)
                    ranked = self.price_resolver.sort_by_ranking_price(rows, descending=PRICE_SORTS[sort_key])
                    total_count = len(ranked)
                    page_ids = [product_id for product_id, _ in ranked[offset : offset + page_size]]
                    products = self.repository.fetch_products_by_ids(page_ids, predicates)
                else:
                    ordering = STRUCTURAL_ORDERINGS.get(sort_key, DEFAULT_ORDERING)
                    total_count = self.repository.count_products(predicates)
                    products = (
                        self.repository.fetch_products(predicates, ordering, offset, page_size)
                        if offset < total_count
                        else []
                    )

                result_data = {
                    "products": [self.project_product(product) for product in products],
                    "total_pages": math.ceil(total_count / page_size),
                    "current_page": page,
                    "page_size": page_size,
                    "total_count": total_count,
                }

                span.set_attribute("result.count", total_count)
                catalog_queries_total.labels(sort=sort_label, status="ok").inc()
                catalog_query_results.observe(total_count)

                self.logger.info(
                    f"Listed products: filters={filters.to_log_dict()}, sort={sort_label}, "
                    f"count={total_count}, page={page}/{result_data['total_pages']}"
                )

                return service_ok(result_data)

            except Exception as e:
                self.logger.error(f"Error listing products: {e}", exc_info=True)
                span.record_exception(e)
                catalog_queries_total.labels(sort=sort_label, status="error").inc()
                return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_product(self, slug: str) -> ServiceResult[Product]:
        """
        Get a product by slug, with its store loaded.

        Returns:
            ServiceResult with Product, or product_not_found
        """
        try:
            product = self.repository.get_product_by_slug(slug)
        except Exception as e:
            self.logger.error(f"Error getting product {slug}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        if product is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {slug} not found")
        return service_ok(product)

    def project_product(self, product: Product) -> Dict[str, Any]:
        """
        Simplified card shape of a product.

        Only the variants loaded for the request (those matching the variant
        filters) are shown. ``min_price`` is the lowest discounted price among them.
        """
        variants = list(product.variants.all())
        min_price = self.price_resolver.product_ranking_price(product)

        return {
            "id": str(product.id),
            "slug": product.slug,
            "name": product.name,
            "rating": product.rating,
            "sales": product.sales,
            "num_reviews": product.num_reviews,
            "min_price": self.price_resolver.display_price(min_price) if min_price is not None else None,
            "variants": [self._project_variant(variant) for variant in variants],
            "variant_images": [
                {
                    "url": f"/product/{product.slug}/{variant.slug}",
                    "image": variant.variant_image or self._first_image_url(variant),
                }
                for variant in variants
            ],
        }

    def _project_variant(self, variant) -> Dict[str, Any]:
        return {
            "variant_id": str(variant.id),
            "variant_slug": variant.slug,
            "variant_name": variant.variant_name,
            "images": [{"url": image.url, "alt": image.alt} for image in variant.images.all()],
            "sizes": [
                {
                    "id": size.id,
                    "size": size.size,
                    "price": size.price,
                    "discount": size.discount,
                    "quantity": size.quantity,
                }
                for size in variant.sizes.all()
            ],
            "colors": [color.name for color in variant.colors.all()],
        }

    @staticmethod
    def _first_image_url(variant) -> Optional[str]:
        images: List = list(variant.images.all())
        return images[0].url if images else None
