"""
Product filter requests and the predicate builder that turns them into ORM conditions.

Every populated filter contributes one condition and all conditions are ANDed.
References by url (category, sub category, offer tag, store) that do not resolve
contribute nothing: an unknown key widens the result instead of emptying it.
"""

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from django.db.models import Exists, OuterRef, Q

from marketplace.catalog.domain.models.catalog import Color, ProductVariant, Size
from marketplace.infra.observability.metrics import catalog_unresolved_filters_total


logger = logging.getLogger(__name__)


def _parse_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed


def _as_list(value: Any) -> List[str]:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item not in (None, "")]
    return [str(value)]


@dataclass
class ProductFilterRequest:
    """Loosely-typed browse filters. Every field is optional."""

    search: Optional[str] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    offer: Optional[str] = None
    store: Optional[str] = None
    size: List[str] = field(default_factory=list)
    color: List[str] = field(default_factory=list)
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    product_id_to_exclude: Optional[str] = None

    def __post_init__(self):
        self.search = (self.search or "").strip() or None
        self.size = _as_list(self.size)
        self.color = _as_list(self.color)
        self.min_price = _parse_decimal(self.min_price)
        self.max_price = _parse_decimal(self.max_price)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProductFilterRequest":
        """Build from a dict of snake_case filter names, ignoring unknown keys."""
        data = data or {}
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        return cls(**known)

    @classmethod
    def from_query_params(cls, params) -> "ProductFilterRequest":
        """
        Build from storefront query parameters.

        ``size`` and ``color`` may be repeated (``?size=S&size=M``) or given once.
        Non-numeric prices are ignored.
        """

        def getlist(key: str) -> List[str]:
            if hasattr(params, "getlist"):
                return params.getlist(key)
            return _as_list(params.get(key))

        return cls(
            search=params.get("search"),
            category=params.get("category"),
            sub_category=params.get("subCategory"),
            offer=params.get("offer"),
            store=params.get("store"),
            size=getlist("size"),
            color=getlist("color"),
            min_price=params.get("minPrice"),
            max_price=params.get("maxPrice"),
            product_id_to_exclude=params.get("productId"),
        )

    def to_log_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in self.__dict__.items() if value not in (None, [], "")}


@dataclass
class ProductPredicates:
    """
    Conditions produced by FilterPredicateBuilder.

    ``product_conditions`` filter Product rows. ``variant_conditions`` filter
    ProductVariant rows and are also used to pick which variants a card shows.
    """

    product_conditions: List[Any] = field(default_factory=list)
    variant_conditions: List[Any] = field(default_factory=list)


class FilterPredicateBuilder:
    """
    Translates a ProductFilterRequest into ORM conditions.

    Variant-scoped filters (size, color, price range) are evaluated together as a
    single EXISTS over the product's variants, so one variant has to satisfy all
    of them. A product with variant A (sizes S, M) and variant B (size L) matches
    ``size=["M"]`` through A.
    """

    def __init__(self, repository):
        self.repository = repository

    def build(self, request: ProductFilterRequest) -> ProductPredicates:
        predicates = ProductPredicates()

        if request.search:
            predicates.product_conditions.append(self._search_condition(request.search))

        self._add_reference(predicates, "category", request.category, self.repository.lookup_category_id)
        self._add_reference(
            predicates, "sub_category", request.sub_category, self.repository.lookup_sub_category_id
        )
        self._add_reference(predicates, "offer_tag", request.offer, self.repository.lookup_offer_tag_id)
        self._add_reference(predicates, "store", request.store, self.repository.lookup_store_id)

        predicates.variant_conditions = self._variant_conditions(request)
        if predicates.variant_conditions:
            predicates.product_conditions.append(
                Exists(ProductVariant.objects.filter(product=OuterRef("pk")).filter(*predicates.variant_conditions))
            )

        if request.product_id_to_exclude:
            try:
                excluded_id = uuid.UUID(str(request.product_id_to_exclude))
            except ValueError:
                logger.debug(f"Ignoring malformed product id to exclude: {request.product_id_to_exclude!r}")
            else:
                predicates.product_conditions.append(~Q(pk=excluded_id))

        return predicates

    def _add_reference(self, predicates: ProductPredicates, field_name: str, url: Optional[str], lookup) -> None:
        if not url:
            return
        resolved_id = lookup(url)
        if resolved_id is None:
            logger.debug(f"Unresolved {field_name} filter '{url}', skipping")
            catalog_unresolved_filters_total.labels(filter=field_name).inc()
            return
        predicates.product_conditions.append(Q(**{f"{field_name}_id": resolved_id}))

    @staticmethod
    def _search_condition(search: str) -> Q:
        matching_variants = ProductVariant.objects.filter(
            Q(variant_name__icontains=search) | Q(variant_description__icontains=search)
        ).values("product_id")
        return Q(name__icontains=search) | Q(description__icontains=search) | Q(pk__in=matching_variants)

    @staticmethod
    def _variant_conditions(request: ProductFilterRequest) -> List[Any]:
        conditions = []

        if request.size:
            conditions.append(Exists(Size.objects.filter(variant=OuterRef("pk"), size__in=request.size)))

        if request.color:
            conditions.append(Exists(Color.objects.filter(variant=OuterRef("pk"), name__in=request.color)))

        if request.min_price is not None or request.max_price is not None:
            price_range = Q(price__gte=request.min_price if request.min_price is not None else Decimal("0"))
            if request.max_price is not None:
                price_range &= Q(price__lte=request.max_price)
            conditions.append(Exists(Size.objects.filter(price_range, variant=OuterRef("pk"))))

        return conditions
