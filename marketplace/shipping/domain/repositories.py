"""
Shipping Repository
===================

Read-only access to countries, store shipping defaults, per-country rates and
free-shipping overrides used by ShippingService.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, List, Optional, Set

from marketplace.catalog.domain.models import ProductVariant, Store
from marketplace.shipping.domain.models import Country, FreeShipping, ShippingRate


class ShippingRepository(ABC):
    """Abstract interface for shipping reads."""

    @abstractmethod
    def find_country(self, code: Optional[str] = None, name: Optional[str] = None) -> Optional[Country]:
        """Country matching the ISO code (preferred) or the name, or None."""
        pass

    @abstractmethod
    def list_countries(self) -> List[Country]:
        """All countries ordered by name."""
        pass

    @abstractmethod
    def get_store(self, store_id: Any) -> Optional[Store]:
        pass

    @abstractmethod
    def get_store_by_url(self, url: str) -> Optional[Store]:
        pass

    @abstractmethod
    def find_shipping_rate(self, store_id: Any, country_id: Any) -> Optional[ShippingRate]:
        """The rate of exactly this store for exactly this country, or None."""
        pass

    @abstractmethod
    def list_shipping_rates(self, store_id: Any) -> List[ShippingRate]:
        pass

    @abstractmethod
    def free_shipping_country_ids(self, product_id: Any) -> Set[Any]:
        """Country ids of the product's FreeShipping override (empty without one)."""
        pass

    @abstractmethod
    def default_weight(self, product_id: Any) -> Decimal:
        """Weight of the product's first variant, 0 without variants."""
        pass


class DjangoShippingRepository(ShippingRepository):
    """ShippingRepository backed by the Django ORM."""

    def find_country(self, code: Optional[str] = None, name: Optional[str] = None) -> Optional[Country]:
        if code:
            matches = list(Country.objects.filter(code__iexact=code))
            if len(matches) > 1 and name:
                named = [country for country in matches if country.name.lower() == name.lower()]
                if named:
                    return named[0]
            if matches:
                return matches[0]
        if name:
            return Country.objects.filter(name__iexact=name).first()
        return None

    def list_countries(self) -> List[Country]:
        return list(Country.objects.order_by("name"))

    def get_store(self, store_id: Any) -> Optional[Store]:
        return Store.objects.filter(pk=store_id).first()

    def get_store_by_url(self, url: str) -> Optional[Store]:
        return Store.objects.filter(url=url).first()

    def find_shipping_rate(self, store_id: Any, country_id: Any) -> Optional[ShippingRate]:
        return ShippingRate.objects.filter(store_id=store_id, country_id=country_id).first()

    def list_shipping_rates(self, store_id: Any) -> List[ShippingRate]:
        return list(ShippingRate.objects.filter(store_id=store_id).select_related("country"))

    def free_shipping_country_ids(self, product_id: Any) -> Set[Any]:
        return set(
            FreeShipping.objects.filter(product_id=product_id).values_list("eligible_countries__id", flat=True)
        ) - {None}

    def default_weight(self, product_id: Any) -> Decimal:
        weight = (
            ProductVariant.objects.filter(product_id=product_id)
            .order_by("created_at", "id")
            .values_list("weight", flat=True)
            .first()
        )
        return weight if weight is not None else Decimal("0")
