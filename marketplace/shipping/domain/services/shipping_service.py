"""
ShippingService - Shipping quotes

Computes the shipping fee and delivery details of a product for the visitor's
country. Resolution order:

1. the destination must exist in the Country table (else: unserviceable)
2. free-shipping eligibility of the product for that country
3. the store's ShippingRate for the country, field by field over store defaults
4. the product's fee method formula (ITEM / WEIGHT / FIXED)
"""

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from marketplace.infra.observability.metrics import shipping_fee_amount, shipping_quotes_total
from marketplace.infra.observability.tracing import tracer
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from marketplace.shipping.domain.exceptions import InvalidShippingMethodError, UnserviceableDestinationError
from marketplace.shipping.domain.services.fees import compute_shipping_fee, is_free_shipping
from marketplace.shipping.domain.services.rates import (
    ShippingParams,
    rate_overrides,
    resolve_shipping_params,
    store_default_params,
)


logger = logging.getLogger(__name__)


@dataclass
class ShippingQuote:
    fee: Decimal
    service: str
    delivery_time_min: int
    delivery_time_max: int
    return_policy: str
    is_free_shipping: bool
    shipping_fee_method: str
    country_code: str
    country_name: str
    quantity: int
    weight: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ShippingService(BaseService):
    """
    Service for shipping fee computation.

    Responsibilities:
    - Resolve effective shipping parameters per (store, country)
    - Quote a product's shipping fee for a destination and quantity
    - Expose a store's default shipping details and per-country rates

    An unknown destination is reported as ``unserviceable_destination``, never as
    a zero fee.
    """

    def __init__(self, repository=None):
        """
        Initialize ShippingService.

        Args:
            repository: ShippingRepository (injected via DI container)
        """
        super().__init__()
        if repository is None:
            from infrastructure.container import container

            repository = container.shipping_repository()
        self.repository = repository

    @BaseService.log_performance
    def resolve_shipping_params(self, store_id: Any, country_id: Any) -> ServiceResult[ShippingParams]:
        """
        Effective shipping parameters of a store for a country.

        Returns:
            ServiceResult with ShippingParams, or store_not_found
        """
        store = self.repository.get_store(store_id)
        if store is None:
            return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store {store_id} not found")

        rate = self.repository.find_shipping_rate(store_id, country_id)
        return service_ok(resolve_shipping_params(store, rate))

    @BaseService.log_performance
    def get_shipping_details(
        self,
        product,
        country: Mapping[str, Any],
        quantity: int = 1,
        weight: Optional[Any] = None,
    ) -> ServiceResult[ShippingQuote]:
        """
        Shipping quote of a product for the visitor's country.

        Args:
            product: Product (its store is used for rates)
            country: Resolved visitor country, ``{"name": ..., "code": ...}``
            quantity: Number of units
            weight: Unit weight in kg; defaults to the product's first variant weight

        Returns:
            ServiceResult with ShippingQuote

        Errors:
            unserviceable_destination: the country is not in the Country table
            invalid_shipping_method: the product's fee method is not ITEM/WEIGHT/FIXED
            invalid_input: quantity < 1 or a negative weight

        Example:
            >>> result = shipping_service.get_shipping_details(product, {"name": "Canada", "code": "CA"}, 3)
            >>> if result.ok:
            ...     print(result.value.fee)
        """
        with tracer.start_as_current_span("shipping_get_details") as span:
            method = product.shipping_fee_method
            span.set_attribute("product.id", str(product.pk))
            span.set_attribute("shipping.method", str(method))
            span.set_attribute("country.code", str(country.get("code")))

            try:
                destination = self._resolve_country(country)
                eligible_ids = (
                    None
                    if product.free_shipping_for_all_countries
                    else self.repository.free_shipping_country_ids(product.pk)
                )
                free = is_free_shipping(product, destination.id, eligible_ids)

                rate = self.repository.find_shipping_rate(product.store_id, destination.id)
                params = resolve_shipping_params(product.store, rate)

                if weight is None:
                    weight = self.repository.default_weight(product.pk)

                fee = compute_shipping_fee(method, params, free, weight=weight, quantity=quantity)

            except UnserviceableDestinationError as e:
                self.logger.info(f"Unserviceable destination for product {product.pk}: {e}")
                shipping_quotes_total.labels(method=str(method), outcome="unserviceable").inc()
                return service_err(ErrorCodes.UNSERVICEABLE_DESTINATION, str(e))
            except InvalidShippingMethodError as e:
                self.logger.error(f"Product {product.pk} has an invalid shipping method: {e}")
                span.record_exception(e)
                shipping_quotes_total.labels(method=str(method), outcome="invalid_method").inc()
                return service_err(ErrorCodes.INVALID_SHIPPING_METHOD, str(e))
            except ValueError as e:
                return service_err(ErrorCodes.INVALID_INPUT, str(e))
            except Exception as e:
                self.logger.error(f"Error computing shipping for product {product.pk}: {e}", exc_info=True)
                span.record_exception(e)
                return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

            quote = ShippingQuote(
                fee=fee,
                service=params.service,
                delivery_time_min=params.delivery_time_min,
                delivery_time_max=params.delivery_time_max,
                return_policy=params.return_policy,
                is_free_shipping=free,
                shipping_fee_method=method,
                country_code=destination.code,
                country_name=destination.name,
                quantity=quantity,
                weight=Decimal(str(weight)),
            )

            shipping_quotes_total.labels(method=method, outcome="free" if free else "charged").inc()
            shipping_fee_amount.observe(float(fee))
            span.set_attribute("shipping.fee", str(fee))

            return service_ok(quote)

    @BaseService.log_performance
    def get_store_default_shipping(self, store_url: str) -> ServiceResult[ShippingParams]:
        """Default shipping details of a store (the fallback tier)."""
        store = self.repository.get_store_by_url(store_url)
        if store is None:
            return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store {store_url} not found")
        return service_ok(store_default_params(store))

    @BaseService.log_performance
    def list_store_shipping_rates(self, store_url: str) -> ServiceResult[List[Dict[str, Any]]]:
        """
        Every country with the store's rate for it.

        Countries without a rate are included with ``shipping_rate`` None.
        Sorted by country name.
        """
        store = self.repository.get_store_by_url(store_url)
        if store is None:
            return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store {store_url} not found")

        rates_by_country = {rate.country_id: rate for rate in self.repository.list_shipping_rates(store.pk)}
        countries = sorted(self.repository.list_countries(), key=lambda country: country.name)

        return service_ok(
            [
                {
                    "country": {"id": str(country.id), "name": country.name, "code": country.code},
                    "shipping_rate": rate_overrides(rates_by_country.get(country.id)),
                }
                for country in countries
            ]
        )

    def _resolve_country(self, country: Mapping[str, Any]):
        code = (country.get("code") or "").strip() or None
        name = (country.get("name") or "").strip() or None

        destination = self.repository.find_country(code=code, name=name)
        if destination is None:
            raise UnserviceableDestinationError(code=code, name=name)
        return destination
