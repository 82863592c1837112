"""
Shipping parameter resolution.

A store's ShippingRate for a country overrides the store defaults field by
field: a rate that only sets delivery times still bills with the store's
default fees.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

# (ShippingParams field, ShippingRate field, Store default field)
SHIPPING_FIELDS = (
    ("service", "shipping_service", "default_shipping_service"),
    ("fee_per_item", "shipping_fee_per_item", "default_shipping_fee_per_item"),
    ("fee_per_additional_item", "shipping_fee_for_additional_item", "default_shipping_fee_for_additional_item"),
    ("fee_per_kg", "shipping_fee_per_kg", "default_shipping_fee_per_kg"),
    ("fee_fixed", "shipping_fee_fixed", "default_shipping_fee_fixed"),
    ("delivery_time_min", "delivery_time_min", "default_delivery_time_min"),
    ("delivery_time_max", "delivery_time_max", "default_delivery_time_max"),
    ("return_policy", "return_policy", "return_policy"),
)


@dataclass(frozen=True)
class ShippingParams:
    service: str
    fee_per_item: Decimal
    fee_per_additional_item: Decimal
    fee_per_kg: Decimal
    fee_fixed: Decimal
    delivery_time_min: int
    delivery_time_max: int
    return_policy: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _is_set(value: Any) -> bool:
    # Blank text from a form counts as "not overridden"
    return value is not None and value != ""


def resolve_shipping_params(store, rate=None) -> ShippingParams:
    """
    Effective shipping parameters for one store and destination.

    Args:
        store: Store carrying the default shipping fields
        rate: ShippingRate of that store for the destination, or None

    Returns:
        ShippingParams where each field comes from ``rate`` when set, else from ``store``
    """
    values = {}
    for param, rate_field, store_field in SHIPPING_FIELDS:
        override = getattr(rate, rate_field, None) if rate is not None else None
        values[param] = override if _is_set(override) else getattr(store, store_field)

    for fee_field in ("fee_per_item", "fee_per_additional_item", "fee_per_kg", "fee_fixed"):
        values[fee_field] = Decimal(str(values[fee_field] or 0))

    return ShippingParams(**values)


def store_default_params(store) -> ShippingParams:
    return resolve_shipping_params(store, None)


def rate_overrides(rate) -> Optional[Dict[str, Any]]:
    """Only the fields a ShippingRate sets, keyed by ShippingParams names."""
    if rate is None:
        return None
    return {
        param: getattr(rate, rate_field)
        for param, rate_field, _ in SHIPPING_FIELDS
        if _is_set(getattr(rate, rate_field, None))
    }
