"""
Free-shipping eligibility and the per-method fee formulas.

    ITEM    fee_per_item + fee_per_additional_item * max(quantity - 1, 0)
    WEIGHT  fee_per_kg * weight * quantity
    FIXED   fee_fixed
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from marketplace.shipping.domain.exceptions import InvalidShippingMethodError
from marketplace.shipping.domain.methods import FIXED, ITEM, SHIPPING_FEE_METHODS, WEIGHT
from marketplace.shipping.domain.services.rates import ShippingParams

ZERO = Decimal("0")
CENT = Decimal("0.01")


def is_free_shipping(product, country_id: Any, eligible_country_ids: Optional[Iterable[Any]] = None) -> bool:
    """
    Whether ``product`` ships for free to ``country_id``.

    ``eligible_country_ids`` are the countries of the product's FreeShipping
    override; None (no override) behaves like an empty set.
    """
    if product.free_shipping_for_all_countries:
        return True
    if not eligible_country_ids:
        return False
    return country_id in set(eligible_country_ids)


def validate_shipping_method(method: str) -> str:
    if method not in SHIPPING_FEE_METHODS:
        raise InvalidShippingMethodError(method)
    return method


def compute_shipping_fee(
    method: str, params: ShippingParams, is_free: bool, weight: Any = None, quantity: int = 1
) -> Decimal:
    """
    Shipping fee for ``quantity`` units.

    Raises:
        InvalidShippingMethodError: method is not ITEM, WEIGHT or FIXED (checked even when free)
        ValueError: quantity below 1, a negative weight, or no weight for WEIGHT
    """
    validate_shipping_method(method)

    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
        raise ValueError(f"Quantity must be a positive integer, got {quantity!r}")

    if weight is not None:
        weight = Decimal(str(weight))
        if weight < 0:
            raise ValueError(f"Weight cannot be negative, got {weight}")

    if is_free:
        return ZERO.quantize(CENT)

    if method == ITEM:
        fee = params.fee_per_item + params.fee_per_additional_item * max(quantity - 1, 0)
    elif method == WEIGHT:
        if weight is None:
            raise ValueError("Weight is required for WEIGHT shipping")
        fee = params.fee_per_kg * weight * quantity
    elif method == FIXED:
        fee = params.fee_fixed
    else:
        raise InvalidShippingMethodError(method)

    return max(fee, ZERO).quantize(CENT, rounding=ROUND_HALF_UP)
