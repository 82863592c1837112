from .fees import compute_shipping_fee, is_free_shipping, validate_shipping_method
from .rates import ShippingParams, resolve_shipping_params, store_default_params
from .shipping_service import ShippingQuote, ShippingService


__all__ = [
    "ShippingParams",
    "ShippingQuote",
    "ShippingService",
    "compute_shipping_fee",
    "is_free_shipping",
    "resolve_shipping_params",
    "store_default_params",
    "validate_shipping_method",
]
