from marketplace.catalog.domain.models import (
    Category,
    Color,
    OfferTag,
    Product,
    ProductVariant,
    Size,
    Store,
    SubCategory,
    VariantImage,
)
from marketplace.shipping.domain.models import Country, FreeShipping, ShippingRate


__all__ = [
    "Category",
    "SubCategory",
    "OfferTag",
    "Store",
    "Product",
    "ProductVariant",
    "VariantImage",
    "Color",
    "Size",
    "Country",
    "ShippingRate",
    "FreeShipping",
]
