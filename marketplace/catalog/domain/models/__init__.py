from .catalog import Color, Product, ProductVariant, Size, VariantImage
from .store import Store
from .taxonomy import Category, OfferTag, SubCategory


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
]
