"""Shipping fee methods a product can be billed with."""

ITEM = "ITEM"
WEIGHT = "WEIGHT"
FIXED = "FIXED"

SHIPPING_FEE_METHODS = (ITEM, WEIGHT, FIXED)

SHIPPING_FEE_METHOD_CHOICES = [
    (ITEM, "Item (fees calculated based on number of products)"),
    (WEIGHT, "Weight (fees calculated based on product weight)"),
    (FIXED, "Fixed (fixed fee regardless of quantity)"),
]
