from .shipping import Country, FreeShipping, ShippingRate


__all__ = ["Country", "ShippingRate", "FreeShipping"]
