class ShippingError(Exception):
    """Base exception for shipping computations."""

    pass


class InvalidShippingMethodError(ShippingError):
    """A product carries a shipping fee method outside ITEM / WEIGHT / FIXED."""

    def __init__(self, method):
        self.method = method
        super().__init__(f"Unsupported shipping fee method: {method!r}")


class UnserviceableDestinationError(ShippingError):
    """The destination country is not known, so nothing can be shipped there."""

    def __init__(self, code=None, name=None):
        self.code = code
        self.name = name
        super().__init__(f"No shipping available to country code={code!r} name={name!r}")
