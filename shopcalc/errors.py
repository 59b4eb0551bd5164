class ShopCalcError(Exception):
    """Base class for shopcalc errors."""
    pass


class InvalidCartItem(ShopCalcError, ValueError):
    """Line item data rejected at the cart boundary."""
    pass


class LookupFailed(ShopCalcError):
    """A cost or shipping lookup did not produce a usable amount."""

    def __init__(self, stage: str, reason: str):
        self.stage = stage
        self.reason = reason
        super().__init__(f"{stage} lookup failed: {reason}")


class LookupTimeout(LookupFailed):
    pass


class ConfigError(ShopCalcError):
    pass
