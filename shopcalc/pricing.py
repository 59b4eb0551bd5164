import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Awaitable, Callable

from .config import Settings
from .models import Cart

logger = logging.getLogger("shopcalc.pricing")

CENTS = Decimal("0.01")

Lookup = Callable[[Cart], Awaitable[object]]


def to_money(value) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    try:
        amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except InvalidOperation:
        raise TypeError(f"expected a number, got {value!r}") from None
    if not amount.is_finite():
        raise TypeError(f"expected a finite number, got {value!r}")
    return amount


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_subtotal(cart: Cart) -> Decimal:
    subtotal = quantize(cart.subtotal())
    logger.info("subtotal=%s", subtotal)
    return subtotal


async def cost_lookup(cart: Cart) -> Decimal:
    return calculate_subtotal(cart)


def shipping_fee(subtotal: Decimal, settings: Settings) -> Decimal:
    if subtotal == 0:
        return Decimal("0.00")
    threshold = settings.free_shipping_threshold
    if threshold is not None and subtotal >= threshold:
        return Decimal("0.00")
    return quantize(settings.shipping_fee)


def make_shipping_lookup(settings: Settings) -> Lookup:
    async def shipping_lookup(cart: Cart) -> Decimal:
        fee = shipping_fee(calculate_subtotal(cart), settings)
        logger.debug("shipping fee computed: %s", fee)
        return fee

    return shipping_lookup
