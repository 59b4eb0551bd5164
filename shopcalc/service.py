import asyncio
import inspect
import json
import logging
from decimal import Decimal
from typing import Callable, Optional

from .config import Settings
from .errors import LookupFailed, LookupTimeout
from .models import Cart, LineItem
from .pricing import Lookup, cost_lookup, make_shipping_lookup, quantize, to_money

logger = logging.getLogger("shopcalc.service")

Sink = Callable[[Decimal], object]


def print_total(total: Decimal) -> str:
    text = json.dumps({"total": str(quantize(total))}, ensure_ascii=False)
    print(text)
    return text


class CartTotalCalculator:
    """Sums the cost and shipping lookups for a cart and publishes the total.

    The shipping lookup starts only after the cost lookup has resolved. The
    running total lives in the ``compute_total`` frame, so concurrent calls
    never share an accumulator. A failing lookup raises ``LookupFailed`` and
    the sink is left untouched.
    """

    def __init__(
        self,
        cost_lookup: Lookup,
        shipping_lookup: Lookup,
        sink: Sink,
        timeout: Optional[float] = None,
    ):
        self.cost_lookup = cost_lookup
        self.shipping_lookup = shipping_lookup
        self.sink = sink
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings, sink: Sink = print_total) -> "CartTotalCalculator":
        return cls(
            cost_lookup=cost_lookup,
            shipping_lookup=make_shipping_lookup(settings),
            sink=sink,
            timeout=settings.lookup_timeout,
        )

    async def compute_total(self, cart: Cart) -> Decimal:
        total = Decimal("0")
        total += await self._lookup("cost", self.cost_lookup, cart)
        total += await self._lookup("shipping", self.shipping_lookup, cart)

        result = self.sink(total)
        if inspect.isawaitable(result):
            await result
        logger.info("cart total delivered: %s (%d items)", total, len(cart.items))
        return total

    async def _lookup(self, stage: str, lookup: Lookup, cart: Cart) -> Decimal:
        try:
            if self.timeout is None:
                raw = await lookup(cart)
            else:
                raw = await asyncio.wait_for(lookup(cart), self.timeout)
        except asyncio.TimeoutError as exc:
            reason = "timed out" if self.timeout is None else f"no result within {self.timeout}s"
            logger.warning("%s lookup %s", stage, reason)
            raise LookupTimeout(stage, reason) from exc
        except Exception as exc:
            logger.warning("%s lookup failed: %s", stage, exc)
            raise LookupFailed(stage, str(exc) or type(exc).__name__) from exc

        try:
            amount = to_money(raw)
        except TypeError as exc:
            logger.warning("%s lookup returned %r", stage, raw)
            raise LookupFailed(stage, str(exc)) from exc
        logger.debug("%s=%s", stage, amount)
        return amount


async def add_item_to_cart(
    cart: Cart, name: str, price, quantity: int, calculator: CartTotalCalculator
) -> Cart:
    cart.add(LineItem(name=name, price=price, quantity=quantity))
    await calculator.compute_total(cart)
    return cart
