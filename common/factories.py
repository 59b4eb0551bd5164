from dataclasses import dataclass
from decimal import Decimal
from typing import List

from shopcalc.config import Settings
from shopcalc.models import Cart, LineItem


@dataclass(frozen=True)
class Defaults:
    base_price: Decimal = Decimal("10.00")
    shipping_fee: Decimal = Decimal("5.00")


def make_items(n: int = 1, base: Decimal = Defaults.base_price, quantity: int = 1) -> List[LineItem]:
    return [LineItem(name=f"ITEM-{i}", price=base + i, quantity=quantity) for i in range(n)]


def make_cart(items: List[LineItem] = None) -> Cart:
    c = Cart()
    if items:
        for i in items:
            c.add(i)
    return c


def make_settings(**overrides) -> Settings:
    values = {"shipping_fee": Defaults.shipping_fee}
    values.update(overrides)
    return Settings(**values)
