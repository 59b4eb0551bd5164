from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, List

from .errors import InvalidCartItem


def _to_price(value) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise InvalidCartItem(f"price must be a number, got {type(value).__name__}")
    try:
        # float 经 str 转换，避免 0.1 变成二进制近似值
        price = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except InvalidOperation:
        raise InvalidCartItem(f"price must be a number, got {value!r}") from None
    if not price.is_finite():
        raise InvalidCartItem(f"price must be finite, got {value!r}")
    if price < 0:
        raise InvalidCartItem(f"price must not be negative, got {value!r}")
    return price


@dataclass(frozen=True)
class LineItem:
    name: str
    price: Decimal
    quantity: int

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidCartItem("name must be a non-empty string")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidCartItem(f"quantity must be an integer, got {type(self.quantity).__name__}")
        if self.quantity < 0:
            raise InvalidCartItem(f"quantity must not be negative, got {self.quantity}")
        object.__setattr__(self, "price", _to_price(self.price))

    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class Cart:
    items: List[LineItem] = field(default_factory=list)

    def add(self, item: LineItem) -> None:
        self.items.append(item)

    def subtotal(self) -> Decimal:
        return sum((i.subtotal() for i in self.items), Decimal("0"))

    def to_dict(self) -> Dict[str, object]:
        return {
            "items": [
                {"name": i.name, "price": str(i.price), "quantity": i.quantity}
                for i in self.items
            ],
            "count": len(self.items),
        }
