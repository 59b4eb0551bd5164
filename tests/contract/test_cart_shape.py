import json
from decimal import Decimal

import pytest

from common.factories import make_cart, make_items
from shopcalc.errors import LookupFailed, LookupTimeout, ShopCalcError
from shopcalc.service import print_total


@pytest.mark.contract
def test_cart_to_dict_shape():
    # 契约测试：字典结构与键的形状
    d = make_cart(make_items(2)).to_dict()
    assert set(d.keys()) == {"items", "count"}
    assert d["count"] == 2
    assert set(d["items"][0].keys()) == {"name", "price", "quantity"}
    assert isinstance(d["items"][0]["price"], str)


@pytest.mark.contract
def test_printed_total_shape(capsys):
    text = print_total(Decimal("25"))
    assert capsys.readouterr().out.strip() == text
    assert json.loads(text) == {"total": "25.00"}


@pytest.mark.contract
def test_lookup_errors_carry_stage():
    err = LookupTimeout("shipping", "no result within 1.0s")
    assert isinstance(err, LookupFailed)
    assert isinstance(err, ShopCalcError)
    assert err.stage == "shipping"
    assert str(err) == "shipping lookup failed: no result within 1.0s"
