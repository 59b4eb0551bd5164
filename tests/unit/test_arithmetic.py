from decimal import Decimal
from fractions import Fraction

import pytest

from shopcalc.arithmetic import calculate_square, is_even


@pytest.mark.unit
@pytest.mark.parametrize(
    "number,expect",
    [(3, 9), (0, 0), (-4, 16), (1.5, 2.25), (Decimal("0.5"), Decimal("0.25")), (Fraction(1, 3), Fraction(1, 9))],
    ids=["positive", "zero", "negative", "float", "decimal", "fraction"],
)
def test_calculate_square(number, expect):
    assert calculate_square(number) == expect


@pytest.mark.unit
@pytest.mark.parametrize(
    "number,expect",
    [(4, True), (5, False), (0, True), (-4, True), (-3, False), (2.0, True), (2.5, False)],
    ids=["four", "five", "zero", "neg-even", "neg-odd", "float-even", "non-integer"],
)
def test_is_even(number, expect):
    # 取模语义沿用 Python 原生 %
    assert is_even(number) is expect


@pytest.mark.unit
@pytest.mark.parametrize("bad", ["a", None, True, [2], 1j], ids=["str", "none", "bool", "list", "complex"])
def test_non_numeric_input_raises_type_error(bad):
    with pytest.raises(TypeError, match="Input must be a number"):
        calculate_square(bad)
    with pytest.raises(TypeError, match="Input must be a number"):
        is_even(bad)


@pytest.mark.unit
def test_helpers_are_pure():
    # 同一输入重复调用，结果一致
    assert calculate_square(7) == calculate_square(7) == 49
    assert is_even(10) is is_even(10) is True
