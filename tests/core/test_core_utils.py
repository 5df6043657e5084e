from decimal import Decimal
from fractions import Fraction
import math

import pytest

from quantext.core.utils import rationalize, value_to_text


# -------------------------------
# rationalize
# -------------------------------

@pytest.mark.parametrize("x, expected", [
    (3, Fraction(3)),
    (-2, Fraction(-2)),
    (Fraction(6, 4), Fraction(3, 2)),
    (0.5, Fraction(1, 2)),
    (-0.25, Fraction(-1, 4)),
    (1 / 3, Fraction(1, 3)),
    (2.0, Fraction(2)),
])
def test_rationalize_accepts_simple_ratios(x, expected):
    assert rationalize(x) == expected


@pytest.mark.parametrize("x", [math.pi, math.sqrt(2), 1e-7])
def test_rationalize_rejects_irrational_looking_floats(x):
    with pytest.raises(ValueError):
        rationalize(x)


@pytest.mark.parametrize("x", [float("nan"), float("inf"), float("-inf")])
def test_rationalize_rejects_non_finite(x):
    with pytest.raises(ValueError):
        rationalize(x)


@pytest.mark.parametrize("x", [True, "2", Decimal("0.5"), 1j, None])
def test_rationalize_rejects_other_types(x):
    with pytest.raises(TypeError):
        rationalize(x)


# -------------------------------
# value_to_text
# -------------------------------

@pytest.mark.parametrize("value, text", [
    (3, "3"),
    (-3, "-3"),
    (2.5, "2.5"),
    (Fraction(1, 2), "1/2"),
    (Decimal("1.50"), "1.50"),
    (1 + 2j, "1+2j"),
    (-1 - 2j, "-1-2j"),
    (2j, "2j"),
])
def test_value_to_text(value, text):
    assert value_to_text(value) == text
