from decimal import Decimal
from fractions import Fraction

import pytest

from quantext.core.quantity import Gain, Quantity
from quantext.core.unit import NoUnits
from quantext.io.brackets import BracketAware, has_unit_bracket, has_value_bracket


class Interval:
    """A user numeric type that decides its own grouping."""

    def __init__(self, lo, hi):
        self.lo, self.hi = lo, hi

    def __needs_bracket__(self):
        return True

    def __str__(self):
        return f"{self.lo}..{self.hi}"


class Tag:
    def __init__(self, text):
        self.text = text

    def __str__(self):
        return self.text


# -------------------------------
# Value brackets
# -------------------------------

@pytest.mark.parametrize("value", [3, -3, 0, 2.5, -1e-9, float("inf")])
def test_integers_and_reals_are_bare(value):
    assert not has_value_bracket(value)


@pytest.mark.parametrize("value", [Fraction(1, 2), Fraction(4, 1), 1 + 2j, 2j])
def test_rationals_and_complex_are_bracketed(value):
    assert has_value_bracket(value)


def test_log_quantities_are_bracketed(u):
    assert has_value_bracket(3 * u.dB)
    assert has_value_bracket(10 * u.dBm)


def test_quantity_is_judged_by_its_value(u):
    assert not has_value_bracket(3 * u.m)
    assert has_value_bracket(Fraction(1, 2) * u.m)
    assert has_value_bracket(Quantity(Gain(3, u.dB), u.m))


def test_bracket_aware_types_decide_for_themselves():
    iv = Interval(1, 2)
    assert isinstance(iv, BracketAware)
    assert has_value_bracket(iv)


@pytest.mark.parametrize("value, expected", [
    (Decimal("15"), False),
    (Decimal("1.5"), True),
    (Decimal("-2"), True),
    (Tag("42"), False),
    (Tag("4e2"), True),
])
def test_other_values_use_the_digit_heuristic(value, expected):
    assert has_value_bracket(value) is expected


# -------------------------------
# Unit brackets
# -------------------------------

def test_single_atom_units_are_bare(u):
    assert not has_unit_bracket(u.m)
    assert not has_unit_bracket(u.m ** 2)
    assert not has_unit_bracket(u.km)
    assert not has_unit_bracket(NoUnits)


def test_multi_atom_units_are_bracketed(u):
    assert has_unit_bracket(u.m / u.s)
    assert has_unit_bracket(2 * (u.m * u.kg))


def test_literal_wrap_never_needs_brackets(u, u_str):
    assert not has_unit_bracket(u.m / u.s)


def test_unit_bracket_rejects_other_types():
    with pytest.raises(TypeError):
        has_unit_bracket("m/s")


def test_explicit_literal_mode_overrides_the_environment(u):
    assert not has_unit_bracket(u.m / u.s, u_str=True)
    assert has_unit_bracket(u.m / u.s, u_str=False)
