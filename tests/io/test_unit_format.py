from fractions import Fraction

import pytest

from quantext.core.unit import MalformedExponentError, NoUnits, UnitAtom, UnitExpression
from quantext.io.unit_format import exponent_text, format_unit, sorted_atoms, uses_division
from quantext.units.prefixes import Prefix


# -------------------------------
# Exponent spelling
# -------------------------------

@pytest.mark.parametrize("p, text", [
    (Fraction(1), ""),
    (Fraction(2), "^2"),
    (Fraction(-1), "^-1"),
    (Fraction(-3), "^-3"),
    (Fraction(1, 2), "^(1/2)"),
    (Fraction(-3, 4), "^(-3/4)"),
    (Fraction(1, 3), "^(1//3)"),
    (Fraction(2, 5), "^(2//5)"),
])
def test_exponent_text(p, text):
    assert exponent_text(p) == text


def test_exponent_text_rejects_zero():
    with pytest.raises(MalformedExponentError):
        exponent_text(Fraction(0))


# -------------------------------
# Canonical unit text
# -------------------------------

@pytest.mark.parametrize("build, text", [
    (lambda u: u.m ** 2, "m^2"),
    (lambda u: u.m * u.s ** 2, "m*s^2"),
    (lambda u: u.m ** -1 * u.s ** -1, "m^-1*s^-1"),
    (lambda u: u.m ** Fraction(1, 2) * u.s ** -2, "m^(1/2)*s^-2"),
    (lambda u: u.m * u.s ** -2, "m/s^2"),
    (lambda u: u.m ** Fraction(1, 3), "m^(1//3)"),
    (lambda u: u.km / u.h, "km/h"),
    (lambda u: u.kg * u.m ** 2 / u.s ** 3, "kg*m^2/s^3"),
    (lambda u: u.m / u.s / u.kg, "m/s/kg"),
    (lambda u: u.m, "m"),
    (lambda u: u("µs") ** -1, "µs^-1"),
])
def test_format_unit(u, build, text):
    expr = build(u)
    if not isinstance(expr, UnitExpression):
        expr = expr.as_expression()
    assert format_unit(expr) == text


def test_positive_atoms_are_written_first(u):
    assert format_unit(u.s ** -2 * u.m) == "m/s^2"
    assert format_unit(u.s ** -1 * u.kg * u.A ** -1 * u.m) == "kg*m/s/A"


def test_rational_exponent_disables_division(u):
    expr = u.m ** Fraction(3, 2) * u.s ** -1
    assert format_unit(expr) == "m^(3/2)*s^-1"


def test_empty_expression_is_empty_text(u_str):
    assert format_unit(NoUnits) == ""


def test_literal_wrap_mode(u, u_str):
    assert format_unit(u.m / u.s) == 'u"m/s"'
    assert format_unit(u.m.as_expression()) == 'u"m"'


def test_identifiers_come_from_the_context(u):
    expr = u.km * u.s ** -1
    assert format_unit(expr, context=[{"metre": u.m, "sec": u.s}]) == "kmetre/sec"


def test_unknown_unit_falls_back_to_abbr(furlong, u):
    expr = UnitExpression([UnitAtom(furlong, 2), u.s])
    assert format_unit(expr) == "fur^2*s"


# -------------------------------
# Helpers
# -------------------------------

def test_sorted_atoms_is_stable(u):
    expr = u.s ** -1 * u.m * u.A ** -2 * u.kg
    assert [a.unit.abbr for a in sorted_atoms(expr)] == ["m", "kg", "s", "A"]


def test_uses_division(u):
    assert uses_division(sorted_atoms(u.m / u.s))
    assert not uses_division(sorted_atoms(u.m ** -1 * u.s ** -1))
    assert not uses_division(sorted_atoms(u.m ** 0.5 / u.s))
    assert uses_division(sorted_atoms(u.m * u.s))


def test_prefix_symbol_precedes_identifier(u):
    expr = UnitExpression([UnitAtom(u.m, 2, Prefix.CENTI)])
    assert format_unit(expr) == "cm^2"


def test_explicit_literal_mode_overrides_the_environment(u, u_str):
    assert format_unit(u.m / u.s, u_str=False) == "m/s"
    assert format_unit(u.m / u.s, u_str=True) == 'u"m/s"'
