import pytest

from quantext.units.prefixes import PREFIX_SYMBOLS_DESC, Prefix


@pytest.mark.parametrize("prefix, symbol, power", [
    (Prefix.KILO, "k", 3),
    (Prefix.MILLI, "m", -3),
    (Prefix.MICRO, "µ", -6),
    (Prefix.DECA, "da", 1),
    (Prefix.QUETTA, "Q", 30),
    (Prefix.NONE, "", 0),
])
def test_symbol_and_power(prefix, symbol, power):
    assert prefix.symbol == symbol
    assert prefix.power == power
    assert str(prefix) == symbol


def test_factor():
    assert Prefix.KILO.factor == pytest.approx(1e3)
    assert Prefix.NANO.factor == pytest.approx(1e-9)
    assert Prefix.NONE.factor == 1.0


def test_from_symbol():
    assert Prefix.from_symbol("k") is Prefix.KILO
    assert Prefix.from_symbol("da") is Prefix.DECA
    assert Prefix.from_symbol("x") is None
    # the empty prefix is not something a symbol can be split into
    assert Prefix.from_symbol("") is None


def test_longest_symbols_come_first():
    assert PREFIX_SYMBOLS_DESC[0] == "da"
    assert "" not in PREFIX_SYMBOLS_DESC
    assert len(PREFIX_SYMBOLS_DESC) == len(Prefix) - 1
