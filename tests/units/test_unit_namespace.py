# pytest tests for quantext.units.registry.UnitNamespace

import pytest

from quantext.core.quantity import LogUnit
from quantext.core.unit import Unit, UnitExpression
from quantext.units.prefixes import Prefix
from quantext.units.registry import UnitNamespace


@pytest.fixture()
def ns(reg):
    """A UnitNamespace over an isolated registry."""
    return reg.as_namespace()


# ---------------------------------------------------------------------------
# Access styles: __call__, __getattr__
# ---------------------------------------------------------------------------

def test_namespace_call_returns_unit(ns, reg):
    m = ns("m")
    assert isinstance(m, Unit)
    assert m is reg.get("m")
    assert m.name == "meter"


def test_namespace_getattr_returns_unit(ns):
    assert ns.s == Unit("second", "s")
    assert isinstance(ns.dB, LogUnit)


def test_namespace_prefixed_attribute(ns):
    km = ns.km
    assert isinstance(km, UnitExpression)
    (atom,) = km
    assert atom.prefix is Prefix.KILO
    assert atom.unit is ns.m


def test_unknown_attribute_raises_attributeerror(ns):
    with pytest.raises(AttributeError):
        ns.definitely_not_a_unit
    assert not hasattr(ns, "furlong")


def test_unknown_call_raises_valueerror(ns):
    with pytest.raises(ValueError):
        ns("furlong")


def test_contains(ns):
    assert "m" in ns
    assert "km" in ns
    assert "ohm" in ns
    assert "furlong" not in ns


# ---------------------------------------------------------------------------
# define / lookup / names
# ---------------------------------------------------------------------------

def test_define_registers_a_new_unit(ns, reg):
    fur = ns.define("fur", "furlong")
    assert fur == Unit("furlong", "fur")
    assert ns.fur is fur
    assert reg.get("fur") is fur


def test_define_without_name_uses_abbr(ns):
    assert ns.define("smoot").name == "smoot"


def test_define_duplicate_requires_replace(ns):
    with pytest.raises(ValueError):
        ns.define("m", "minim")
    minim = ns.define("m", "minim", replace=True)
    assert ns.m is minim


def test_define_reserved_name_is_rejected(ns):
    with pytest.raises(ValueError):
        ns.define("define")
    with pytest.raises(ValueError):
        ns.define("lookup")


def test_lookup_returns_none_for_unknown(ns):
    assert ns.lookup("furlong") is None
    assert ns.lookup("m") is ns.m


def test_names_lists_units_then_aliases(ns):
    names = list(ns.names())
    assert names.index("m") < names.index("ohm")
    assert "Ω" in names
    # synthesized prefixed symbols are not enumerated
    assert "km" not in names


def test_dir_contains_units_and_methods(ns):
    d = dir(ns)
    assert "m" in d
    assert "define" in d
    assert d == sorted(d)


def test_repr(ns, reg):
    assert repr(ns) == f"<UnitNamespace of {len(reg.all())} units>"


def test_one_namespace_per_registry(reg):
    assert reg.as_namespace() is reg.as_namespace()
    assert isinstance(reg.as_namespace(), UnitNamespace)
