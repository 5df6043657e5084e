import pytest

import quantext.units.registry as regmod
from quantext.units.registry import _bootstrap_default_registry


@pytest.fixture()
def fresh_registry():
    return _bootstrap_default_registry()


def test__get_default_registry_returns_DEFAULT(monkeypatch, fresh_registry):
    # Patch the DEFAULT_REGISTRY and verify the helper returns it
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", fresh_registry, raising=True)

    import quantext.units as units
    get_default = getattr(units, "_get_default_registry")

    assert get_default() is fresh_registry
    assert units.DEFAULT_REGISTRY is fresh_registry


def test_lazy_u_binds_to_default_registry(monkeypatch, fresh_registry):
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", fresh_registry, raising=True)

    from quantext.units import u
    assert u._reg is fresh_registry
    # one namespace per registry
    assert u is fresh_registry.as_namespace()

    assert u.m is fresh_registry.get("m")


def test_unknown_module_attribute_raises_attributeerror():
    import quantext.units as units
    with pytest.raises(AttributeError):
        _ = getattr(units, "definitely_not_a_public_attr")


def test_dir_includes_u():
    import quantext.units as units
    names = dir(units)
    assert "u" in names
    assert "DEFAULT_REGISTRY" in names
    assert names == sorted(names)
