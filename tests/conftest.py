# tests/conftest.py
import pytest

from quantext.core.unit import Unit
from quantext.io.settings import U_STR_ENV
from quantext.io.symbols import DEFAULT_RESOLVER, SymbolResolver
from quantext.units.registry import DEFAULT_REGISTRY as _ureg
from quantext.units.registry import _bootstrap_default_registry


@pytest.fixture(autouse=True)
def _clean_format_state(monkeypatch):
    """Each test starts in bare-expression mode with an empty symbol cache."""
    monkeypatch.delenv(U_STR_ENV, raising=False)
    DEFAULT_RESOLVER.clear_cache()
    yield
    DEFAULT_RESOLVER.clear_cache()


@pytest.fixture(scope="session")
def ureg():
    return _ureg


@pytest.fixture(scope="session")
def u(ureg):
    return ureg.as_namespace()


@pytest.fixture()
def reg():
    """Fresh, fully-bootstrapped UnitsRegistry for isolation per test."""
    return _bootstrap_default_registry()


@pytest.fixture()
def resolver():
    return SymbolResolver()


@pytest.fixture()
def u_str(monkeypatch):
    """Switch on quoted-literal unit output."""
    monkeypatch.setenv(U_STR_ENV, "true")


@pytest.fixture()
def furlong():
    """A unit no default scope knows about."""
    return Unit("furlong", "fur")
