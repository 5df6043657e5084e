"""
quantext.io.settings
====================

Process-wide formatting switches sourced from the environment.

``QUANTEXT_U_STR``
    When ``true`` (any case) or ``1``, unit text is emitted as a quoted unit
    literal ``u"..."`` instead of a bare expression. Read once per formatting
    call, so a change to the environment takes effect on the next call.
"""

from __future__ import annotations

import os

U_STR_ENV = "QUANTEXT_U_STR"


def _parse_bool(raw: str | None) -> bool | None:
    if raw is None:
        return None
    v = raw.strip().lower()
    if v in ("true", "1"):
        return True
    if v in ("false", "0"):
        return False
    return None


def is_u_str_expression() -> bool:
    """True when literal-wrap mode is enabled; unset or unparsable means off."""
    return _parse_bool(os.environ.get(U_STR_ENV)) is True


def wrap_u_str(text: str) -> str:
    return f'u"{text}"'


__all__ = ["U_STR_ENV", "is_u_str_expression", "wrap_u_str"]
