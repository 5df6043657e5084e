"""
quantext.io
===========

Round-trip text output for units and quantities.

Every entry point accepts an optional ``context`` (a
:class:`FormatContext`, a list of scopes, or one scope) naming where unit
identifiers are looked up; by default the process-wide ``DEFAULT_CONTEXT``
is used.
"""

from quantext.io.brackets import BracketAware, has_unit_bracket, has_value_bracket
from quantext.io.context import (
    DEFAULT_CONTEXT,
    FormatContext,
    add_context,
    remove_context,
)
from quantext.io.quantity_format import (
    NO_UNITS_TEXT,
    format_log,
    format_quantity,
    format_range,
    to_string,
)
from quantext.io.settings import U_STR_ENV, is_u_str_expression
from quantext.io.symbols import DEFAULT_RESOLVER, SymbolResolver, resolve_symbol
from quantext.io.unit_format import format_unit

__all__ = [
    "BracketAware",
    "DEFAULT_CONTEXT",
    "DEFAULT_RESOLVER",
    "FormatContext",
    "NO_UNITS_TEXT",
    "SymbolResolver",
    "U_STR_ENV",
    "add_context",
    "format_log",
    "format_quantity",
    "format_range",
    "format_unit",
    "has_unit_bracket",
    "has_value_bracket",
    "is_u_str_expression",
    "remove_context",
    "resolve_symbol",
    "to_string",
]
