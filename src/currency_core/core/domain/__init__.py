"""
Domain models and value objects.

Contains the Currency value object, its settings, parser and formatter.
"""

from currency_core.core.domain.currency import Currency
from currency_core.core.domain.formatting import (
    format_with_pattern,
    group_digits,
    to_plain_string,
)
from currency_core.core.domain.parser import (
    InputKind,
    InvalidInputError,
    classify_input,
    normalize_numeric_string,
    parse,
)
from currency_core.core.domain.settings import (
    DEFAULT_SETTINGS,
    CurrencySettings,
    load_settings,
    normalize_keys,
    resolve_settings,
)

__all__ = [
    # Currency model
    "Currency",
    # Settings
    "CurrencySettings",
    "DEFAULT_SETTINGS",
    "load_settings",
    "normalize_keys",
    "resolve_settings",
    # Parser
    "InputKind",
    "InvalidInputError",
    "classify_input",
    "normalize_numeric_string",
    "parse",
    # Formatting
    "format_with_pattern",
    "group_digits",
    "to_plain_string",
]
