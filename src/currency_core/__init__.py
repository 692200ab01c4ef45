"""
currency_core: exact fixed-point arithmetic for monetary values.
"""

from currency_core.core.domain import (
    DEFAULT_SETTINGS,
    Currency,
    CurrencySettings,
    InvalidInputError,
    load_settings,
)

__version__ = "0.1.0"

__all__ = [
    "Currency",
    "CurrencySettings",
    "DEFAULT_SETTINGS",
    "InvalidInputError",
    "load_settings",
]
