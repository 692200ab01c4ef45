"""
Core math modules для currency_core

Примитивы округления и квантования с гарантией детерминированности.
"""

from currency_core.core.math.rounding import (
    SCALED_PRE_ROUND_PLACES,
    is_valid_float,
    quantize_places,
    quantize_scaled,
    round_half_away_from_zero,
    round_to_increment,
    sanitize_float,
    to_fixed,
)

__all__ = [
    # Constants
    "SCALED_PRE_ROUND_PLACES",
    # NaN/Inf sanitization
    "is_valid_float",
    "sanitize_float",
    # Quantization
    "quantize_places",
    "quantize_scaled",
    "round_half_away_from_zero",
    "round_to_increment",
    "to_fixed",
]
