"""
Parser: Нормализация входа в масштабированное целое

Любой допустимый вход (число, строка, Currency) приводится к
целому int_value = value × 10^precision.

Вход классифицируется явно (InputKind), каждый вид обрабатывается
отдельной веткой; неизвестный вид либо даёт 0, либо InvalidInputError
(если error_on_invalid).

Пайплайн округления:
    1. масштабирование: value × 10^precision
    2. квантование до 4 знаков (снятие шума двоичного float)
    3. округление до целого half away from zero (если use_rounding)
"""

import logging
import math
import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from fractions import Fraction
from typing import Any, Protocol, Union, runtime_checkable

from currency_core.core.domain.settings import CurrencySettings
from currency_core.core.math.rounding import (
    quantize_scaled,
    round_half_away_from_zero,
)

logger = logging.getLogger(__name__)

# "(123.45)" → "-123.45"
_PARENTHESIZED_NEGATIVE = re.compile(r"\((.*)\)")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidInputError(ValueError):
    """
    Вход не является числом, строкой или Currency.

    Возникает только при error_on_invalid=True; иначе такой вход
    нормализуется в 0.
    """

    pass


# =============================================================================
# INPUT KINDS
# =============================================================================


class InputKind(str, Enum):
    """Вид входного значения"""

    CURRENCY = "currency"
    NUMBER = "number"
    STRING = "string"
    INVALID = "invalid"


@runtime_checkable
class CurrencyLike(Protocol):
    """Денежное значение: масштабированное целое, float-представление и настройки."""

    int_value: int
    value: float
    settings: CurrencySettings


def classify_input(value: Any) -> InputKind:
    """
    Классификация входного значения.

    bool не считается числом (True/False → INVALID).
    Decimal и Fraction считаются числами.
    """
    if isinstance(value, CurrencyLike):
        return InputKind.CURRENCY
    if isinstance(value, bool):
        return InputKind.INVALID
    if isinstance(value, (int, float, Decimal, Fraction)):
        return InputKind.NUMBER
    if isinstance(value, str):
        return InputKind.STRING
    return InputKind.INVALID


# =============================================================================
# STRING NORMALIZATION
# =============================================================================


def normalize_numeric_string(raw: str, decimal: str = ".") -> str:
    """
    Очистка строки до числового литерала.

    1. "(123)" → "-123"
    2. Удаление всего, кроме ASCII цифр, '-' и десятичного разделителя
    3. Десятичный разделитель → '.'

    Args:
        raw: Исходная строка (например, "$1,234.56")
        decimal: Десятичный разделитель из настроек

    Returns:
        Очищенная строка (может быть невалидным числом, например "" или "-")

    Examples:
        >>> normalize_numeric_string("$1,234.56")
        '1234.56'
        >>> normalize_numeric_string("(42.50)")
        '-42.50'
        >>> normalize_numeric_string("1.234,56 €", decimal=",")
        '1234.56'
    """
    text = _PARENTHESIZED_NEGATIVE.sub(r"-\1", raw, count=1)
    text = re.sub(f"[^-0-9{re.escape(decimal)}]", "", text)
    return text.replace(decimal, ".")


def _string_to_decimal(raw: str, decimal: str) -> Decimal:
    cleaned = normalize_numeric_string(raw, decimal)
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        logger.debug(f"Cannot parse {raw!r} as a number, falling back to 0")
        return Decimal(0)
    return number


# =============================================================================
# SCALING
# =============================================================================


def _scale_number(value: Union[int, float, Decimal, Fraction], factor: int) -> Union[int, float, Decimal]:
    if isinstance(value, int):
        return value * factor
    if isinstance(value, Decimal):
        if not value.is_finite():
            logger.debug(f"Non-finite number {value!r} normalized to 0")
            return 0
        return value * factor
    try:
        return float(value) * factor
    except OverflowError:
        return math.inf


def _fits_float(scaled: Union[int, float, Decimal]) -> bool:
    # Масштабированное значение должно иметь конечное float-представление:
    # через него считаются value, to_string и повторный parse
    try:
        return math.isfinite(float(scaled))
    except OverflowError:
        return False


def parse(value: Any, settings: CurrencySettings, use_rounding: bool = True) -> Union[int, float]:
    """
    Нормализация входа в масштабированное значение.

    Args:
        value: Число, строка или Currency
        settings: Настройки (precision, decimal, error_on_invalid)
        use_rounding: Округлять до целого. False используется делителем
            в divide: он должен сохранить дробную часть до деления

    Returns:
        int при use_rounding=True, иначе float, округлённый до 4 знаков

    Raises:
        InvalidInputError: Если вид входа INVALID и error_on_invalid=True

    Examples:
        >>> parse(1.005, DEFAULT_SETTINGS)
        101
        >>> parse("$1,234.56", DEFAULT_SETTINGS)
        123456
        >>> parse("(42.50)", DEFAULT_SETTINGS)
        -4250
    """
    kind = classify_input(value)
    factor = settings.precision_factor

    if kind is InputKind.CURRENCY:
        scaled = float(value.value) * factor
    elif kind is InputKind.NUMBER:
        scaled = _scale_number(value, factor)
    elif kind is InputKind.STRING:
        scaled = _string_to_decimal(value, settings.decimal) * factor
    else:
        if settings.error_on_invalid:
            raise InvalidInputError(f"Invalid input: {value!r} ({type(value).__name__})")
        logger.debug(f"Invalid input {value!r} normalized to 0")
        scaled = 0

    if not _fits_float(scaled):
        logger.debug(f"Input {value!r} is out of float range after scaling, normalized to 0")
        scaled = 0

    # Дополнительные знаки для корректного округления
    quantized = quantize_scaled(scaled)

    if use_rounding:
        return round_half_away_from_zero(quantized)
    return float(quantized)
