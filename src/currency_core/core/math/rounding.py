"""
Rounding: Детерминированные примитивы округления

Модуль обеспечивает численную устойчивость денежных вычислений:
- Санитизация NaN/Inf для предотвращения распространения невалидных значений
- Двухступенчатое квантование масштабированного значения:
  сначала до 4 знаков (снятие шума двоичного float), затем до целого
- Округление half away from zero (1.5 → 2, -1.5 → -2)
- Округление до произвольного шага (increment)
- Fixed-point рендеринг без отрицательного нуля

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все округления выполняются через Decimal от точного двоичного значения float
2. Ничья (ровно .5) всегда округляется от нуля
3. NaN/Inf никогда не пропагируют (заменяются на fallback)
4. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final, Union

# =============================================================================
# ПАРАМЕТРЫ КВАНТОВАНИЯ
# =============================================================================

# Количество знаков предварительного округления масштабированного значения.
# 1.005 * 100 = 100.49999999999999 в float; после квантования до 4 знаков
# получаем 100.5000, что затем корректно округляется до 101.
SCALED_PRE_ROUND_PLACES: Final[int] = 4

Number = Union[int, float, Decimal]


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Санитизация float: замена NaN/Inf на fallback значение.

    Args:
        value: Исходное значение
        fallback: Значение для замены NaN/Inf (default: 0.0)

    Returns:
        value если валидное, иначе fallback

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


# =============================================================================
# КВАНТОВАНИЕ
# =============================================================================


def _as_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # Decimal(float) сохраняет точное двоичное значение, без repr-округления
    return Decimal(value)


def quantize_places(value: Number, places: int) -> Decimal:
    """
    Округление до заданного количества знаков после запятой.

    Ничья округляется от нуля (семантика fixed-point рендеринга:
    среди двух ближайших кандидатов выбирается больший по модулю).

    Args:
        value: Исходное значение (int, float или Decimal, конечное)
        places: Количество знаков после запятой (>= 0)

    Returns:
        Decimal с ровно `places` знаками после запятой

    Raises:
        ValueError: Если places < 0 или value не конечно
    """
    if places < 0:
        raise ValueError(f"places must be non-negative, got {places}")

    number = _as_decimal(value)
    if not number.is_finite():
        raise ValueError(f"value must be finite, got {value}")

    exponent = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # Точности контекста должно хватать на все целые разряды
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        return number.quantize(exponent, rounding=ROUND_HALF_UP)


def quantize_scaled(value: Number, places: int = SCALED_PRE_ROUND_PLACES) -> Decimal:
    """
    Первая ступень квантования масштабированного значения.

    Снимает артефакты двоичного представления, возникшие при умножении
    на 10^precision.

    Examples:
        >>> quantize_scaled(1.005 * 100)
        Decimal('100.5000')
    """
    return quantize_places(value, places)


def round_half_away_from_zero(value: Number) -> int:
    """
    Округление до ближайшего целого, ничья: от нуля.

    Отличается от встроенного round() (banker's rounding):
    round(2.5) == 2, а round_half_away_from_zero(2.5) == 3.

    Args:
        value: Значение для округления (конечное)

    Returns:
        Ближайшее целое

    Examples:
        >>> round_half_away_from_zero(2.5)
        3
        >>> round_half_away_from_zero(-2.5)
        -3
        >>> round_half_away_from_zero(Decimal("100.5000"))
        101
    """
    return int(quantize_places(value, 0))


def round_to_increment(value: float, increment: float) -> float:
    """
    Округление значения до ближайшего кратного шага.

    Используется для отображения (например, округление до 0.05).

    Args:
        value: Значение для округления
        increment: Шаг квантования (> 0)

    Returns:
        Округлённое значение

    Raises:
        ValueError: Если increment <= 0

    Examples:
        >>> round_to_increment(1.23, 0.05)
        1.25
        >>> round_to_increment(125.0, 10.0)
        130.0
    """
    if increment <= 0:
        raise ValueError(f"increment must be positive, got {increment}")

    steps = round_half_away_from_zero(sanitize_float(value / increment))

    # steps: int, поэтому 0 * increment == 0.0 без знака
    return steps * increment


def to_fixed(value: Number, digits: int) -> str:
    """
    Fixed-point рендеринг с ровно `digits` знаками после запятой.

    Отрицательный ноль не выводится: -0.001 с digits=2 → "0.00".

    Examples:
        >>> to_fixed(1234.5, 2)
        '1234.50'
        >>> to_fixed(0.125, 2)
        '0.13'
        >>> to_fixed(-0.0, 2)
        '0.00'
    """
    quantized = quantize_places(value, digits)
    if quantized.is_zero():
        quantized = quantized.copy_abs()
    return format(quantized, "f")
