"""
Formatting: Рендеринг масштабированного целого в строку

- to_plain_string: десятичная строка с ровно precision знаками,
  с учётом шага округления increment
- format_with_pattern: подстановка в шаблон ('!': символ, '#': число)
  с группировкой разрядов
- group_digits: группировка по 3 (стандарт) или 3+2+2... (индийская)
"""

from typing import Optional

from currency_core.core.domain.settings import CurrencySettings
from currency_core.core.math.rounding import round_to_increment, to_fixed

SYMBOL_PLACEHOLDER = "!"
NUMBER_PLACEHOLDER = "#"


def group_digits(digits: str, separator: str, use_vedic: bool = False) -> str:
    """
    Вставка разделителя групп разрядов за один проход справа налево.

    Стандартная группировка: по 3 цифры. Индийская (vedic): первая
    группа справа из 3 цифр, далее по 2.

    Examples:
        >>> group_digits("1234567", ",")
        '1,234,567'
        >>> group_digits("1234567", ",", use_vedic=True)
        '12,34,567'
        >>> group_digits("123", ",")
        '123'
    """
    groups = []
    end = len(digits)
    size = 3

    while end > 0:
        start = max(end - size, 0)
        groups.append(digits[start:end])
        end = start
        if use_vedic:
            size = 2

    return separator.join(reversed(groups))


def to_plain_string(int_value: int, settings: CurrencySettings) -> str:
    """
    Десятичная строка без символа и группировки.

    Значение округляется до settings.effective_increment,
    затем выводится с ровно settings.precision знаками.

    Examples:
        >>> to_plain_string(123456, DEFAULT_SETTINGS)
        '1234.56'
    """
    value = int_value / settings.precision_factor
    rounded = round_to_increment(value, settings.effective_increment)
    return to_fixed(rounded, settings.precision)


def format_with_pattern(
    plain: str,
    is_negative: bool,
    settings: CurrencySettings,
    use_symbol: Optional[bool] = None,
) -> str:
    """
    Форматирование по шаблону настроек.

    Args:
        plain: Результат to_plain_string
        is_negative: Выбор negative_pattern вместо pattern
        settings: Настройки форматирования
        use_symbol: Выводить символ валюты (default: settings.format_with_symbol)

    Returns:
        Отформатированная строка, например "$1,234.56" или "-$0.50"
    """
    if use_symbol is None:
        use_symbol = settings.format_with_symbol

    unsigned = plain[1:] if plain.startswith("-") else plain
    whole, _, fraction = unsigned.partition(".")

    number = group_digits(whole, settings.separator, settings.use_vedic)
    if fraction:
        number += settings.decimal + fraction

    template = settings.negative_pattern if is_negative else settings.pattern
    return template.replace(
        SYMBOL_PLACEHOLDER, settings.symbol if use_symbol else "", 1
    ).replace(NUMBER_PLACEHOLDER, number, 1)
