"""
CurrencySettings: Конфигурация денежного значения

Immutable Pydantic модель настроек, с которыми создаётся Currency.
Каждое денежное значение несёт свой экземпляр настроек и передаёт его
во все производные значения.

Настройки собираются один раз при создании значения: частичные
переопределения накладываются на DEFAULT_SETTINGS и валидируются,
общий объект defaults никогда не мутирует.
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator

from currency_core.core.contracts import validate_currency_settings


# =============================================================================
# SETTINGS MODEL
# =============================================================================


class CurrencySettings(BaseModel):
    """
    Настройки парсинга, арифметики и форматирования денежного значения.

    Immutable модель (frozen=True). Поля с camelCase alias принимают
    ключи в стиле исходной JS-библиотеки (formatWithSymbol, useVedic, ...).
    """

    # Символы форматирования
    symbol: str = Field("$", description="Символ валюты (подставляется вместо '!')")
    separator: str = Field(",", description="Разделитель групп разрядов")
    decimal: str = Field(".", min_length=1, description="Десятичный разделитель")

    # Флаги
    format_with_symbol: bool = Field(
        False, alias="formatWithSymbol", description="format() по умолчанию выводит символ"
    )
    error_on_invalid: bool = Field(
        False, alias="errorOnInvalid", description="Невалидный вход → InvalidInputError вместо 0"
    )

    # Точность
    precision: int = Field(2, ge=0, le=300, description="Количество дробных разрядов")
    increment: Optional[float] = Field(
        None, gt=0, description="Шаг округления для to_string (default: 10^-precision)"
    )

    # Шаблоны ('!': символ, '#': число)
    pattern: str = Field("!#", description="Шаблон для value >= 0")
    negative_pattern: str = Field(
        "-!#", alias="negativePattern", description="Шаблон для value < 0"
    )

    # Группировка разрядов
    use_vedic: bool = Field(
        False, alias="useVedic", description="Индийская группировка (12,34,567)"
    )

    # Арифметика с нулевым значением: multiply/divide/distribute
    # по умолчанию возвращают None для int_value == 0
    allow_zero_arithmetic: bool = Field(
        False, description="Разрешить multiply/divide/distribute для нулевой суммы"
    )

    model_config = {"frozen": True, "extra": "forbid", "populate_by_name": True}

    @field_validator("decimal")
    @classmethod
    def validate_decimal_char(cls, v: str) -> str:
        """Десятичный разделитель не может содержать цифры или минус."""
        if any(ch.isdigit() or ch == "-" for ch in v):
            raise ValueError(f"decimal {v!r} must not contain digits or '-'")
        return v

    @field_validator("pattern", "negative_pattern")
    @classmethod
    def validate_number_placeholder(cls, v: str) -> str:
        """Шаблон обязан содержать плейсхолдер числа '#'."""
        if "#" not in v:
            raise ValueError(f"pattern {v!r} must contain the '#' placeholder")
        return v

    @property
    def precision_factor(self) -> int:
        """Масштаб 10^precision."""
        return 10**self.precision

    @property
    def effective_increment(self) -> float:
        """Шаг округления to_string: increment или наименьшая единица."""
        return self.increment or 1 / self.precision_factor


DEFAULT_SETTINGS: Final[CurrencySettings] = CurrencySettings()

SettingsLike = Union[CurrencySettings, Mapping[str, Any], None]

# camelCase alias → имя поля
_ALIASES: Final[Dict[str, str]] = {
    field.alias: name
    for name, field in CurrencySettings.model_fields.items()
    if field.alias
}


# =============================================================================
# MERGE
# =============================================================================


def normalize_keys(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Приведение ключей переопределений к именам полей.

    Examples:
        >>> normalize_keys({"useVedic": True, "precision": 3})
        {'use_vedic': True, 'precision': 3}
    """
    return {_ALIASES.get(key, key): value for key, value in overrides.items()}


def resolve_settings(
    settings: SettingsLike = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CurrencySettings:
    """
    Структурное слияние переопределений поверх базовых настроек.

    Args:
        settings: Базовые настройки. CurrencySettings используется как база,
            Mapping трактуется как частичные переопределения поверх
            DEFAULT_SETTINGS, None → DEFAULT_SETTINGS
        overrides: Дополнительные частичные переопределения (применяются последними)

    Returns:
        Новый валидированный CurrencySettings (или базовый экземпляр,
        если переопределений нет)

    Raises:
        pydantic.ValidationError: Если итоговые настройки невалидны
            (неизвестный ключ, precision < 0, increment <= 0, ...)
    """
    if isinstance(settings, CurrencySettings):
        base = settings
        merged: Dict[str, Any] = {}
    else:
        base = DEFAULT_SETTINGS
        merged = normalize_keys(settings or {})

    merged.update(normalize_keys(overrides or {}))
    if not merged:
        return base

    return CurrencySettings.model_validate({**base.model_dump(), **merged})


# =============================================================================
# CONFIG FILES
# =============================================================================


def load_settings(path: Union[str, Path]) -> CurrencySettings:
    """
    Загрузка настроек из JSON файла.

    Документ проверяется JSON Schema контрактом currency_settings,
    затем накладывается на DEFAULT_SETTINGS.

    Args:
        path: Путь к JSON файлу настроек

    Returns:
        Валидированный CurrencySettings

    Raises:
        FileNotFoundError: Если файл не найден
        json.JSONDecodeError: Если файл не является валидным JSON
        jsonschema.ValidationError: Если документ нарушает контракт
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_currency_settings(data)
    return resolve_settings(data)
