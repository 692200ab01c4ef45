"""
Currency: Денежное значение с фиксированной точкой

Immutable Pydantic модель. Каноническое представление: масштабированное
целое int_value = value × 10^precision; вся арифметика выполняется над ним,
что исключает накопление ошибок двоичного float.

Каждая операция возвращает новый Currency с настройками получателя:
результат делится обратно на 10^precision и повторно проходит через
parse, что гарантирует квантование к точности получателя.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. int_value всегда int
2. Экземпляр никогда не мутирует (frozen=True)
3. sum(x.distribute(n)) == x для любого n > 0
4. multiply/divide/distribute для int_value == 0 возвращают None
   (если не включён allow_zero_arithmetic)
"""

import logging
from fractions import Fraction
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from currency_core.core.domain.formatting import format_with_pattern, to_plain_string
from currency_core.core.domain.parser import InputKind, InvalidInputError, classify_input, parse
from currency_core.core.domain.settings import CurrencySettings, SettingsLike, resolve_settings

logger = logging.getLogger(__name__)


class Currency(BaseModel):
    """
    Денежное значение.

    Examples:
        >>> Currency(1.005).int_value
        101
        >>> Currency("$1,234.56").format(True)
        '$1,234.56'
        >>> [part.int_value for part in Currency(1).distribute(3)]
        [34, 33, 33]
    """

    int_value: int = Field(..., description="Масштабированное целое: value × 10^precision")
    value: float = Field(..., description="int_value / 10^precision (float-представление)")
    settings: CurrencySettings = Field(..., description="Настройки, с которыми создано значение")

    model_config = {"frozen": True}

    def __init__(self, value: Any, settings: SettingsLike = None, **overrides: Any):
        """
        Args:
            value: Число, строка или другой Currency
            settings: CurrencySettings или частичные переопределения (dict)
            **overrides: Переопределения отдельных полей настроек
                (например, precision=3, symbol="€")

        Raises:
            InvalidInputError: Если вход невалиден и error_on_invalid=True
            pydantic.ValidationError: Если настройки невалидны
        """
        resolved = resolve_settings(settings, overrides)
        int_value = parse(value, resolved)
        super().__init__(
            int_value=int_value,
            value=int_value / resolved.precision_factor,
            settings=resolved,
        )

    @property
    def precision_factor(self) -> int:
        """Масштаб 10^precision."""
        return self.settings.precision_factor

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def _derive(self, value: Any) -> "Currency":
        return Currency(value, self.settings)

    def _unscale(self, scaled: Any) -> Any:
        # Fraction: точное деление int без OverflowError для больших значений
        if isinstance(scaled, int):
            return Fraction(scaled, self.precision_factor)
        return scaled / self.precision_factor

    def _has_value(self) -> bool:
        return self.int_value != 0 or self.settings.allow_zero_arithmetic

    def add(self, number: Any) -> "Currency":
        """
        Сложение.

        Операнд проходит через parse с настройками получателя.

        Examples:
            >>> Currency(0.1).add(0.2).value
            0.3
        """
        return self._derive(self._unscale(self.int_value + parse(number, self.settings)))

    def subtract(self, number: Any) -> "Currency":
        """Вычитание (операнд проходит через parse)."""
        return self._derive(self._unscale(self.int_value - parse(number, self.settings)))

    def multiply(self, number: Any) -> Optional["Currency"]:
        """
        Умножение масштабированного целого на число.

        Множитель не проходит через parse: это безразмерное число,
        а не денежное значение.

        Args:
            number: int, float, Decimal или Fraction

        Returns:
            Новый Currency или None для нулевой суммы

        Raises:
            InvalidInputError: Если множитель не число
        """
        if not self._has_value():
            return None

        if classify_input(number) is not InputKind.NUMBER:
            raise InvalidInputError(f"Multiplier must be a number, got {number!r}")

        return self._derive(self._unscale(self.int_value * number))

    def divide(self, number: Any) -> Optional["Currency"]:
        """
        Деление.

        Делитель парсится без округления до целого, чтобы сохранить его
        дробную часть; частное округляется при создании результата.

        Returns:
            Новый Currency или None (нулевая сумма или нулевой делитель)
        """
        if not self._has_value():
            return None

        divisor = parse(number, self.settings, use_rounding=False)
        if divisor == 0:
            logger.warning(f"Division of {self} by zero divisor {number!r}; no result")
            return None

        return self._derive(self.int_value / divisor)

    def distribute(self, count: int) -> Optional[List["Currency"]]:
        """
        Распределение суммы на count долей.

        Доли отличаются не более чем на одну наименьшую единицу; остаток
        распределяется на первые доли (прибавляется для суммы >= 0,
        вычитается для отрицательной). Сумма долей равна исходной.

        Args:
            count: Количество долей (>= 0)

        Returns:
            Список из count значений; [] для count == 0; None для нулевой суммы

        Raises:
            InvalidInputError: Если count не целое или отрицательное
        """
        if not self._has_value():
            return None

        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidInputError(f"count must be a non-negative integer, got {count!r}")

        if count == 0:
            return []

        if self.int_value >= 0:
            split = self.int_value // count
        else:
            split = -(-self.int_value // count)
        remainder = abs(self.int_value - split * count)
        unit = 1 / self.precision_factor

        distribution = []
        for index in range(count):
            item = self._derive(split / self.precision_factor)
            if index < remainder:
                item = item.add(unit) if self.int_value >= 0 else item.subtract(unit)
            distribution.append(item)

        return distribution

    def dollars(self) -> int:
        """Целая часть суммы (усечение к нулю)."""
        return int(self.value)

    def cents(self) -> int:
        """
        Дробная часть в наименьших единицах, знак как у int_value.

        Examples:
            >>> Currency(-12.34).cents()
            -34
        """
        remainder = abs(self.int_value) % self.precision_factor
        return remainder if self.int_value >= 0 else -remainder

    # =========================================================================
    # FORMATTING
    # =========================================================================

    def to_string(self) -> str:
        """Десятичная строка с ровно precision знаками (с учётом increment)."""
        return to_plain_string(self.int_value, self.settings)

    def format(self, use_symbol: Optional[bool] = None) -> str:
        """
        Форматирование по шаблону настроек.

        Args:
            use_symbol: Выводить символ валюты (default: settings.format_with_symbol)
        """
        return format_with_pattern(self.to_string(), self.value < 0, self.settings, use_symbol)

    def to_json(self) -> float:
        """Значение для JSON сериализации (float, не масштабированное целое)."""
        return self.value

    def to_payload(self) -> Dict[str, Any]:
        """Документ по контракту currency_payload."""
        return {
            "value": self.value,
            "int_value": self.int_value,
            "precision": self.settings.precision,
        }

    def __str__(self) -> str:
        return self.to_string()

    def __float__(self) -> float:
        return self.value
