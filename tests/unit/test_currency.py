"""
Тесты для Currency

Проверяет:
1. Создание из чисел, строк и других Currency
2. Арифметику (add/subtract/multiply/divide) и перенос настроек
3. distribute: сохранение суммы, смещение остатка на первые доли
4. dollars/cents
5. Форматирование (to_string, format, to_json, to_payload)
6. Immutability и поведение для нулевой суммы
"""

import json
import logging
from decimal import Decimal

import pytest
from pydantic import ValidationError

from currency_core import Currency, CurrencySettings, InvalidInputError
from currency_core.core.contracts import validate_currency_payload


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def euro_settings():
    """Европейские настройки форматирования."""
    return CurrencySettings(
        symbol="€",
        separator=".",
        decimal=",",
        pattern="# !",
        negative_pattern="-# !",
    )


@pytest.fixture
def sample_amounts():
    """Набор сумм разных знаков и масштабов."""
    return [0.01, 0.07, 1, 10.01, 99.99, 1234.56, -0.07, -1000.01, 987654.32]


# =============================================================================
# CONSTRUCTION
# =============================================================================


class TestConstruction:
    """Тесты создания Currency"""

    def test_float_pre_rounding(self) -> None:
        """Currency(1.005) → int_value 101"""
        c = Currency(1.005)
        assert c.int_value == 101
        assert c.value == 1.01

    def test_from_formatted_string(self) -> None:
        """Строка с символом и группировкой"""
        c = Currency("$1,234.56")
        assert c.int_value == 123456
        assert c.value == 1234.56

    def test_parenthesized_negative(self) -> None:
        """'(42.50)' → -42.50"""
        assert Currency("(42.50)").value == -42.5

    def test_from_currency_uses_own_settings(self) -> None:
        """Currency из Currency использует переданные (или default) настройки"""
        source = Currency(1.5, precision=3)
        assert Currency(source).int_value == 150
        assert Currency(source).settings.precision == 2

    def test_settings_overrides(self) -> None:
        """Настройки из dict, kwargs и CurrencySettings"""
        assert Currency(1, {"precision": 3}).int_value == 1000
        assert Currency(1, precision=0).int_value == 1
        assert Currency(1, CurrencySettings(precision=4)).int_value == 10_000
        assert Currency(1, {"symbol": "€"}, precision=1).settings.symbol == "€"

    def test_invalid_input_defaults_to_zero(self) -> None:
        """Невалидный вход → 0"""
        assert Currency(None).int_value == 0
        assert Currency("not a number").int_value == 0

    def test_out_of_float_range_defaults_to_zero(self) -> None:
        """Вход вне диапазона float → 0 без OverflowError"""
        for value in ("1" + "0" * 400, "9" * 320, 10**400, Decimal("-1E+400")):
            amount = Currency(value)
            assert amount.int_value == 0
            assert amount.to_string() == "0.00"
        assert Currency(1.5, precision=300).value == pytest.approx(1.5)

    def test_error_on_invalid(self) -> None:
        """error_on_invalid (в т.ч. camelCase ключ) → InvalidInputError"""
        with pytest.raises(InvalidInputError):
            Currency(None, error_on_invalid=True)
        with pytest.raises(InvalidInputError):
            Currency(None, {"errorOnInvalid": True})

    def test_invalid_settings_rejected(self) -> None:
        """Невалидные настройки → pydantic.ValidationError"""
        with pytest.raises(ValidationError):
            Currency(1, precision=-1)
        with pytest.raises(ValidationError):
            Currency(1, unknown_option=True)

    def test_int_value_is_int(self, sample_amounts) -> None:
        """int_value всегда int"""
        for amount in sample_amounts:
            assert isinstance(Currency(amount).int_value, int)

    def test_precision_factor(self) -> None:
        """precision_factor = 10^precision"""
        assert Currency(1).precision_factor == 100
        assert Currency(1, precision=3).precision_factor == 1000


# =============================================================================
# ARITHMETIC
# =============================================================================


class TestAddSubtract:
    """Тесты add/subtract"""

    def test_add_avoids_float_drift(self) -> None:
        """0.1 + 0.2 == 0.3"""
        assert Currency(0.1).add(0.2).value == 0.3

    def test_add_heterogeneous_operands(self) -> None:
        """Операнд: число, строка или Currency"""
        assert Currency(10).add("$5.25").value == 15.25
        assert Currency(1.5).add(Currency(2.25)).int_value == 375
        assert Currency(1).add(Decimal("0.01")).int_value == 101

    def test_subtract(self) -> None:
        """Вычитание"""
        assert Currency(10).subtract(0.01).int_value == 999
        assert Currency(1).subtract(2.5).value == -1.5

    def test_zero_receiver(self) -> None:
        """add/subtract работают для нулевой суммы"""
        assert Currency(0).add(5).value == 5.0
        assert Currency(0).subtract(5).value == -5.0

    def test_additivity(self, sample_amounts) -> None:
        """a.add(b) == a + b в масштабированных целых"""
        for a in sample_amounts:
            for b in sample_amounts:
                left, right = Currency(a), Currency(b)
                total = left.add(right)
                assert total.int_value == left.int_value + right.int_value
                assert total.value == pytest.approx(round(left.value + right.value, 2))

    def test_operand_parsed_with_receiver_settings(self) -> None:
        """Операнд масштабируется по точности получателя"""
        assert Currency(1, precision=3).add(0.0005).int_value == 1001

    def test_settings_carried_forward(self, euro_settings) -> None:
        """Производное значение несёт настройки получателя"""
        c = Currency(1, euro_settings).add(1).subtract(0.5)
        assert c.settings == euro_settings
        assert c.format(True) == "1,50 €"


class TestMultiply:
    """Тесты multiply"""

    def test_basic(self) -> None:
        """Умножение на целое и дробное"""
        assert Currency(10).multiply(3).value == 30.0
        assert Currency(1.11).multiply(0.5).int_value == 56

    def test_decimal_multiplier(self) -> None:
        """Decimal множитель"""
        assert Currency(10).multiply(Decimal("1.5")).int_value == 1500

    def test_negative(self) -> None:
        """Отрицательный множитель"""
        assert Currency(2.5).multiply(-2).value == -5.0

    def test_non_number_rejected(self) -> None:
        """Множитель не число → InvalidInputError"""
        with pytest.raises(InvalidInputError, match="Multiplier must be a number"):
            Currency(10).multiply(Currency(2))
        with pytest.raises(InvalidInputError):
            Currency(10).multiply("2")

    def test_overflowing_product_is_zero(self) -> None:
        """Произведение вне диапазона float → 0"""
        assert Currency(1).multiply(10**400).int_value == 0
        assert Currency(1).multiply(1e308).int_value == 0

    def test_zero_receiver_returns_none(self) -> None:
        """Нулевая сумма → None"""
        assert Currency(0).multiply(2) is None

    def test_zero_receiver_allowed(self) -> None:
        """allow_zero_arithmetic → обычный результат"""
        result = Currency(0, allow_zero_arithmetic=True).multiply(2)
        assert result is not None
        assert result.int_value == 0


class TestDivide:
    """Тесты divide"""

    def test_basic(self) -> None:
        """Частное округляется при создании результата"""
        assert Currency(100).divide(3).value == 33.33
        assert Currency(10).divide(0.5).value == 20.0
        assert Currency(-10).divide(4).value == -2.5

    def test_divisor_keeps_fraction(self) -> None:
        """Делитель не округляется до целого: 1 / 0.333 → 3.00, а не 3.03"""
        assert Currency(1).divide(0.333).int_value == 300

    def test_divide_by_string_and_currency(self) -> None:
        """Делитель проходит через parse"""
        assert Currency(10).divide("$2.00").value == 5.0
        assert Currency(10).divide(Currency(4)).value == 2.5

    def test_zero_divisor_returns_none(self, caplog) -> None:
        """Нулевой делитель → None с предупреждением"""
        with caplog.at_level(logging.WARNING, logger="currency_core.core.domain.currency"):
            assert Currency(10).divide(0) is None
            assert Currency(10).divide("abc") is None
        assert "zero divisor" in caplog.text

    def test_zero_receiver_returns_none(self) -> None:
        """Нулевая сумма → None"""
        assert Currency(0).divide(2) is None
        assert Currency(0, allow_zero_arithmetic=True).divide(2).int_value == 0


class TestDistribute:
    """Тесты distribute"""

    def test_remainder_on_first_entries(self) -> None:
        """1.00 / 3 → [34, 33, 33]"""
        parts = Currency(1).distribute(3)
        assert [p.int_value for p in parts] == [34, 33, 33]

    def test_negative_remainder_subtracted(self) -> None:
        """-1.00 / 3 → [-34, -33, -33]"""
        parts = Currency(-1).distribute(3)
        assert [p.int_value for p in parts] == [-34, -33, -33]

    def test_even_split(self) -> None:
        """Без остатка: равные доли"""
        parts = Currency(100).distribute(4)
        assert [p.value for p in parts] == [25.0, 25.0, 25.0, 25.0]

    def test_conservation(self, sample_amounts) -> None:
        """Сумма долей равна исходной сумме"""
        for amount in sample_amounts:
            original = Currency(amount)
            for count in range(1, 13):
                parts = original.distribute(count)
                assert len(parts) == count
                assert sum(p.int_value for p in parts) == original.int_value
                spread = max(p.int_value for p in parts) - min(p.int_value for p in parts)
                assert spread <= 1

    def test_settings_carried_forward(self) -> None:
        """Доли несут настройки получателя"""
        parts = Currency(1, precision=3).distribute(3)
        assert [p.int_value for p in parts] == [334, 333, 333]
        assert all(p.settings.precision == 3 for p in parts)

    def test_zero_count(self) -> None:
        """count == 0 → пустой список"""
        assert Currency(1).distribute(0) == []

    def test_invalid_count(self) -> None:
        """Отрицательный или нецелый count → InvalidInputError"""
        with pytest.raises(InvalidInputError, match="count"):
            Currency(1).distribute(-1)
        with pytest.raises(InvalidInputError):
            Currency(1).distribute(2.5)
        with pytest.raises(InvalidInputError):
            Currency(1).distribute(True)

    def test_zero_receiver(self) -> None:
        """Нулевая сумма → None; с allow_zero_arithmetic: нулевые доли"""
        assert Currency(0).distribute(3) is None
        parts = Currency(0, allow_zero_arithmetic=True).distribute(3)
        assert [p.int_value for p in parts] == [0, 0, 0]


class TestDollarsCents:
    """Тесты dollars/cents"""

    def test_positive(self) -> None:
        """Целая и дробная части"""
        c = Currency(1234.56)
        assert c.dollars() == 1234
        assert c.cents() == 56

    def test_negative_whole(self) -> None:
        """-5.00 → dollars -5, cents 0"""
        c = Currency(-5.00)
        assert c.dollars() == -5
        assert c.cents() == 0

    def test_negative_fraction(self) -> None:
        """Знак cents совпадает со знаком суммы, dollars усекается к нулю"""
        c = Currency(-12.34)
        assert c.dollars() == -12
        assert c.cents() == -34
        assert Currency(-0.5).dollars() == 0

    def test_zero(self) -> None:
        """Ноль"""
        assert Currency(0).dollars() == 0
        assert Currency(0).cents() == 0

    def test_precision(self) -> None:
        """cents в наименьших единицах текущей точности"""
        assert Currency("1.2345", precision=3).cents() == 235


# =============================================================================
# FORMATTING
# =============================================================================


class TestFormatting:
    """Тесты to_string/format/to_json"""

    def test_to_string(self) -> None:
        """Ровно precision знаков"""
        assert Currency(1234.5).to_string() == "1234.50"
        assert str(Currency(1234.5)) == "1234.50"
        assert Currency(12.5, precision=0).to_string() == "13"
        assert Currency("1.2345", precision=3).to_string() == "1.235"

    def test_to_string_idempotent(self, sample_amounts) -> None:
        """Повторный вызов даёт тот же результат"""
        for amount in sample_amounts:
            c = Currency(amount)
            assert c.to_string() == c.to_string()

    def test_to_string_increment(self) -> None:
        """Округление до шага"""
        assert Currency(1.23, increment=0.05).to_string() == "1.25"
        assert Currency(1.22, increment=0.05).to_string() == "1.20"

    def test_format_symbol(self) -> None:
        """Символ выводится по флагу"""
        assert Currency("$1,234.56").format(True) == "$1,234.56"
        assert Currency("$1,234.56").format() == "1,234.56"
        assert Currency("$1,234.56", format_with_symbol=True).format() == "$1,234.56"

    def test_format_negative(self) -> None:
        """Отрицательные значения используют negative_pattern"""
        assert Currency(-1234.56).format(True) == "-$1,234.56"
        assert Currency("(42.50)").format() == "-42.50"

    def test_format_zero(self) -> None:
        """Ноль форматируется"""
        assert Currency(0).format(True) == "$0.00"

    def test_format_european(self, euro_settings) -> None:
        """Европейские разделители"""
        c = Currency("1.234,56 €", euro_settings)
        assert c.value == 1234.56
        assert c.format(True) == "1.234,56 €"

    def test_format_vedic(self) -> None:
        """Индийская группировка"""
        assert Currency(1234567.89, use_vedic=True).format() == "12,34,567.89"

    def test_round_trip(self, sample_amounts, euro_settings) -> None:
        """parse(format(x)) == x"""
        for amount in sample_amounts:
            c = Currency(amount)
            assert Currency(c.format(True)).int_value == c.int_value

            e = Currency(amount, euro_settings)
            assert Currency(e.format(True), euro_settings).int_value == e.int_value

    def test_to_json(self) -> None:
        """to_json → float value"""
        c = Currency(12.34)
        assert c.to_json() == 12.34
        assert json.dumps({"amount": c.to_json()}) == '{"amount": 12.34}'
        assert float(c) == 12.34

    def test_to_payload_matches_contract(self, sample_amounts) -> None:
        """to_payload соответствует контракту currency_payload"""
        for amount in sample_amounts:
            payload = Currency(amount).to_payload()
            validate_currency_payload(payload)
            assert payload["precision"] == 2


# =============================================================================
# IMMUTABILITY & EQUALITY
# =============================================================================


class TestImmutability:
    """Тесты immutability"""

    def test_frozen(self) -> None:
        """Поля нельзя изменить"""
        c = Currency(1)
        with pytest.raises(ValidationError):
            c.int_value = 5

    def test_receiver_untouched(self) -> None:
        """Операции не меняют получателя"""
        c = Currency(10)
        c.add(1)
        c.subtract(1)
        c.multiply(2)
        c.divide(2)
        c.distribute(3)
        assert c.int_value == 1000
        assert c.value == 10.0

    def test_equality_and_hash(self) -> None:
        """Равные суммы с равными настройками равны"""
        assert Currency(1.5) == Currency("1.50")
        assert hash(Currency(1.5)) == hash(Currency("1.50"))
        assert Currency(1.5) != Currency(1.5, precision=3)
