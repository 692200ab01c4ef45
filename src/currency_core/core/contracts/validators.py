"""
JSON Schema контракты currency_core

Внешние документы (файл настроек, сериализованное значение) проверяются
формальными JSON Schema (Draft 2020-12), поставляемыми внутри пакета:
- currency_settings.json: документ настроек валюты (snake_case и camelCase ключи)
- currency_payload.json: результат Currency.to_payload()
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping

import jsonschema
from jsonschema import Draft202012Validator

SETTINGS_CONTRACT = "currency_settings"
PAYLOAD_CONTRACT = "currency_payload"


class SchemaLoader:
    """Загрузка и meta-валидация схем из каталога (по умолчанию schema/ пакета)."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения (кэшируется).

        Raises:
            FileNotFoundError: Файла схемы нет
            ValueError: Документ не является JSON Schema Draft 2020-12
        """
        if schema_name not in self._schemas:
            schema_path = self._schema_dir / f"{schema_name}.json"
            if not schema_path.exists():
                raise FileNotFoundError(f"Schema not found: {schema_path}")

            schema = json.loads(schema_path.read_text(encoding="utf-8"))
            try:
                Draft202012Validator.check_schema(schema)
            except jsonschema.SchemaError as e:
                raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e
            self._schemas[schema_name] = schema

        return self._schemas[schema_name]


class ContractValidator:
    """Проверка документа против одной схемы пакета."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self.validator = Draft202012Validator((loader or SchemaLoader()).load_schema(schema_name))

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое найденное нарушение контракта
        """
        self.validator.validate(data)

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return self.validator.is_valid(data)


@lru_cache(maxsize=None)
def get_contract(schema_name: str) -> ContractValidator:
    """Разделяемый валидатор контракта (схема читается один раз на процесс)."""
    return ContractValidator(schema_name)


def validate_currency_settings(data: Mapping[str, Any]) -> None:
    """Проверка документа настроек перед слиянием с DEFAULT_SETTINGS."""
    get_contract(SETTINGS_CONTRACT).validate(data)


def validate_currency_payload(data: Mapping[str, Any]) -> None:
    """Проверка сериализованного денежного значения."""
    get_contract(PAYLOAD_CONTRACT).validate(data)
