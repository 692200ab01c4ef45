"""
Contract Validation Module

Модуль для валидации JSON контрактов currency_core.
"""

from .validators import (
    PAYLOAD_CONTRACT,
    SETTINGS_CONTRACT,
    ContractValidator,
    SchemaLoader,
    get_contract,
    validate_currency_payload,
    validate_currency_settings,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    # Functions
    "get_contract",
    "validate_currency_settings",
    "validate_currency_payload",
    # Contract names
    "SETTINGS_CONTRACT",
    "PAYLOAD_CONTRACT",
]
