"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных checked-целых.
"""

from .validators import (
    CheckedIntegerValidator,
    ContractValidator,
    SchemaLoader,
    validate_checked_integer,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CheckedIntegerValidator",
    # Functions
    "validate_checked_integer",
]
