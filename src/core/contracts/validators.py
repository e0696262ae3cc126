"""
JSON Schema Contract Validators

Модуль для валидации сериализованных checked-целых согласно JSON Schema
контракту. Использует библиотеку jsonschema.

Схемы:
- checked_integer.json — объект с единственным целым полем value

Контракт общий для всех типов; CheckedIntegerValidator сужает его
диапазоном конкретного IntegerType (minimum/maximum).
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from src.core.math.integer_types import IntegerType


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Находит схемы в schema/ рядом с этим модулем (package data).
    """

    def __init__(self):
        self._schema_dir = Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'checked_integer')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class CheckedIntegerValidator(ContractValidator):
    """
    Валидатор сериализованного CheckedInteger для конкретного типа.

    Базовая схема checked_integer.json дополняется границами диапазона
    int_type, так что {"value": 128} невалиден для int8.
    """

    def __init__(self, int_type: IntegerType):
        super().__init__("checked_integer")
        self.int_type = int_type

        # Копия: кэш SchemaLoader не должен видеть границы конкретного типа
        schema = copy.deepcopy(self.schema)
        schema["title"] = f"CheckedInteger[{int_type}]"
        value_schema = schema["properties"]["value"]
        value_schema["minimum"] = int_type.min_value
        value_schema["maximum"] = int_type.max_value

        self.schema = schema
        self.validator = Draft202012Validator(self.schema)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_checked_integer(data: Dict[str, Any], int_type: IntegerType) -> None:
    """
    Валидация сериализованного checked-целого.

    Args:
        data: Данные для валидации (например, model_dump())
        int_type: Тип, диапазону которого должно соответствовать value

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    CheckedIntegerValidator(int_type).validate(data)
