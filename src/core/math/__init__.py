"""
Core math modules

Целые фиксированной ширины с проверкой переполнения.
"""

# Integer Types
from src.core.math.integer_types import (
    INT8,
    INT16,
    INT32,
    INT64,
    INTEGER_TYPES,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    IntegerType,
    integer_type_by_name,
)

# Errors
from src.core.math.checked_errors import (
    CheckedArithmeticError,
    DivisionByZeroError,
    IntegerOverflowError,
    IntegerUnderflowError,
)

# Policy
from src.core.math.arithmetic_policy import DEFAULT_POLICY, ArithmeticPolicy

# Checked Integer
from src.core.math.checked_integer import (
    CheckedInt8,
    CheckedInt16,
    CheckedInt32,
    CheckedInt64,
    CheckedInteger,
    CheckedUint8,
    CheckedUint16,
    CheckedUint32,
    CheckedUint64,
    checked_type,
)

__all__ = [
    # Integer Types
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "INTEGER_TYPES",
    "IntegerType",
    "integer_type_by_name",
    # Errors
    "CheckedArithmeticError",
    "DivisionByZeroError",
    "IntegerOverflowError",
    "IntegerUnderflowError",
    # Policy
    "ArithmeticPolicy",
    "DEFAULT_POLICY",
    # Checked Integer
    "CheckedInteger",
    "checked_type",
    "CheckedInt8",
    "CheckedInt16",
    "CheckedInt32",
    "CheckedInt64",
    "CheckedUint8",
    "CheckedUint16",
    "CheckedUint32",
    "CheckedUint64",
]
