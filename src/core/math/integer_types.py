"""
Integer Types — Описание целочисленных типов фиксированной ширины

Модуль задаёт параметр T для CheckedInteger: имя, разрядность и знаковость
целочисленного типа, а также диапазон представимых значений.

Python int не ограничен по разрядности, поэтому границы диапазона хранятся
явно и используются всеми проверками переполнения.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. min_value <= 0 <= max_value для любого типа
2. Signed: [-2**(bits-1), 2**(bits-1) - 1] (two's complement)
3. Unsigned: [0, 2**bits - 1]
4. wrap() всегда возвращает значение внутри диапазона
"""

from dataclasses import dataclass
from typing import Final


# =============================================================================
# INTEGER TYPE DESCRIPTOR
# =============================================================================


@dataclass(frozen=True)
class IntegerType:
    """
    Целочисленный тип фиксированной ширины.

    Immutable (frozen=True) и hashable: используется как ключ кэша
    классов CheckedInteger.
    """

    name: str
    bits: int
    signed: bool

    def __post_init__(self) -> None:
        if self.bits <= 0:
            raise ValueError(f"bits must be positive, got {self.bits}")

    @property
    def min_value(self) -> int:
        """Минимальное представимое значение."""
        if self.signed:
            return -(1 << (self.bits - 1))
        return 0

    @property
    def max_value(self) -> int:
        """Максимальное представимое значение."""
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        """Проверка, что значение представимо в типе."""
        return self.min_value <= value <= self.max_value

    def wrap(self, value: int) -> int:
        """
        Приведение значения по модулю 2**bits в диапазон типа.

        Воспроизводит поведение аппаратной арифметики фиксированной ширины
        (two's complement для signed типов).

        Examples:
            >>> INT8.wrap(128)
            -128
            >>> UINT8.wrap(-1)
            255
        """
        wrapped = value & ((1 << self.bits) - 1)
        if self.signed and wrapped > self.max_value:
            wrapped -= 1 << self.bits
        return wrapped

    def __str__(self) -> str:
        return self.name


# =============================================================================
# ПРЕДОПРЕДЕЛЁННЫЕ ТИПЫ
# =============================================================================

INT8: Final[IntegerType] = IntegerType("int8", 8, signed=True)
INT16: Final[IntegerType] = IntegerType("int16", 16, signed=True)
INT32: Final[IntegerType] = IntegerType("int32", 32, signed=True)
INT64: Final[IntegerType] = IntegerType("int64", 64, signed=True)

UINT8: Final[IntegerType] = IntegerType("uint8", 8, signed=False)
UINT16: Final[IntegerType] = IntegerType("uint16", 16, signed=False)
UINT32: Final[IntegerType] = IntegerType("uint32", 32, signed=False)
UINT64: Final[IntegerType] = IntegerType("uint64", 64, signed=False)

# uint128 намеренно отсутствует
INTEGER_TYPES: Final[dict[str, IntegerType]] = {
    t.name: t for t in (INT8, INT16, INT32, INT64, UINT8, UINT16, UINT32, UINT64)
}


def integer_type_by_name(name: str) -> IntegerType:
    """
    Поиск предопределённого типа по имени.

    Args:
        name: Имя типа (например, 'int32'), регистр не важен

    Returns:
        IntegerType

    Raises:
        KeyError: Если тип с таким именем не определён
    """
    try:
        return INTEGER_TYPES[name.lower()]
    except KeyError:
        known = ", ".join(INTEGER_TYPES)
        raise KeyError(f"Unknown integer type {name!r} (known: {known})") from None
