"""
Checked Errors — Таксономия ошибок checked-арифметики

Каждая ошибка фиксирует тип, операцию и операнды, достаточные для
воспроизведения выражения, вызвавшего сбой.

Иерархия:
    CheckedArithmeticError(ArithmeticError)
    ├── IntegerOverflowError(OverflowError)   — результат > max(T)
    ├── IntegerUnderflowError                 — результат < min(T)
    └── DivisionByZeroError(ZeroDivisionError) — делитель равен нулю
"""

from src.core.math.integer_types import IntegerType


def format_expression(operation: str, operands: tuple[int, ...]) -> str:
    """
    Текстовое представление выражения для диагностики.

    Examples:
        >>> format_expression("+", (127, 1))
        '127 + 1'
        >>> format_expression("neg", (-128,))
        '-(-128)'
    """
    if operation == "neg":
        return f"-({operands[0]})"
    lhs, rhs = operands
    return f"{lhs} {operation} {rhs}"


class CheckedArithmeticError(ArithmeticError):
    """
    Базовая ошибка checked-арифметики.

    Attributes:
        int_type: Тип, в котором выполнялась операция
        operation: Символ операции ('+', '-', '*', '/', '//', 'neg')
        operands: Значения операндов (raw int) в порядке выражения
    """

    def __init__(
        self,
        message: str,
        int_type: IntegerType,
        operation: str,
        operands: tuple[int, ...],
    ) -> None:
        super().__init__(message)
        self.int_type = int_type
        self.operation = operation
        self.operands = operands

    def expression(self) -> str:
        """Выражение, вызвавшее ошибку, например '127 + 1'."""
        return format_expression(self.operation, self.operands)


class IntegerOverflowError(CheckedArithmeticError, OverflowError):
    """Результат превышает max(T)."""


class IntegerUnderflowError(CheckedArithmeticError):
    """Результат меньше min(T)."""


class DivisionByZeroError(CheckedArithmeticError, ZeroDivisionError):
    """Деление на ноль."""
