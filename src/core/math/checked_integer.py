"""
Checked Integer — Целые фиксированной ширины с проверкой переполнения

Обёртка над значением типа T (IntegerType), в которой каждая арифметическая
операция проверяет, что результат представим в T. Вместо молчаливого
переполнения (wraparound) операция выбрасывает IntegerOverflowError,
IntegerUnderflowError или DivisionByZeroError.

Каждая параметризация T — отдельная Pydantic модель с единственным полем
`value`, поэтому любая JSON сериализация, умеющая кодировать int, кодирует и
обёртку: {"value": 42}.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value всегда в [min(T), max(T)] (default: 0)
2. Проверка выполняется ДО изменения: при ошибке операнды не меняются
3. Сравнения с raw int работают в обе стороны и никогда не падают
4. Signed вычитание определено как a + (-b); -min(T) → IntegerOverflowError
5. Unsigned вычитание: b > a → IntegerUnderflowError

Examples:
    >>> CheckedInt8(127) + 1  # doctest: +SKIP
    Traceback (most recent call last):
        ...
    IntegerOverflowError: int8 overflow: 127 + 1 > 127
    >>> CheckedInt8(5) - CheckedInt8(3) == 2
    True
"""

import logging
from functools import lru_cache
from typing import Any, Callable, ClassVar, Optional

from pydantic import BaseModel, Field, create_model, model_validator

from src.core.math.arithmetic_policy import DEFAULT_POLICY, ArithmeticPolicy
from src.core.math.checked_errors import (
    CheckedArithmeticError,
    DivisionByZeroError,
    IntegerOverflowError,
    IntegerUnderflowError,
    format_expression,
)
from src.core.math.integer_types import (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    IntegerType,
)

logger = logging.getLogger(__name__)

# Маркер отсутствующего позиционного аргумента конструктора
_UNSET: Any = object()


# =============================================================================
# CHECKED INTEGER MODEL
# =============================================================================


class CheckedInteger(BaseModel):
    """
    Базовая модель checked-целого.

    Напрямую не инстанцируется: конкретный класс для типа T создаётся
    через checked_type(T) (например, CheckedInt8, CheckedUint64).

    Mutable модель: in-place операторы (+=, -=, *=, /=, //=) и
    increment/decrement меняют value только после успешной проверки.
    validate_assignment=True защищает инвариант диапазона и при прямом
    присваивании value.
    """

    int_type: ClassVar[IntegerType]
    arithmetic_policy: ClassVar[ArithmeticPolicy] = DEFAULT_POLICY

    value: int = Field(default=0, description="Значение типа T")

    model_config = {"validate_assignment": True, "extra": "forbid"}

    def __init_subclass__(
        cls,
        int_type: Optional[IntegerType] = None,
        arithmetic_policy: Optional[ArithmeticPolicy] = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if int_type is not None:
            cls.int_type = int_type
        if arithmetic_policy is not None:
            cls.arithmetic_policy = arithmetic_policy

    def __init__(self, value: Any = _UNSET, /, **data: Any) -> None:
        """
        Конверсия из любого значения, приводимого к T.

        Позиционный аргумент эквивалентен value=...; сама конверсия
        выполняется в _coerce_raw_input, общем для __init__ и model_validate.

        Raises:
            TypeError: Если класс не параметризован типом T или value
                передан и позиционно, и по имени
            pydantic.ValidationError: Если значение не приводится к T
                (не целое или вне диапазона)
        """
        if not hasattr(type(self), "int_type"):
            raise TypeError(
                "CheckedInteger is not parameterized, use checked_type(int_type)"
            )
        if value is not _UNSET:
            if "value" in data:
                raise TypeError(
                    f"{type(self).__name__}() got value both positionally and by keyword"
                )
            data["value"] = value
        super().__init__(**data)

    @model_validator(mode="before")
    @classmethod
    def _coerce_raw_input(cls, data: Any) -> Any:
        """
        Raw значение → {"value": ...}.

        Принимает dict полей, другой CheckedInteger или скаляр, который
        Pydantic приводит к int. Так model_validate(5) и поля вложенных
        моделей, заданные raw int, конвертируются так же, как CheckedInt8(5).
        """
        if isinstance(data, CheckedInteger):
            return {"value": data.value}
        if isinstance(data, dict):
            value = data.get("value")
            if isinstance(value, CheckedInteger):
                return {**data, "value": value.value}
            return data
        return {"value": data}

    # -------------------------------------------------------------------------
    # Range queries
    # -------------------------------------------------------------------------

    @classmethod
    def max(cls) -> "CheckedInteger":
        """Checked значение max(T)."""
        return cls.model_construct(value=cls.int_type.max_value)

    @classmethod
    def min(cls) -> "CheckedInteger":
        """Checked значение min(T)."""
        return cls.model_construct(value=cls.int_type.min_value)

    # -------------------------------------------------------------------------
    # Проверенная арифметика над raw значениями
    # -------------------------------------------------------------------------

    @classmethod
    def _failure(
        cls,
        error_cls: type[CheckedArithmeticError],
        kind: str,
        operation: str,
        operands: tuple[int, ...],
        bound: str,
    ) -> CheckedArithmeticError:
        expression = format_expression(operation, operands)
        message = f"{cls.int_type} {kind}: {expression} {bound}"
        logger.debug(f"Checked arithmetic failure: {message}")
        return error_cls(message, cls.int_type, operation, operands)

    @classmethod
    def _overflow(cls, operation: str, operands: tuple[int, ...]) -> CheckedArithmeticError:
        return cls._failure(
            IntegerOverflowError,
            "overflow",
            operation,
            operands,
            f"> {cls.int_type.max_value}",
        )

    @classmethod
    def _underflow(cls, operation: str, operands: tuple[int, ...]) -> CheckedArithmeticError:
        return cls._failure(
            IntegerUnderflowError,
            "underflow",
            operation,
            operands,
            f"< {cls.int_type.min_value}",
        )

    @classmethod
    def _add_values(cls, a: int, b: int) -> int:
        t = cls.int_type
        if b > 0 and a > t.max_value - b:
            raise cls._overflow("+", (a, b))
        if b < 0 and a < t.min_value - b:
            raise cls._underflow("+", (a, b))
        return a + b

    @classmethod
    def _negate_value(cls, a: int) -> int:
        t = cls.int_type
        if t.signed:
            if a == t.min_value:
                raise cls._overflow("neg", (a,))
            return -a
        # unsigned: представимо только -0
        if a != 0:
            raise cls._underflow("neg", (a,))
        return 0

    @classmethod
    def _subtract_values(cls, a: int, b: int) -> int:
        if cls.int_type.signed:
            return cls._add_values(a, cls._negate_value(b))
        if b > a:
            raise cls._underflow("-", (a, b))
        return a - b

    @classmethod
    def _multiply_values(cls, a: int, b: int) -> int:
        t = cls.int_type
        product = a * b
        if t.contains(product):
            return product
        if cls.arithmetic_policy.checked_multiplication:
            if product > t.max_value:
                raise cls._overflow("*", (a, b))
            raise cls._underflow("*", (a, b))
        wrapped = t.wrap(product)
        logger.warning(
            f"{t} multiplication wrapped: {a} * {b} = {product} -> {wrapped}"
        )
        return wrapped

    @classmethod
    def _divide_values(cls, a: int, b: int, floor: bool = False) -> int:
        t = cls.int_type
        operation = "//" if floor else "/"
        if b == 0:
            raise cls._failure(
                DivisionByZeroError, "division by zero", operation, (a, b), "(divisor is zero)"
            )

        if floor:
            quotient = a // b
        else:
            # Усечение к нулю, как у целочисленного деления фиксированной ширины
            quotient = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                quotient = -quotient

        # Вне диапазона может оказаться только min(T) / -1
        if not t.contains(quotient):
            if cls.arithmetic_policy.checked_division:
                raise cls._overflow(operation, (a, b))
            wrapped = t.wrap(quotient)
            logger.warning(f"{t} division wrapped: {a} {operation} {b} -> {wrapped}")
            return wrapped
        return quotient

    # -------------------------------------------------------------------------
    # Операнды
    # -------------------------------------------------------------------------

    def _coerce(
        self, other: Any, operation: str, reflected: bool = False
    ) -> Optional[int]:
        """
        Приведение операнда к raw значению того же T.

        Возвращает None для неподдерживаемых операндов, чтобы оператор
        вернул NotImplemented: checked значения другого T или с другой
        ArithmeticPolicy, не-int значения.

        Raw int вне диапазона T не конвертируется: IntegerOverflowError
        (выше max) или IntegerUnderflowError (ниже min).
        """
        if isinstance(other, CheckedInteger):
            if (
                other.int_type != self.int_type
                or other.arithmetic_policy != self.arithmetic_policy
            ):
                return None
            return other.value
        if not isinstance(other, int):
            return None

        raw = int(other)
        t = self.int_type
        if t.contains(raw):
            return raw
        operands = (raw, self.value) if reflected else (self.value, raw)
        if raw > t.max_value:
            raise self._failure(
                IntegerOverflowError, "overflow", operation, operands,
                f"(operand {raw} > {t.max_value})",
            )
        raise self._failure(
            IntegerUnderflowError, "underflow", operation, operands,
            f"(operand {raw} < {t.min_value})",
        )

    def _binary(
        self,
        other: Any,
        operation: str,
        fn: Callable[[int, int], int],
        reflected: bool = False,
    ) -> Any:
        operand = self._coerce(other, operation, reflected)
        if operand is None:
            return NotImplemented
        if reflected:
            result = fn(operand, self.value)
        else:
            result = fn(self.value, operand)
        return type(self).model_construct(value=result)

    def _inplace(self, other: Any, operation: str, fn: Callable[[int, int], int]) -> Any:
        operand = self._coerce(other, operation)
        if operand is None:
            return NotImplemented
        self.value = fn(self.value, operand)
        return self

    # -------------------------------------------------------------------------
    # Addition / Subtraction
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "+", self._add_values)

    def __radd__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "+", self._add_values, reflected=True)

    def __iadd__(self, other: Any) -> "CheckedInteger":
        return self._inplace(other, "+", self._add_values)

    def __sub__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "-", self._subtract_values)

    def __rsub__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "-", self._subtract_values, reflected=True)

    def __isub__(self, other: Any) -> "CheckedInteger":
        return self._inplace(other, "-", self._subtract_values)

    def __neg__(self) -> "CheckedInteger":
        return type(self).model_construct(value=self._negate_value(self.value))

    def __pos__(self) -> "CheckedInteger":
        return self.model_copy()

    def __abs__(self) -> "CheckedInteger":
        if self.value < 0:
            return -self
        return self.model_copy()

    # -------------------------------------------------------------------------
    # Multiplication / Division
    # -------------------------------------------------------------------------

    def __mul__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "*", self._multiply_values)

    def __rmul__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "*", self._multiply_values, reflected=True)

    def __imul__(self, other: Any) -> "CheckedInteger":
        return self._inplace(other, "*", self._multiply_values)

    def __truediv__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "/", self._divide_values)

    def __rtruediv__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "/", self._divide_values, reflected=True)

    def __itruediv__(self, other: Any) -> "CheckedInteger":
        return self._inplace(other, "/", self._divide_values)

    def __floordiv__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "//", self._floor_divide_values)

    def __rfloordiv__(self, other: Any) -> "CheckedInteger":
        return self._binary(other, "//", self._floor_divide_values, reflected=True)

    def __ifloordiv__(self, other: Any) -> "CheckedInteger":
        return self._inplace(other, "//", self._floor_divide_values)

    @classmethod
    def _floor_divide_values(cls, a: int, b: int) -> int:
        return cls._divide_values(a, b, floor=True)

    # -------------------------------------------------------------------------
    # Increment / Decrement
    # -------------------------------------------------------------------------

    def increment(self) -> "CheckedInteger":
        """Pre-increment (++a): a += 1, возвращает обновлённое значение."""
        self.value = self._add_values(self.value, 1)
        return self

    def post_increment(self) -> "CheckedInteger":
        """Post-increment (a++): a += 1, возвращает копию прежнего значения."""
        prior = self.model_copy()
        self.value = self._add_values(self.value, 1)
        return prior

    def decrement(self) -> "CheckedInteger":
        """Pre-decrement (--a): a -= 1, возвращает обновлённое значение."""
        self.value = self._subtract_values(self.value, 1)
        return self

    def post_decrement(self) -> "CheckedInteger":
        """Post-decrement (a--): a -= 1, возвращает копию прежнего значения."""
        prior = self.model_copy()
        self.value = self._subtract_values(self.value, 1)
        return prior

    # -------------------------------------------------------------------------
    # Comparisons
    # -------------------------------------------------------------------------

    @staticmethod
    def _comparable(other: Any) -> Optional[int]:
        if isinstance(other, CheckedInteger):
            return other.value
        if isinstance(other, int):
            return other
        return None

    def __eq__(self, other: Any) -> bool:
        rhs = self._comparable(other)
        if rhs is None:
            return NotImplemented
        return self.value == rhs

    def __ne__(self, other: Any) -> bool:
        rhs = self._comparable(other)
        if rhs is None:
            return NotImplemented
        return self.value != rhs

    def __lt__(self, other: Any) -> bool:
        rhs = self._comparable(other)
        if rhs is None:
            return NotImplemented
        return self.value < rhs

    def __le__(self, other: Any) -> bool:
        rhs = self._comparable(other)
        if rhs is None:
            return NotImplemented
        return self.value <= rhs

    def __gt__(self, other: Any) -> bool:
        rhs = self._comparable(other)
        if rhs is None:
            return NotImplemented
        return self.value > rhs

    def __ge__(self, other: Any) -> bool:
        rhs = self._comparable(other)
        if rhs is None:
            return NotImplemented
        return self.value >= rhs

    __hash__ = None  # type: ignore[assignment]

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __bool__(self) -> bool:
        return self.value != 0

    def __str__(self) -> str:
        return str(self.value)


# =============================================================================
# FACTORY
# =============================================================================


def _class_name(int_type: IntegerType, policy: ArithmeticPolicy) -> str:
    # Суффикс перечисляет ослабленные проверки: CheckedInt8WrappingMulDiv
    name = f"Checked{int_type.name.capitalize()}"
    relaxed = ""
    if not policy.checked_multiplication:
        relaxed += "Mul"
    if not policy.checked_division:
        relaxed += "Div"
    if relaxed:
        name += f"Wrapping{relaxed}"
    return name


@lru_cache(maxsize=None)
def _build_checked_type(
    int_type: IntegerType, policy: ArithmeticPolicy
) -> type[CheckedInteger]:
    return create_model(
        _class_name(int_type, policy),
        __base__=CheckedInteger,
        __module__=__name__,
        __cls_kwargs__={"int_type": int_type, "arithmetic_policy": policy},
        value=(
            int,
            Field(
                default=0,
                ge=int_type.min_value,
                le=int_type.max_value,
                description=f"Значение типа {int_type}",
            ),
        ),
    )


def checked_type(
    int_type: IntegerType, policy: Optional[ArithmeticPolicy] = None
) -> type[CheckedInteger]:
    """
    Класс CheckedInteger для типа T.

    Классы кэшируются: одинаковые (int_type, policy) возвращают один и тот же
    класс, поэтому isinstance и сравнение типов работают ожидаемо.

    Args:
        int_type: Целочисленный тип фиксированной ширины
        policy: Политика граничных случаев (default: DEFAULT_POLICY)

    Returns:
        Pydantic модель с полем value в диапазоне int_type

    Examples:
        >>> checked_type(INT8) is CheckedInt8
        True
    """
    return _build_checked_type(int_type, policy or DEFAULT_POLICY)


# =============================================================================
# ПРЕДОПРЕДЕЛЁННЫЕ КЛАССЫ
# =============================================================================

CheckedInt8 = checked_type(INT8)
CheckedInt16 = checked_type(INT16)
CheckedInt32 = checked_type(INT32)
CheckedInt64 = checked_type(INT64)

CheckedUint8 = checked_type(UINT8)
CheckedUint16 = checked_type(UINT16)
CheckedUint32 = checked_type(UINT32)
CheckedUint64 = checked_type(UINT64)
