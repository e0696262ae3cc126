"""
Property-based тесты Checked Integer (Hypothesis)

Инварианты:
1. Представимая сумма вычисляется точно
2. max + b (b > 0) → overflow; min + b (b < 0) → underflow
3. -v точно для v != min, -min → overflow
4. a - b == a + (-b), когда обе стороны определены
5. Деление на ноль всегда падает
6. Операция либо успешна и точна, либо падает без изменения операндов
"""

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from src.core.math import (
    INT8,
    INT32,
    INT64,
    UINT8,
    UINT32,
    UINT64,
    CheckedArithmeticError,
    DivisionByZeroError,
    IntegerOverflowError,
    IntegerType,
    IntegerUnderflowError,
    checked_type,
)

pytestmark = pytest.mark.property

SIGNED_TYPES = [INT8, INT32, INT64]
ALL_TYPES = [INT8, INT32, INT64, UINT8, UINT32, UINT64]


def values_of(int_type: IntegerType) -> st.SearchStrategy[int]:
    return st.integers(min_value=int_type.min_value, max_value=int_type.max_value)


@st.composite
def typed_pair(draw, types=ALL_TYPES):
    int_type = draw(st.sampled_from(types))
    return int_type, draw(values_of(int_type)), draw(values_of(int_type))


class TestAdditionProperties:
    """Свойства сложения"""

    @given(typed_pair())
    def test_sum_exact_or_fails(self, case) -> None:
        """Сумма точна, если представима; иначе — ошибка нужного вида"""
        int_type, a, b = case
        cls = checked_type(int_type)
        expected = a + b
        if int_type.contains(expected):
            assert cls(a) + cls(b) == cls(expected)
        elif expected > int_type.max_value:
            with pytest.raises(IntegerOverflowError):
                cls(a) + cls(b)
        else:
            with pytest.raises(IntegerUnderflowError):
                cls(a) + cls(b)

    @given(st.sampled_from(ALL_TYPES), st.data())
    def test_max_plus_positive_overflows(self, int_type: IntegerType, data) -> None:
        """max(T) + b, b > 0 → overflow"""
        b = data.draw(st.integers(min_value=1, max_value=int_type.max_value))
        cls = checked_type(int_type)
        with pytest.raises(IntegerOverflowError):
            cls.max() + cls(b)

    @given(st.sampled_from(SIGNED_TYPES), st.data())
    def test_min_plus_negative_underflows(self, int_type: IntegerType, data) -> None:
        """min(T) + b, b < 0 → underflow"""
        b = data.draw(st.integers(min_value=int_type.min_value, max_value=-1))
        cls = checked_type(int_type)
        with pytest.raises(IntegerUnderflowError):
            cls.min() + cls(b)

    @given(typed_pair())
    def test_failed_inplace_leaves_operands(self, case) -> None:
        """При ошибке += операнды не меняются"""
        int_type, a, b = case
        cls = checked_type(int_type)
        lhs, rhs = cls(a), cls(b)
        try:
            lhs += rhs
        except CheckedArithmeticError:
            assert lhs == a
        else:
            assert lhs == a + b
        assert rhs == b


class TestNegationSubtractionProperties:
    """Свойства отрицания и вычитания"""

    @given(st.sampled_from(SIGNED_TYPES), st.data())
    def test_negation(self, int_type: IntegerType, data) -> None:
        """-v точно для v != min(T)"""
        v = data.draw(values_of(int_type))
        cls = checked_type(int_type)
        if v == int_type.min_value:
            with pytest.raises(IntegerOverflowError):
                -cls(v)
        else:
            assert -cls(v) == -v

    @given(typed_pair(SIGNED_TYPES))
    def test_subtraction_is_addition_of_negation(self, case) -> None:
        """a - b == a + (-b), когда обе стороны определены"""
        int_type, a, b = case
        cls = checked_type(int_type)
        try:
            rhs = cls(a) + (-cls(b))
        except CheckedArithmeticError:
            assume(False)
        assert cls(a) - cls(b) == rhs

    @given(typed_pair([UINT8, UINT32, UINT64]))
    def test_unsigned_subtraction(self, case) -> None:
        """Unsigned: a - b точно при b <= a, иначе underflow"""
        int_type, a, b = case
        cls = checked_type(int_type)
        if b <= a:
            assert cls(a) - cls(b) == a - b
        else:
            with pytest.raises(IntegerUnderflowError):
                cls(a) - cls(b)


class TestDivisionProperties:
    """Свойства деления"""

    @given(st.sampled_from(ALL_TYPES), st.data())
    def test_division_by_zero_always_fails(self, int_type: IntegerType, data) -> None:
        """Деление на ноль падает при любом числителе"""
        a = data.draw(values_of(int_type))
        cls = checked_type(int_type)
        with pytest.raises(DivisionByZeroError):
            cls(a) / cls(0)
        with pytest.raises(DivisionByZeroError):
            cls(a) // 0


class TestComparisonProperties:
    """Свойства сравнений"""

    @given(st.sampled_from(ALL_TYPES), st.data())
    def test_equal_raw_value(self, int_type: IntegerType, data) -> None:
        """Checked и равный raw: ==, <=, >= истинны; !=, <, > ложны"""
        v = data.draw(values_of(int_type))
        a = checked_type(int_type)(v)
        assert a == v and a <= v and a >= v
        assert not (a != v or a < v or a > v)

    @given(typed_pair())
    def test_comparisons_match_raw(self, case) -> None:
        """Сравнения checked значений совпадают со сравнениями raw"""
        int_type, a, b = case
        cls = checked_type(int_type)
        assert (cls(a) < cls(b)) == (a < b)
        assert (cls(a) == b) == (a == b)
        assert (a >= cls(b)) == (a >= b)
