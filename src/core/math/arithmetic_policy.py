"""
Arithmetic Policy — Конфигурация граничных случаев checked-арифметики

Два случая допускают выбор поведения:
- Умножение: проверка диапазона (checked) или усечение по модулю 2**bits (wrapping)
- Деление min(T) / -1 для signed типов: ошибка (checked) или усечение (wrapping)

По умолчанию оба случая проверяются. Wrapping воспроизводит поведение
арифметики фиксированной ширины без проверок и логируется как WARNING.

Переменные окружения:
    CHECKED_INT_MULTIPLICATION: checked | wrapping (default: checked)
    CHECKED_INT_DIVISION: checked | wrapping (default: checked)
"""

import logging
import os
from dataclasses import dataclass
from typing import Final

logger = logging.getLogger(__name__)

MODE_CHECKED: Final[str] = "checked"
MODE_WRAPPING: Final[str] = "wrapping"

ENV_MULTIPLICATION: Final[str] = "CHECKED_INT_MULTIPLICATION"
ENV_DIVISION: Final[str] = "CHECKED_INT_DIVISION"


def _parse_mode(env_name: str) -> bool:
    """Возвращает True для checked, False для wrapping."""
    raw = os.getenv(env_name, MODE_CHECKED).strip().lower()
    if raw == MODE_CHECKED:
        return True
    if raw == MODE_WRAPPING:
        return False
    raise ValueError(
        f"{env_name} must be '{MODE_CHECKED}' or '{MODE_WRAPPING}', got {raw!r}"
    )


@dataclass(frozen=True)
class ArithmeticPolicy:
    """
    Политика проверок для операций без однозначной семантики.

    Immutable и hashable: политика входит в ключ кэша классов CheckedInteger.
    """

    checked_multiplication: bool = True
    checked_division: bool = True

    @property
    def is_strict(self) -> bool:
        """Все проверки включены."""
        return self.checked_multiplication and self.checked_division

    @classmethod
    def from_env(cls) -> "ArithmeticPolicy":
        """
        Загрузка политики из переменных окружения.

        Returns:
            ArithmeticPolicy

        Raises:
            ValueError: Если значение переменной не checked/wrapping
        """
        policy = cls(
            checked_multiplication=_parse_mode(ENV_MULTIPLICATION),
            checked_division=_parse_mode(ENV_DIVISION),
        )
        logger.info(f"Loaded arithmetic policy from env: {policy}")
        return policy


DEFAULT_POLICY: Final[ArithmeticPolicy] = ArithmeticPolicy()
