"""
СОСТОЯНИЯ ВАЛИДНОСТИ ПОЛЯ
"""

from __future__ import annotations

from enum import Enum


class Validity(str, Enum):
    """
    Классификация текущего содержимого поля.

    - EMPTY: поле пустое (не ошибка, обязательность - забота хоста)
    - PARTIAL: ввод не завершён, оценки нет
    - VALID: значение полное и корректное
    - INVALID: значение полное, но невозможное (31 февраля и т.п.)
    """

    EMPTY = 'empty'
    PARTIAL = 'partial'
    VALID = 'valid'
    INVALID = 'invalid'

    @property
    def is_error(self) -> bool:
        """Подсвечивать ли поле как ошибочное."""
        return self is Validity.INVALID

    @property
    def has_value(self) -> bool:
        """Есть ли у поля каноническое значение."""
        return self is Validity.VALID


def classify_length(count: int, required: int, decodes: bool) -> Validity:
    """
    Общий автомат классификации для полей фиксированной длины.

    Args:
        count: Количество извлечённых цифр
        required: Требуемое количество цифр
        decodes: Проходит ли полное значение проверки кодека
    """
    if count == 0:
        return Validity.EMPTY
    if count < required:
        return Validity.PARTIAL
    return Validity.VALID if decodes else Validity.INVALID
