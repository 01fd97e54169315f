"""
====================================================================
ЦЕНТРАЛИЗОВАННЫЕ ХЕЛПЕРЫ
====================================================================
Вспомогательные функции для форматирования и разбора значений
вне поля ввода: таблицы, карточки, отчёты.
====================================================================
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..services.kinds import DateKind, TimeKind, quantize_cents
from ..services.masks import group_thousands


# =============================================================================
# ПАРСИНГ ПАРАМЕТРОВ
# =============================================================================

def parse_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """
    Безопасный парсинг целого числа.

    Args:
        value: Значение для парсинга
        default: Значение по умолчанию

    Returns:
        Целое число или default
    """
    if value is None or value == '':
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def parse_amount(text: Any) -> Decimal:
    """
    Разбор суммы из строки с пробелами и запятой.

    Не выбрасывает исключений: для мусора и пустой строки возвращает 0.

    Examples:
        "1 234,5" -> Decimal("1234.5")
        "abc" -> Decimal("0")
    """
    if text is None:
        return Decimal('0')
    cleaned = ''.join(str(text).split()).replace(',', '.', 1)
    try:
        amount = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return Decimal('0')
    return amount if amount.is_finite() else Decimal('0')


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================

def _two_places(amount: Any) -> Optional[str]:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return format(quantize_cents(value), 'f')


def format_currency(amount: Any, separator: str = ' ') -> str:
    """
    Форматирование суммы для таблиц и отчётов.

    Returns:
        Отформатированная строка: "26 000.50" (без символа валюты)
    """
    text = _two_places(amount)
    if text is None:
        return '0.00'
    sign = ''
    if text.startswith('-'):
        sign, text = '-', text[1:]
    return sign + group_thousands(text, separator)


def format_amount_for_input(amount: Any, separator: str = ' ') -> str:
    """Сумма для поля ввода: как format_currency, но пусто для 0."""
    text = _two_places(amount) if amount not in (None, '') else None
    if text is None or Decimal(text) == 0:
        return ''
    return group_thousands(text.lstrip('-'), separator)


def format_date_display(value: Any) -> str:
    """
    Дата для отображения: "2024-03-12" -> "12/03/2024".

    Неполные и нераспознанные значения возвращаются как есть.
    """
    if not value:
        return ''
    kind = DateKind()
    extracted = kind.encode(value)
    if kind.decode(extracted) is None:
        return str(value)
    return kind.format(extracted)


def format_time(value: Any) -> str:
    """Время в формате HH:MM ("09:30:00" -> "09:30")."""
    if not value:
        return ''
    canonical = TimeKind().normalize(value)
    if canonical is None:
        return str(value)[:5]
    return canonical


def is_end_time_after_start(start: Any, end: Any) -> bool:
    """
    Проверить, что время окончания позже начала.

    Пустые значения не считаются ошибкой (обязательность
    проверяется отдельно).
    """
    start_time = format_time(start)
    end_time = format_time(end)
    if not start_time or not end_time:
        return True
    return end_time > start_time
