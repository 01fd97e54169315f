"""
НАСТРОЙКИ ПРИЛОЖЕНИЯ МАСОК ВВОДА

Значения по умолчанию переопределяются словарём MASKING в settings.py:

    MASKING = {
        'AMOUNT_GROUP_SEPARATOR': ' ',
        'TIME_MINUTE_STEP': 10,
    }
"""

from __future__ import annotations

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Разделитель групп разрядов суммы (обычный или узкий пробел)
    'AMOUNT_GROUP_SEPARATOR': ' ',
    # Допустимый диапазон лет для полей даты
    'DATE_MIN_YEAR': 1900,
    'DATE_MAX_YEAR': 2100,
    # Шаг минут в выпадающем выборе времени
    'TIME_MINUTE_STEP': 5,
    # Код страны для телефонов
    'PHONE_COUNTRY_CODE': '998',
}


def get_setting(name: str) -> Any:
    """
    Получить настройку приложения с учётом settings.MASKING.

    Args:
        name: Имя настройки из DEFAULTS

    Returns:
        Значение из settings.MASKING или значение по умолчанию
    """
    overrides = getattr(settings, 'MASKING', None) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
