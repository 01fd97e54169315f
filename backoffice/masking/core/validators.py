"""
====================================================================
ЦЕНТРАЛИЗОВАННЫЕ ВАЛИДАТОРЫ
====================================================================
Валидаторы канонических значений для форм и моделей хоста.
Разбор номера выполняет тот же тип поля, что и маска ввода,
поэтому правила совпадают с подсветкой ошибок в поле.
====================================================================
"""

from __future__ import annotations

from typing import Optional

from django import forms
from django.core.validators import BaseValidator

from ..services.kinds import PhoneKind


def validate_uzbek_phone(value: str) -> None:
    """
    Валидация номера телефона Узбекистана.

    Поддерживает форматы:
    - +998 90 123 45 67
    - 998901234567
    - 901234567

    Args:
        value: Строка с номером телефона

    Raises:
        forms.ValidationError: Если номер некорректен
    """
    if not value:
        return

    kind = PhoneKind()
    national = kind.extract(str(value))
    if len(national) != kind.national_length:
        raise forms.ValidationError(
            f'Номер телефона должен содержать {kind.national_length} цифр после +{kind.country_code}',
            code='invalid_phone',
        )


def normalize_phone(phone: Optional[str]) -> str:
    """
    Нормализация номера к национальному формату XXXXXXXXX.

    Returns:
        9 цифр номера или пустая строка, если номер неполный
    """
    if not phone:
        return ''
    return PhoneKind().parse(str(phone)) or ''


def format_phone_display(phone: str) -> str:
    """
    Форматирование номера для отображения.

    Returns:
        Отформатированный номер: +998 90 123 45 67,
        или исходная строка, если номер неполный
    """
    national = normalize_phone(phone)
    if not national:
        return phone
    return PhoneKind().render(national)


class PhoneValidator(BaseValidator):
    """Django-валидатор для телефонных номеров."""

    message = 'Введите корректный номер телефона. Пример: +998 90 123 45 67'
    code = 'invalid_phone'

    def __init__(self, message: Optional[str] = None):
        super().__init__(limit_value=None, message=message)

    def compare(self, value, limit_value):
        return False

    def __call__(self, value):
        try:
            validate_uzbek_phone(value)
        except forms.ValidationError:
            raise forms.ValidationError(self.message, code=self.code)


# Экземпляр валидатора для использования в формах и моделях
phone_validator = PhoneValidator()
