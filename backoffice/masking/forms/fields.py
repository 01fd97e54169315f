"""
====================================================================
ПОЛЯ ФОРМ С МАСКОЙ
====================================================================
Поля форм принимают отправленный текст (с разделителями или без),
разбирают его тем же типом поля, что и маска в браузере, и
возвращают каноническое значение:

- MaskedDateField: datetime.date
- UzbekPhoneField: 9 цифр национального номера
- AmountField: Decimal
- TimeSlotField: datetime.time

Неполное или невозможное значение при отправке формы - ошибка
формы. Сам движок ошибок не выбрасывает, проверка при отправке -
ответственность формы.
====================================================================
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from django import forms

from ..core.validators import phone_validator
from ..services.kinds import get_kind
from ..services.validity import Validity
from .widgets import AmountMaskInput, DateMaskInput, PhoneMaskInput, TimePickerWidget


class MaskedFieldMixin:
    """Разбор отправленного текста через тип поля."""

    kind_name: str = ''

    def to_canonical(self, value: Any) -> Any:
        """
        Каноническое значение или None для пустого поля.

        Raises:
            forms.ValidationError: Значение неполное или невозможное
        """
        kind = get_kind(self.kind_name)
        extracted = kind.encode(value)
        validity = kind.classify(extracted)

        if validity is Validity.EMPTY:
            return None
        if validity is Validity.PARTIAL:
            raise forms.ValidationError(self.error_messages['incomplete'], code='incomplete')
        if validity is Validity.INVALID:
            raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
        return kind.decode(extracted)


class MaskedDateField(MaskedFieldMixin, forms.DateField):
    """Дата в формате dd/mm/yyyy."""

    kind_name = 'date'
    widget = DateMaskInput
    default_error_messages = {
        'incomplete': 'Введите дату полностью: дд/мм/гггг',
        'invalid': 'Такой даты не существует',
    }

    def to_python(self, value: Any) -> Optional[date]:
        if value in self.empty_values:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        canonical = self.to_canonical(value)
        if canonical is None:
            return None
        return date.fromisoformat(canonical)


class UzbekPhoneField(MaskedFieldMixin, forms.CharField):
    """Телефон в формате +998 XX XXX XX XX."""

    kind_name = 'phone'
    widget = PhoneMaskInput
    default_validators = [phone_validator]
    default_error_messages = {
        'incomplete': 'Введите номер полностью: +998 XX XXX XX XX',
        'invalid': 'Введите корректный номер телефона',
    }

    def to_python(self, value: Any) -> str:
        value = super().to_python(value)
        if value in self.empty_values:
            return self.empty_value
        canonical = self.to_canonical(value)
        return canonical or self.empty_value


class AmountField(MaskedFieldMixin, forms.DecimalField):
    """Денежная сумма: "1 234 567.50"."""

    kind_name = 'amount'
    widget = AmountMaskInput
    default_error_messages = {
        'incomplete': 'Введите сумму',
        'invalid': 'Введите корректную сумму',
    }

    def __init__(self, *, min_value: Any = Decimal('0'), decimal_places: int = 2, **kwargs: Any):
        super().__init__(min_value=min_value, decimal_places=decimal_places, **kwargs)

    def to_python(self, value: Any) -> Optional[Decimal]:
        if value in self.empty_values:
            return None
        if isinstance(value, Decimal):
            return value
        if isinstance(value, (int, float)):
            try:
                return Decimal(str(value))
            except InvalidOperation:
                raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
        return self.to_canonical(str(value))


class TimeSlotField(MaskedFieldMixin, forms.TimeField):
    """Время HH:MM, выбранное из списков часов и минут."""

    kind_name = 'time'
    widget = TimePickerWidget
    default_error_messages = {
        'incomplete': 'Выберите часы и минуты',
        'invalid': 'Некорректное время',
    }

    def to_python(self, value: Any) -> Optional[time]:
        if value in self.empty_values:
            return None
        if isinstance(value, datetime):
            return value.time()
        if isinstance(value, time):
            return value
        canonical = self.to_canonical(value)
        if canonical is None:
            return None
        return time.fromisoformat(canonical)
