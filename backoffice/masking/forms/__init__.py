"""
ФОРМЫ - модульная структура
"""

from .widgets import (
    MaskedTextInput,
    DateMaskInput,
    PhoneMaskInput,
    AmountMaskInput,
    TimePickerWidget,
)
from .fields import MaskedDateField, UzbekPhoneField, AmountField, TimeSlotField
from .students import StudentForm
from .payments import PaymentForm
from .groups import LessonSlotForm

__all__ = [
    # Виджеты
    'MaskedTextInput',
    'DateMaskInput',
    'PhoneMaskInput',
    'AmountMaskInput',
    'TimePickerWidget',
    # Поля
    'MaskedDateField',
    'UzbekPhoneField',
    'AmountField',
    'TimeSlotField',
    # Формы
    'StudentForm',
    'PaymentForm',
    'LessonSlotForm',
]
