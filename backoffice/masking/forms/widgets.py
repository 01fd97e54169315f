"""
====================================================================
ВИДЖЕТЫ ПОЛЕЙ С МАСКОЙ
====================================================================
Виджеты выводят в HTML уже отформатированное значение:

- MaskedTextInput: текстовое поле даты, телефона или суммы.
  Значение из формы (каноническое или набранное пользователем)
  пропускается через тип поля и выводится по маске.
- TimePickerWidget: две колонки выбора (часы, минуты с шагом).

Атрибут data-mask подключает живое форматирование на стороне
браузера через AJAX-представление field_edit.
====================================================================
"""

from __future__ import annotations

from typing import Any, Optional

from django import forms

from ..conf import get_setting
from ..services.kinds import KINDS, FieldKind, TimeKind, get_kind
from ..services.validity import Validity

ERROR_CLASS = 'is-invalid'


class MaskedTextInput(forms.TextInput):
    """
    Текстовое поле с маской.

    Args:
        kind: Имя типа поля ('date', 'phone', 'amount', 'time')
        attrs: Дополнительные HTML-атрибуты
    """

    kind_name: str = ''

    def __init__(self, kind: Optional[str] = None, attrs: Optional[dict[str, Any]] = None):
        if kind:
            self.kind_name = kind
        base_attrs = {
            'class': 'form-control',
            'autocomplete': 'off',
            'data-mask': self.kind_name,
        }
        base_attrs.update(attrs or {})
        super().__init__(base_attrs)
        kind_class = KINDS.get(self.kind_name)
        if kind_class is not None:
            self.input_type = kind_class.input_type

    @property
    def kind(self) -> FieldKind:
        return get_kind(self.kind_name)

    def format_value(self, value: Any) -> Optional[str]:
        if value is None or value == '':
            return None
        return self.kind.render(value) or None

    def get_context(self, name: str, value: Any, attrs: Optional[dict[str, Any]]) -> dict[str, Any]:
        kind = self.kind
        context = super().get_context(name, value, attrs)
        widget_attrs = context['widget']['attrs']

        widget_attrs.setdefault('placeholder', kind.placeholder)
        widget_attrs.setdefault('inputmode', kind.input_mode)
        if kind.max_length:
            widget_attrs.setdefault('maxlength', kind.max_length)

        if value not in (None, '') and kind.classify(kind.encode(value)) is Validity.INVALID:
            css = widget_attrs.get('class', '')
            widget_attrs['class'] = f'{css} {ERROR_CLASS}'.strip()

        return context


class DateMaskInput(MaskedTextInput):
    kind_name = 'date'


class PhoneMaskInput(MaskedTextInput):
    kind_name = 'phone'


class AmountMaskInput(MaskedTextInput):
    kind_name = 'amount'


class TimePickerWidget(forms.MultiWidget):
    """Выбор времени из двух списков: часы и минуты."""

    def __init__(self, attrs: Optional[dict[str, Any]] = None, minute_step: Optional[int] = None):
        self.minute_step = minute_step or int(get_setting('TIME_MINUTE_STEP'))
        hours = [('', 'ЧЧ')] + [(f'{h:02d}', f'{h:02d}') for h in range(24)]
        minutes = [('', 'ММ')] + [
            (f'{m:02d}', f'{m:02d}') for m in range(0, 60, self.minute_step)
        ]
        base_attrs = {'class': 'form-select', 'data-time-picker': 'true'}
        base_attrs.update(attrs or {})
        widgets = {
            'hours': forms.Select(attrs=base_attrs, choices=hours),
            'minutes': forms.Select(attrs=base_attrs, choices=minutes),
        }
        super().__init__(widgets)

    def decompress(self, value: Any) -> list[str]:
        if not value:
            return ['', '']
        canonical = TimeKind().normalize(value)
        if canonical is None:
            return ['', '']
        return canonical.split(':')

    def value_from_datadict(self, data, files, name) -> str:
        hours, minutes = super().value_from_datadict(data, files, name)
        hours = hours or ''
        minutes = minutes or ''
        if not hours and not minutes:
            return ''
        return f'{hours}:{minutes}'
