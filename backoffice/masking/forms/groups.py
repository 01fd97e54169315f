"""
ФОРМА РАСПИСАНИЯ ЗАНЯТИЯ ГРУППЫ
"""

from __future__ import annotations

from typing import Any

from django import forms

from ..core.helpers import is_end_time_after_start
from .fields import TimeSlotField


class LessonSlotForm(forms.Form):
    """Время начала и окончания занятия."""

    start_time = TimeSlotField(label='Начало')
    end_time = TimeSlotField(label='Окончание')

    def clean(self) -> dict[str, Any]:
        cleaned_data = super().clean()
        start_time = cleaned_data.get('start_time')
        end_time = cleaned_data.get('end_time')

        if not is_end_time_after_start(start_time, end_time):
            self.add_error('end_time', 'Время окончания должно быть позже начала')

        return cleaned_data
