"""
====================================================================
ФОРМА СТУДЕНТА
====================================================================
Анкета студента учебного центра: дата рождения и телефоны вводятся
через поля с маской.

Поля формы:
- first_name, last_name: Имя и фамилия
- birth_date: Дата рождения (dd/mm/yyyy)
- phone: Телефон студента
- parent_phone: Телефон родителя (необязательно)
====================================================================
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from django import forms

from .fields import MaskedDateField, UzbekPhoneField


class StudentForm(forms.Form):
    """Форма создания и редактирования студента."""

    first_name = forms.CharField(
        label='Имя',
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Имя'})
    )

    last_name = forms.CharField(
        label='Фамилия',
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Фамилия'})
    )

    birth_date = MaskedDateField(label='Дата рождения', required=False)

    phone = UzbekPhoneField(label='Телефон')

    parent_phone = UzbekPhoneField(label='Телефон родителя', required=False)

    def clean_birth_date(self) -> Optional[date]:
        """
        Проверка даты рождения.

        Raises:
            forms.ValidationError: Если дата в будущем
        """
        birth_date: Optional[date] = self.cleaned_data.get('birth_date')
        if birth_date and birth_date > date.today():
            raise forms.ValidationError('Дата рождения не может быть в будущем')
        return birth_date
