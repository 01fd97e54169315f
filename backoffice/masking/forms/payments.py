"""
====================================================================
ФОРМА ОПЛАТЫ
====================================================================
Приём оплаты от студента: сумма с группировкой разрядов и дата.
====================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from django import forms

from .fields import AmountField, MaskedDateField


class PaymentForm(forms.Form):
    """
    Форма оплаты.

    Поля формы:
    - amount: Сумма оплаты
    - paid_at: Дата оплаты
    - method: Способ оплаты
    """

    METHOD_CHOICES = [
        ('cash', 'Наличные'),
        ('card', 'Карта'),
        ('transfer', 'Перечисление'),
    ]

    amount = AmountField(label='Сумма')

    paid_at = MaskedDateField(label='Дата оплаты')

    method = forms.ChoiceField(
        label='Способ оплаты',
        choices=METHOD_CHOICES,
        initial='cash',
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    def clean_amount(self) -> Optional[Decimal]:
        amount: Optional[Decimal] = self.cleaned_data.get('amount')
        if amount is not None and amount <= 0:
            raise forms.ValidationError('Сумма должна быть больше нуля')
        return amount
