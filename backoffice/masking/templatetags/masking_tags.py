"""
====================================================================
КАСТОМНЫЕ TEMPLATE TAGS ДЛЯ ПОЛЕЙ С МАСКОЙ
====================================================================
Фильтры вывода канонических значений в таблицах и карточках
в том же виде, в каком они набираются в полях ввода.

Использование:
1. Добавить в шаблон: {% load masking_tags %}
2. Использовать фильтры: {{ student.phone|phone_format }}
====================================================================
"""

from django import template

from ..conf import get_setting
from ..core.helpers import format_currency, format_date_display, format_time
from ..core.validators import format_phone_display

register = template.Library()


@register.filter
def date_display(value):
    """
    Форматирование даты для отображения.

    Examples:
        {{ "2024-03-12"|date_display }} -> "12/03/2024"
        {{ None|date_display }} -> ""
    """
    return format_date_display(value)


@register.filter
def phone_format(value):
    """
    Форматирование номера телефона Узбекистана.

    Examples:
        {{ "901234567"|phone_format }} -> "+998 90 123 45 67"
        {{ "998901234567"|phone_format }} -> "+998 90 123 45 67"
    """
    if not value:
        return ''
    return format_phone_display(str(value))


@register.filter
def format_amount(value):
    """
    Форматирование суммы с разделителями разрядов.

    Examples:
        {{ 26000.5|format_amount }} -> "26 000.50"
        {{ None|format_amount }} -> "—"
    """
    if value is None or value == '':
        return '—'
    return format_currency(value, get_setting('AMOUNT_GROUP_SEPARATOR'))


@register.filter
def time_display(value):
    """
    Время в 24-часовом формате.

    Examples:
        {{ "09:30:00"|time_display }} -> "09:30"
    """
    return format_time(value)
