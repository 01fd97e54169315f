# =============================================================================
# ФАЙЛ: masking/services/__init__.py
# =============================================================================
# НАЗНАЧЕНИЕ:
#   Движок полей ввода с маской. Чистый Python без обращений к БД,
#   используется виджетами форм, AJAX-представлениями и фильтрами шаблонов.
#
# МОДУЛИ:
#   masks       - Шаблоны масок, извлечение символов, форматирование
#   kinds       - Типы полей и кодеки канонических значений
#   validity    - Классификация содержимого поля
#   cursor      - Перенос курсора при переформатировании
#   engine      - Состояние поля, правки, синхронизация с хостом
#   keyboard    - Фильтр нажатий клавиш
#   time_picker - Выбор времени из списка
#
# ПРОЕКТ: Legacy Academy - административная панель учебного центра
# =============================================================================

"""
СЕРВИСЫ - движок полей ввода с маской
"""

from .masks import MaskSpec, extract_amount, extract_digits, format_mask, group_thousands
from .validity import Validity
from .kinds import (
    FieldKind,
    DateKind,
    PhoneKind,
    TimeKind,
    AmountKind,
    KINDS,
    get_kind,
)
from .cursor import translate_caret
from .engine import FieldState, MaskedField, EMPTY_VALUE
from .keyboard import accepts_key
from .time_picker import TimePicker

__all__ = [
    # Маски
    'MaskSpec',
    'extract_amount',
    'extract_digits',
    'format_mask',
    'group_thousands',
    # Типы полей
    'FieldKind',
    'DateKind',
    'PhoneKind',
    'TimeKind',
    'AmountKind',
    'KINDS',
    'get_kind',
    # Движок
    'Validity',
    'translate_caret',
    'FieldState',
    'MaskedField',
    'EMPTY_VALUE',
    'accepts_key',
    'TimePicker',
]
