"""
====================================================================
CORE МОДУЛЬ - БАЗОВЫЕ УТИЛИТЫ И ХЕЛПЕРЫ
====================================================================
Исключения и обработка ошибок для всего приложения.

Валидаторы (core.validators) и хелперы (core.helpers) опираются на
движок масок и импортируются напрямую из своих модулей.
====================================================================
"""

from .error_handling import handle_ajax_exceptions, log_view_error
from .exceptions import (
    AppError,
    MaskingError,
    UnknownFieldKindError,
)

__all__ = [
    # Обработка ошибок
    'handle_ajax_exceptions',
    'log_view_error',
    # Исключения
    'AppError',
    'MaskingError',
    'UnknownFieldKindError',
]
