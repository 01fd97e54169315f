"""
====================================================================
ЦЕНТРАЛИЗОВАННЫЕ ИСКЛЮЧЕНИЯ
====================================================================
Иерархия исключений приложения масок ввода.

Сам движок масок исключений не выбрасывает: любые строки
обрабатываются, а некорректность отражается через Validity.
Исключения возникают только на стыке с хостом (неизвестный тип
поля, неверные параметры запроса).
====================================================================
"""

from __future__ import annotations


class AppError(Exception):
    """
    Базовое исключение приложения.

    Все кастомные исключения наследуются от него для
    унифицированной обработки ошибок.
    """

    default_message: str = 'Произошла ошибка'

    def __init__(self, message: str = None, code: str = None):
        self.message = message or self.default_message
        self.code = code
        super().__init__(self.message)


class MaskingError(AppError):
    """Ошибка подсистемы масок ввода."""
    default_message = 'Ошибка обработки поля ввода'


class UnknownFieldKindError(MaskingError):
    """Запрошен незарегистрированный тип поля."""
    default_message = 'Неизвестный тип поля'

    def __init__(self, kind: str = None):
        self.kind = kind
        message = f'Неизвестный тип поля: {kind}' if kind else None
        super().__init__(message, code='unknown_kind')

