"""
ФИЛЬТР НАЖАТИЙ КЛАВИШ ДЛЯ ПОЛЕЙ С МАСКОЙ

Повторяет поведение обработчика keydown в браузере: управляющие
клавиши и сочетания с Ctrl/Cmd проходят всегда, из символов - только
цифры и разрешённые для типа поля разделители.
"""

from __future__ import annotations

from .kinds import FieldKind, get_kind

NAVIGATION_KEYS = frozenset({
    'Backspace',
    'Delete',
    'Tab',
    'Escape',
    'Enter',
    'ArrowLeft',
    'ArrowRight',
    'Home',
    'End',
})


def accepts_key(
    kind: 'str | FieldKind',
    key: str,
    ctrl: bool = False,
    meta: bool = False,
) -> bool:
    """
    Пропустить ли нажатие клавиши в поле.

    Args:
        kind: Тип поля или его имя
        key: Значение KeyboardEvent.key
        ctrl: Зажат Ctrl
        meta: Зажат Cmd/Win

    Returns:
        False, если ввод символа нужно заблокировать
    """
    if key in NAVIGATION_KEYS:
        return True
    # Ctrl+A, Ctrl+C, Ctrl+V, Ctrl+X и прочие сочетания
    if ctrl or meta:
        return True
    if len(key) == 1 and '0' <= key <= '9':
        return True
    return key in get_kind(kind).extra_keys
