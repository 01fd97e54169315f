"""
ПЕРЕНОС ПОЗИЦИИ КУРСОРА ПРИ ПЕРЕФОРМАТИРОВАНИИ
"""

from __future__ import annotations

from .kinds import FieldKind, get_kind


def translate_caret(
    kind: 'str | FieldKind',
    raw_text: str,
    caret: int,
    new_display: str,
) -> int:
    """
    Вычислить позицию курсора в новой отображаемой строке.

    Считаем значимые символы слева от курсора в тексте поля после
    нажатия клавиши, затем ставим курсор сразу за символом с тем же
    порядковым номером в новой строке. Автоматически вставленный
    разделитель при этом оказывается слева от курсора:

        "12/03/202" + "4" -> "12/03/2024", курсор 10
        "12" + "3"        -> "12/3", курсор 4

    Args:
        kind: Тип поля или его имя
        raw_text: Текст поля сразу после правки (до форматирования)
        caret: Позиция курсора в raw_text
        new_display: Отформатированная строка

    Returns:
        Позиция курсора в диапазоне [0, len(new_display)]
    """
    field_kind = get_kind(kind)
    if not new_display:
        return 0

    caret = max(0, min(caret, len(raw_text)))
    count = field_kind.count_before(raw_text, caret)
    slots = field_kind.slots(new_display)

    if count <= 0:
        return slots[0] if slots else len(new_display)
    if count > len(slots):
        return len(new_display)
    return min(slots[count - 1] + 1, len(new_display))
