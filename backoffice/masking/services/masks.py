"""
====================================================================
ШАБЛОНЫ МАСОК И ИЗВЛЕЧЕНИЕ СИМВОЛОВ
====================================================================
Низкоуровневые операции над строкой поля ввода:

- MaskSpec: неизменяемое описание шаблона (позиции цифр и разделителей)
- extract_digits / extract_amount: очистка сырого ввода до значимых символов
- format_mask: вставка разделителей по шаблону
- group_thousands: группировка разрядов суммы
- slot_positions: позиции значимых символов в отображаемой строке

Все функции тотальны: любая строка на входе даёт результат,
исключения не выбрасываются.
====================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

# Символ шаблона, обозначающий место для цифры
SLOT = '#'

DECIMAL_SEPARATORS = ('.', ',')
AMOUNT_FRACTION_DIGITS = 2


@dataclass(frozen=True)
class MaskSpec:
    """
    Шаблон маски поля.

    Attributes:
        template: Шаблон, где '#' - место для цифры, остальное - литералы
        digit_slots: Позиции цифр в шаблоне по порядку
        literals: Позиция -> символ-разделитель
        max_digits: Количество значимых цифр
    """

    template: str
    digit_slots: tuple[int, ...] = field(default=())
    literals: dict[int, str] = field(default_factory=dict)
    max_digits: int = 0

    @classmethod
    def from_template(cls, template: str) -> 'MaskSpec':
        slots = tuple(i for i, ch in enumerate(template) if ch == SLOT)
        literals = {i: ch for i, ch in enumerate(template) if ch != SLOT}
        return cls(
            template=template,
            digit_slots=slots,
            literals=literals,
            max_digits=len(slots),
        )

    @property
    def display_length(self) -> int:
        return len(self.template)

    @property
    def placeholder(self) -> str:
        return self.template.replace(SLOT, 'X')

    def matches(self, display: str) -> bool:
        """Проверить, что строка соответствует форме шаблона."""
        if len(display) > len(self.template):
            return False
        for pos, ch in enumerate(display):
            literal = self.literals.get(pos)
            if literal is not None:
                if ch != literal:
                    return False
            elif not ch.isdigit():
                return False
        return True


def only_digits(value: str) -> str:
    """Оставить в строке только ASCII-цифры 0-9."""
    return ''.join(ch for ch in value if '0' <= ch <= '9')


def extract_digits(raw: str, limit: Optional[int] = None) -> str:
    """
    Извлечь цифры из сырого ввода.

    Args:
        raw: Текст поля после нажатия клавиши
        limit: Максимальное количество цифр

    Returns:
        Строка только из цифр, обрезанная до limit
    """
    digits = only_digits(raw or '')
    if limit is not None:
        digits = digits[:limit]
    return digits


def extract_amount(raw: str) -> str:
    """
    Извлечь сумму из сырого ввода.

    Оставляет цифры и первый десятичный разделитель ('.' или ',',
    приводится к '.'). Последующие разделители отбрасываются, цифры
    после них продолжают дробную часть. Дробная часть - не более
    двух цифр, целая часть не ограничена.

    Examples:
        "1 234,5" -> "1234.5"
        "1.2.3" -> "1.23"
        "abc" -> ""
    """
    integer: list[str] = []
    fraction: list[str] = []
    seen_separator = False

    for ch in raw or '':
        if '0' <= ch <= '9':
            if seen_separator:
                fraction.append(ch)
            else:
                integer.append(ch)
        elif ch in DECIMAL_SEPARATORS:
            seen_separator = True

    result = ''.join(integer)
    if seen_separator:
        result += '.' + ''.join(fraction[:AMOUNT_FRACTION_DIGITS])
    return result


def format_mask(extracted: str, spec: MaskSpec) -> str:
    """
    Вставить разделители шаблона в поток цифр.

    Литерал выводится только если после него будет хотя бы одна
    цифра: "1203" -> "12/03", но не "12/03/".
    """
    digits = extracted[:spec.max_digits]
    out: list[str] = []
    consumed = 0

    for pos, ch in enumerate(spec.template):
        if consumed >= len(digits):
            break
        if pos in spec.literals:
            out.append(ch)
        else:
            out.append(digits[consumed])
            consumed += 1

    return ''.join(out)


def group_thousands(extracted: str, separator: str = ' ') -> str:
    """
    Сгруппировать целую часть суммы по три разряда справа.

    Examples:
        "1234567.5" -> "1 234 567.5"
        "12." -> "12."
    """
    if not extracted:
        return ''

    integer, dot, fraction = extracted.partition('.')
    groups: list[str] = []
    while len(integer) > 3:
        groups.insert(0, integer[-3:])
        integer = integer[:-3]
    if integer:
        groups.insert(0, integer)

    return separator.join(groups) + dot + fraction


def slot_positions(display: str, spec: MaskSpec) -> list[int]:
    """Позиции значимых символов отображаемой строки по шаблону."""
    return [
        pos for pos in range(min(len(display), spec.display_length))
        if pos not in spec.literals
    ]
