"""
====================================================================
ТИПЫ ПОЛЕЙ: КОДЕКИ КАНОНИЧЕСКИХ ЗНАЧЕНИЙ
====================================================================
Каждый тип поля (дата, телефон, время, сумма) описан одним классом-
стратегией поверх общего движка MaskedField. Особенности типа
заданы данными (шаблон маски, длина, диапазоны) и несколькими
переопределёнными методами.

Единый интерфейс типа:
- extract(raw): сырой ввод -> значимые символы
- format(extracted): значимые символы -> отображаемая строка
- decode(extracted): -> каноническое значение или None
- encode(value): каноническое значение -> значимые символы
- classify(extracted): -> Validity
- blur(extracted): нормализация при потере фокуса
- count_before(raw, caret): значимых символов до курсора
- slots(display): позиции значимых символов в отображении

Канонические значения:
- date: строка "YYYY-MM-DD"
- phone: 9 цифр национального номера (контекст +998)
- time: строка "HH:MM"
- amount: неотрицательный Decimal

decode никогда не выбрасывает исключений: неполный или
невозможный ввод даёт None ("значения пока нет").
====================================================================
"""

from __future__ import annotations

import calendar
import re
from datetime import date, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Optional

from ..conf import get_setting
from ..core.exceptions import UnknownFieldKindError
from .masks import (
    MaskSpec,
    extract_amount,
    extract_digits,
    format_mask,
    group_thousands,
    only_digits,
    slot_positions,
)
from .validity import Validity, classify_length

ISO_DATE_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})(?:$|[T ])')
CLOCK_RE = re.compile(r'^(\d{1,2}):(\d{2})(?::\d{2})?$')

CENT = Decimal('0.01')


def quantize_cents(amount: Decimal) -> Decimal:
    """
    Округлить сумму до двух знаков после точки.

    Точность контекста берётся по числу разрядов суммы: целая часть
    не ограничена и не должна округляться до 28 значащих цифр.
    """
    with localcontext() as ctx:
        # целые разряды + перенос при округлении + два знака
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)


class FieldKind:
    """Базовая стратегия типа поля."""

    name: str = ''
    placeholder: str = ''
    input_type: str = 'text'
    input_mode: str = 'numeric'
    max_length: Optional[int] = None
    # Символы, которые можно набирать помимо цифр
    extra_keys: tuple[str, ...] = ()

    def extract(self, raw: str) -> str:
        raise NotImplementedError

    def format(self, extracted: str) -> str:
        raise NotImplementedError

    def decode(self, extracted: str) -> Any:
        raise NotImplementedError

    def encode(self, value: Any) -> str:
        raise NotImplementedError

    def classify(self, extracted: str) -> Validity:
        raise NotImplementedError

    def slots(self, display: str) -> list[int]:
        raise NotImplementedError

    def blur(self, extracted: str) -> str:
        return extracted

    def count_before(self, raw: str, caret: int) -> int:
        total = len(self.extract(raw))
        return min(len(self.extract(raw[:caret])), total)

    def render(self, value: Any) -> str:
        """Каноническое значение -> отображаемая строка."""
        return self.format(self.encode(value))

    def parse(self, text: str) -> Any:
        """Отображаемая (или сырая) строка -> каноническое значение."""
        extracted = self.extract(text)
        if self.classify(extracted) is not Validity.VALID:
            return None
        return self.decode(extracted)

    def normalize(self, value: Any) -> Any:
        """Привести внешнее значение к каноническому виду."""
        extracted = self.encode(value)
        if self.classify(extracted) is not Validity.VALID:
            return None
        return self.decode(extracted)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.name}>'


class MaskedKind(FieldKind):
    """Тип поля с фиксированным шаблоном маски."""

    spec: MaskSpec

    def __init__(self):
        if not self.placeholder:
            self.placeholder = self.spec.placeholder
        self.max_length = self.spec.display_length

    def extract(self, raw: str) -> str:
        return extract_digits(raw, self.spec.max_digits)

    def format(self, extracted: str) -> str:
        return format_mask(extracted, self.spec)

    def classify(self, extracted: str) -> Validity:
        count = len(extracted)
        complete = count >= self.spec.max_digits
        return classify_length(
            count,
            self.spec.max_digits,
            complete and self.decode(extracted) is not None,
        )

    def slots(self, display: str) -> list[int]:
        return slot_positions(display, self.spec)


# =============================================================================
# ДАТА
# =============================================================================

class DateKind(MaskedKind):
    """
    Дата в формате dd/mm/yyyy с каноническим значением YYYY-MM-DD.

    Полная дата проверяется по диапазонам и по календарю:
    31/02/2024 отклоняется, 29/02/2024 принимается.
    """

    name = 'date'
    spec = MaskSpec.from_template('##/##/####')
    placeholder = 'dd/mm/yyyy'
    extra_keys = ('/',)

    def __init__(self):
        super().__init__()
        self.min_year = int(get_setting('DATE_MIN_YEAR'))
        self.max_year = int(get_setting('DATE_MAX_YEAR'))

    def decode(self, extracted: str) -> Optional[str]:
        if len(extracted) != self.spec.max_digits or not extracted.isdigit():
            return None

        dd, mm, yyyy = extracted[0:2], extracted[2:4], extracted[4:8]
        day, month, year = int(dd), int(mm), int(yyyy)

        if not (1 <= day <= 31 and 1 <= month <= 12):
            return None
        if not (self.min_year <= year <= self.max_year):
            return None
        # Календарная проверка без "перекатывания" 30 февраля в март
        if day > calendar.monthrange(year, month)[1]:
            return None

        return f'{yyyy}-{mm}-{dd}'

    def encode(self, value: Any) -> str:
        if value is None or value == '':
            return ''
        if isinstance(value, date):
            return f'{value.day:02d}{value.month:02d}{value.year:04d}'

        text = str(value).strip()
        match = ISO_DATE_RE.match(text)
        if match:
            year, month, day = match.groups()
            return f'{day}{month}{year}'
        # dd/mm/yyyy или частично набранная строка
        return self.extract(text)


# =============================================================================
# ТЕЛЕФОН
# =============================================================================

class PhoneKind(MaskedKind):
    """
    Телефон Узбекистана: +998 XX XXX XX XX.

    Каноническое значение - 9 цифр национального номера. Код страны
    входит в шаблон как литерал и отбрасывается из ввода, если его
    набрали или вставили вместе с номером.
    """

    name = 'phone'
    input_type = 'tel'
    national_length = 9

    def __init__(self):
        self.country_code = str(get_setting('PHONE_COUNTRY_CODE'))
        self.spec = MaskSpec.from_template(f'+{self.country_code} ## ### ## ##')
        self.placeholder = f'+{self.country_code} XX XXX XX XX'
        super().__init__()

    def _country_digits(self, raw: str) -> int:
        """Сколько ведущих цифр ввода относится к коду страны."""
        text = (raw or '').lstrip()
        code = self.country_code

        if text.startswith('+'):
            head = ''
            for ch in text[1:]:
                if not ch.isdigit():
                    break
                head += ch
            if head:
                matched = 0
                while matched < min(len(head), len(code)) and head[matched] == code[matched]:
                    matched += 1
                # "+99" - недописанный (или частично стёртый) код страны
                if matched == len(code) or matched == len(head):
                    return matched
                return 0
            # "+ 998 90 ..." - код отделён от плюса пробелом
            text = text[1:].lstrip()

        digits = only_digits(text)
        if not digits.startswith(code):
            return 0
        if len(digits) > self.national_length:
            return len(code)
        rest = text[len(code):]
        if text.startswith(code) and rest and not rest[0].isdigit():
            return len(code)
        return 0

    def extract(self, raw: str) -> str:
        digits = only_digits(raw or '')
        return digits[self._country_digits(raw):][:self.national_length]

    def count_before(self, raw: str, caret: int) -> int:
        total = len(self.extract(raw))
        before = len(only_digits(raw[:caret])) - self._country_digits(raw)
        return max(0, min(before, total))

    def decode(self, extracted: str) -> Optional[str]:
        if len(extracted) == self.national_length and extracted.isdigit():
            return extracted
        return None

    def encode(self, value: Any) -> str:
        if value is None:
            return ''
        return self.extract(str(value))

    def to_international(self, national: str) -> str:
        """Национальный номер -> номер с кодом страны (998XXXXXXXXX)."""
        if not national:
            return ''
        return f'{self.country_code}{national}'


# =============================================================================
# ВРЕМЯ
# =============================================================================

class TimeKind(MaskedKind):
    """
    Время HH:MM в 24-часовом формате.

    Основной способ ввода - выбор из списка (TimePicker), кодек
    используется для разбора внешних значений и для поля с маской.
    Шаг 5 минут кодек не проверяет.
    """

    name = 'time'
    spec = MaskSpec.from_template('##:##')
    placeholder = 'HH:MM'

    def decode(self, extracted: str) -> Optional[str]:
        if len(extracted) != self.spec.max_digits or not extracted.isdigit():
            return None
        hours, minutes = int(extracted[:2]), int(extracted[2:])
        if hours > 23 or minutes > 59:
            return None
        return f'{extracted[:2]}:{extracted[2:]}'

    def encode(self, value: Any) -> str:
        if value is None or value == '':
            return ''
        if isinstance(value, time):
            return f'{value.hour:02d}{value.minute:02d}'

        text = str(value).strip()
        match = CLOCK_RE.match(text)
        if match:
            hours, minutes = match.groups()
            return f'{hours.zfill(2)}{minutes}'
        return self.extract(text)


# =============================================================================
# СУММА
# =============================================================================

class AmountKind(FieldKind):
    """
    Денежная сумма: "1 234 567.50".

    Целая часть группируется по три разряда, после точки - до двух
    цифр. Каноническое значение - неотрицательный Decimal. Нулевая
    сумма отображается пустым полем.
    """

    name = 'amount'
    placeholder = '0.00'
    input_mode = 'decimal'
    extra_keys = ('.', ',')

    def __init__(self):
        self.separator = str(get_setting('AMOUNT_GROUP_SEPARATOR'))

    def extract(self, raw: str) -> str:
        return extract_amount(raw)

    def format(self, extracted: str) -> str:
        return group_thousands(extracted, self.separator)

    def slots(self, display: str) -> list[int]:
        return [pos for pos, ch in enumerate(display) if ch != self.separator]

    def classify(self, extracted: str) -> Validity:
        if not extracted:
            return Validity.EMPTY
        if not only_digits(extracted):
            return Validity.PARTIAL
        return Validity.VALID

    def decode(self, extracted: str) -> Optional[Decimal]:
        if not only_digits(extracted or ''):
            return None
        try:
            amount = Decimal(extracted)
        except (InvalidOperation, ValueError):
            return Decimal('0')
        if not amount.is_finite():
            return Decimal('0')
        return amount

    def encode(self, value: Any) -> str:
        if value is None or value == '':
            return ''
        if isinstance(value, str):
            return self.extract(value)

        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return ''
        if not amount.is_finite() or amount == 0:
            return ''

        amount = amount.copy_abs()
        if amount.as_tuple().exponent < -2:
            amount = quantize_cents(amount)
        # 1E-30 после округления тоже ноль
        if amount == 0:
            return ''
        return self.extract(format(amount, 'f'))

    def blur(self, extracted: str) -> str:
        amount = self.decode(extracted)
        if amount is None or amount == 0:
            return ''
        integer, _, fraction = extracted.partition('.')
        integer = integer.lstrip('0') or '0'
        return f'{integer}.{fraction.ljust(2, "0")}'


# =============================================================================
# РЕЕСТР
# =============================================================================

KINDS: dict[str, type[FieldKind]] = {
    DateKind.name: DateKind,
    PhoneKind.name: PhoneKind,
    TimeKind.name: TimeKind,
    AmountKind.name: AmountKind,
}


def get_kind(kind: 'str | FieldKind') -> FieldKind:
    """
    Получить стратегию типа поля по имени.

    Raises:
        UnknownFieldKindError: Если тип не зарегистрирован
    """
    if isinstance(kind, FieldKind):
        return kind
    try:
        kind_class = KINDS[kind]
    except (KeyError, TypeError):
        raise UnknownFieldKindError(str(kind))
    return kind_class()
