"""
====================================================================
ВЫБОР ВРЕМЕНИ
====================================================================
TimePicker - две колонки (часы 00-23, минуты с шагом 5) вместо
посимвольной маски. Выбор сразу задаёт каноническое "HH:MM",
частичных и ошибочных значений хост не получает.

Дополнительно поддерживается ввод с клавиатуры по сегментам:
- type_hours / type_minutes: не более двух цифр, ограничение 23 / 59
- step_hours / step_minutes: стрелки вверх/вниз с переходом по кругу
- blur: дополнение одиночной цифры нулём
====================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..conf import get_setting
from .kinds import TimeKind
from .masks import only_digits

logger = logging.getLogger(__name__)

ScrollCallback = Callable[[tuple[Optional[str], Optional[str]]], None]
# Совместимо с asyncio.AbstractEventLoop.call_later
Scheduler = Callable[[float, Callable[[], None]], Any]


class TimePicker:
    """Состояние выбора времени для одного поля."""

    def __init__(
        self,
        value: Any = '',
        on_change: Optional[Callable[[str], None]] = None,
        minute_step: Optional[int] = None,
    ):
        self.kind = TimeKind()
        self.on_change = on_change
        self.minute_step = minute_step or int(get_setting('TIME_MINUTE_STEP'))
        self.hours, self.minutes = self._split(value)
        # Последнее значение, которым обменялись с хостом
        self.last_external = self.value
        self.is_open = False
        self._pending = None

    def __repr__(self) -> str:
        return f'<TimePicker {self.hours or "--"}:{self.minutes or "--"}>'

    @property
    def hour_options(self) -> list[str]:
        return [f'{hour:02d}' for hour in range(24)]

    @property
    def minute_options(self) -> list[str]:
        return [f'{minute:02d}' for minute in range(0, 60, self.minute_step)]

    @property
    def value(self) -> str:
        """Каноническое "HH:MM" или пустая строка, пока не выбраны обе части."""
        if self.hours and self.minutes:
            return f'{self.hours.zfill(2)}:{self.minutes.zfill(2)}'
        return ''

    def _split(self, value: Any) -> tuple[str, str]:
        canonical = self.kind.normalize(value)
        if canonical is None:
            return '', ''
        hours, minutes = canonical.split(':')
        return hours, minutes

    def _update(self) -> None:
        if self.hours and self.minutes:
            emitted = self.value
        elif not self.hours and not self.minutes:
            emitted = ''
        else:
            # Выбрана одна колонка - хосту сообщать нечего
            return
        self.last_external = emitted
        if self.on_change is not None:
            self.on_change(emitted)

    # ------------------------------------------------------------------
    # Выбор из списка
    # ------------------------------------------------------------------

    def select_hour(self, hour: 'str | int') -> bool:
        """Выбрать час; некорректный выбор игнорируется."""
        number = _to_int(hour)
        if number is None or not 0 <= number <= 23:
            return False
        self.hours = f'{number:02d}'
        self._update()
        return True

    def select_minute(self, minute: 'str | int') -> bool:
        """Выбрать минуты; шаг списка здесь не проверяется."""
        number = _to_int(minute)
        if number is None or not 0 <= number <= 59:
            return False
        self.minutes = f'{number:02d}'
        self._update()
        return True

    def clear(self) -> None:
        self.hours = ''
        self.minutes = ''
        self._update()

    # ------------------------------------------------------------------
    # Ввод с клавиатуры по сегментам
    # ------------------------------------------------------------------

    def type_hours(self, raw: str) -> bool:
        """
        Набор часов.

        Returns:
            True, когда часы набраны полностью и фокус пора
            переводить на минуты
        """
        digits = only_digits(raw or '')[:2]
        if digits and int(digits) > 23:
            digits = '23'
        self.hours = digits
        self._update()
        return len(digits) == 2

    def type_minutes(self, raw: str) -> None:
        digits = only_digits(raw or '')[:2]
        if digits and int(digits) > 59:
            digits = '59'
        self.minutes = digits
        self._update()

    def step_hours(self, delta: int) -> None:
        current = int(self.hours or '0')
        self.hours = f'{(current + delta) % 24:02d}'
        self._update()

    def step_minutes(self, delta: int) -> None:
        current = int(self.minutes or '0')
        self.minutes = f'{(current + delta) % 60:02d}'
        self._update()

    def blur(self) -> None:
        """Дополнить одиночные цифры нулём слева."""
        changed = False
        if len(self.hours) == 1:
            self.hours = self.hours.zfill(2)
            changed = True
        if len(self.minutes) == 1:
            self.minutes = self.minutes.zfill(2)
            changed = True
        if changed:
            self._update()

    # ------------------------------------------------------------------
    # Синхронизация с хостом
    # ------------------------------------------------------------------

    def receive(self, value: Any) -> bool:
        """
        Принять внешнее значение; True, если выбор изменился.

        Хост передаёт значение при каждой перерисовке. Повтор того же
        значения не трогает незавершённый выбор пользователя, а новое
        значение (в том числе сброс формы в '') заменяет обе колонки.
        """
        hours, minutes = self._split(value)
        incoming = f'{hours}:{minutes}' if hours else ''
        if incoming == self.last_external:
            return False
        self.last_external = incoming
        if (hours, minutes) == (self.hours, self.minutes):
            return False
        self.hours, self.minutes = hours, minutes
        logger.debug('Time picker: external value applied %r', incoming)
        return True

    # ------------------------------------------------------------------
    # Открытие списка
    # ------------------------------------------------------------------

    def scroll_targets(self) -> tuple[Optional[str], Optional[str]]:
        """Пункты списка, которые нужно прокрутить в зону видимости."""
        hour = self.hours.zfill(2) if self.hours else None
        minute = None
        if self.minutes:
            number = int(self.minutes)
            minute = f'{number - number % self.minute_step:02d}'
        return hour, minute

    def open(self, schedule: Scheduler, scroll: ScrollCallback) -> None:
        """
        Открыть список и отложенно прокрутить его к выбранному времени.

        Args:
            schedule: Планировщик (delay, callback), например loop.call_later
            scroll: Получает (час, минуты) для прокрутки
        """
        self.close()
        self.is_open = True

        def _scroll() -> None:
            self._pending = None
            if self.is_open:
                scroll(self.scroll_targets())

        self._pending = schedule(0, _scroll)

    def close(self) -> None:
        """Закрыть список и отменить отложенную прокрутку."""
        self.is_open = False
        pending, self._pending = self._pending, None
        if pending is not None and hasattr(pending, 'cancel'):
            pending.cancel()
            logger.debug('Pending time picker scroll cancelled')

    unmount = close


def _to_int(value: 'str | int') -> Optional[int]:
    if isinstance(value, int):
        return value
    digits = only_digits(str(value))
    if not digits or digits != str(value).strip():
        return None
    return int(digits)
