"""
====================================================================
ДВИЖОК ПОЛЯ С МАСКОЙ
====================================================================
MaskedField - состояние одного смонтированного поля ввода и все
переходы между состояниями:

- edit(): локальная правка (нажатие клавиши, вставка)
- blur(): потеря фокуса
- receive(): внешнее значение от хоста (синхронизация)
- reset(): явная очистка

Цепочка локальной правки:
    сырой текст -> extract -> format -> перенос курсора
    -> классификация -> decode -> on_change (только полные значения)

Синхронизация с хостом хранит два значения: последнее известное
внешнее значение и локальную правку. Внешнее значение применяется
только если оно действительно изменилось и не совпадает с тем, что
уже набрано (или набирается) в поле.
====================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Optional

from .cursor import translate_caret
from .kinds import FieldKind, get_kind
from .validity import Validity

logger = logging.getLogger(__name__)

EMPTY_VALUE = ''

ChangeCallback = Callable[[Any], None]


@dataclass(frozen=True)
class FieldState:
    """
    Снимок состояния поля.

    Attributes:
        display: Текст в поле ввода
        canonical: Каноническое значение или None, пока его нет
        caret: Позиция курсора, 0 <= caret <= len(display)
        validity: Классификация текущего текста
    """

    display: str = ''
    canonical: Any = None
    caret: int = 0
    validity: Validity = Validity.EMPTY

    @property
    def value(self) -> Any:
        """Значение для хоста: каноническое или пустая строка."""
        return EMPTY_VALUE if self.canonical is None else self.canonical

    @property
    def is_error(self) -> bool:
        return self.validity.is_error


class MaskedField:
    """
    Поле ввода с живым форматированием.

    Usage:
        field = MaskedField('date', value='2024-03-12', on_change=save)
        field.edit('12/03/20245', caret=11)
        field.state.display  # '12/03/2024'
    """

    def __init__(
        self,
        kind: 'str | FieldKind',
        value: Any = EMPTY_VALUE,
        on_change: Optional[ChangeCallback] = None,
    ):
        self.kind = get_kind(kind)
        self.on_change = on_change
        self.last_external = self.kind.render(value)
        self.state = self._build(self.kind.encode(value))

    def __repr__(self) -> str:
        return f'<MaskedField {self.kind.name} {self.state.display!r}>'

    # ------------------------------------------------------------------
    # Состояние
    # ------------------------------------------------------------------

    @property
    def display(self) -> str:
        return self.state.display

    @property
    def caret(self) -> int:
        return self.state.caret

    @property
    def validity(self) -> Validity:
        return self.state.validity

    @property
    def value(self) -> Any:
        return self.state.value

    def numeric_value(self) -> Decimal:
        """Числовое значение поля суммы (0 для пустого поля)."""
        canonical = self.state.canonical
        if isinstance(canonical, Decimal):
            return canonical
        return Decimal('0')

    def _build(self, extracted: str, caret: Optional[int] = None) -> FieldState:
        display = self.kind.format(extracted)
        validity = self.kind.classify(extracted)
        canonical = self.kind.decode(extracted) if validity.has_value else None
        if caret is None:
            caret = len(display)
        return FieldState(
            display=display,
            canonical=canonical,
            caret=max(0, min(caret, len(display))),
            validity=validity,
        )

    def _emit(self) -> None:
        state = self.state
        if state.validity not in (Validity.VALID, Validity.EMPTY):
            return
        # Хост получит это значение и, скорее всего, вернёт его обратно
        self.last_external = self.kind.render(state.value)
        if self.on_change is not None:
            self.on_change(state.value)

    # ------------------------------------------------------------------
    # Переходы
    # ------------------------------------------------------------------

    def edit(self, raw_text: str, caret: Optional[int] = None) -> FieldState:
        """
        Обработать локальную правку.

        Args:
            raw_text: Текст поля после правки, до форматирования
            caret: Позиция курсора в raw_text (по умолчанию - конец)

        Returns:
            Новое состояние поля
        """
        raw_text = raw_text or ''
        if caret is None:
            caret = len(raw_text)

        extracted = self.kind.extract(raw_text)
        display = self.kind.format(extracted)
        new_caret = translate_caret(self.kind, raw_text, caret, display)

        self.state = self._build(extracted, new_caret)
        self._emit()
        return self.state

    def blur(self) -> FieldState:
        """Нормализовать значение при потере фокуса."""
        extracted = self.kind.extract(self.state.display)
        normalized = self.kind.blur(extracted)
        if normalized == extracted:
            return self.state

        previous = self.state
        self.state = self._build(normalized)
        if self.state.canonical != previous.canonical or self.state.validity is not previous.validity:
            self._emit()
        return self.state

    def receive(self, value: Any) -> bool:
        """
        Принять внешнее значение от хоста.

        Returns:
            True, если отображаемый текст был заменён
        """
        rendered = self.kind.render(value)
        if rendered == self.last_external:
            return False
        self.last_external = rendered

        current = self.state
        if rendered == current.display:
            return False

        extracted = self.kind.encode(value)
        incoming = None
        if self.kind.classify(extracted) is Validity.VALID:
            incoming = self.kind.decode(extracted)

        if incoming is not None and incoming == current.canonical:
            logger.debug('%s: external value already shown, keeping %r', self.kind.name, current.display)
            return False

        local = self.kind.extract(current.display)
        if current.validity is Validity.PARTIAL and extracted.startswith(local):
            logger.debug('%s: external value completes %r, keeping local edit', self.kind.name, current.display)
            return False

        self.state = self._build(extracted)
        logger.debug('%s: external value applied, display %r', self.kind.name, self.state.display)
        return True

    def reset(self) -> FieldState:
        """Очистить поле по команде хоста (без вызова on_change)."""
        self.last_external = EMPTY_VALUE
        self.state = self._build('')
        return self.state
