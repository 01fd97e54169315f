"""
====================================================================
AJAX-ПРЕДСТАВЛЕНИЯ ПОЛЕЙ С МАСКОЙ
====================================================================
Браузер отправляет текст поля после каждой правки и получает
отформатированную строку, новую позицию курсора, валидность и
каноническое значение.

Основные представления:
- field_edit: обработка правки (POST)
- field_format: отображение канонического значения (GET)

Формат ответа:
    {
        "success": true,
        "kind": "date",
        "display": "12/03/2024",
        "caret": 10,
        "value": "2024-03-12",
        "validity": "valid",
        "is_error": false
    }
====================================================================
"""

from __future__ import annotations

import logging
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET, require_POST

from ..core.error_handling import handle_ajax_exceptions
from ..core.helpers import parse_int
from ..services.engine import FieldState, MaskedField
from ..services.kinds import FieldKind, get_kind

logger = logging.getLogger(__name__)


def _state_payload(kind: FieldKind, state: FieldState) -> dict[str, Any]:
    return {
        'success': True,
        'kind': kind.name,
        'display': state.display,
        'caret': state.caret,
        'value': state.value,
        'validity': state.validity.value,
        'is_error': state.is_error,
    }


@require_POST
@handle_ajax_exceptions
def field_edit(request: HttpRequest, kind: str) -> JsonResponse:
    """
    Обработать правку поля.

    POST-параметры:
        text: Текст поля после правки
        caret: Позиция курсора в text (по умолчанию - конец)
        value: Текущее каноническое значение на стороне хоста

    Returns:
        JSON с новым состоянием поля
    """
    field_kind = get_kind(kind)
    text = request.POST.get('text', '')
    caret = parse_int(request.POST.get('caret'), default=len(text))

    field = MaskedField(field_kind, value=request.POST.get('value', ''))
    state = field.edit(text, caret)

    logger.debug('%s edit %r -> %r (%s)', kind, text, state.display, state.validity.value)
    return JsonResponse(_state_payload(field_kind, state))


@require_GET
@handle_ajax_exceptions
def field_format(request: HttpRequest, kind: str) -> JsonResponse:
    """
    Отформатировать каноническое значение для вывода в поле.

    GET-параметры:
        value: Каноническое значение (2024-03-12, 901234567, 1500.5, 09:30)
    """
    field_kind = get_kind(kind)
    field = MaskedField(field_kind, value=request.GET.get('value', ''))
    return JsonResponse(_state_payload(field_kind, field.state))
