"""
====================================================================
ЦЕНТРАЛИЗОВАННАЯ ОБРАБОТКА ОШИБОК
====================================================================
Унифицированные паттерны обработки ошибок для AJAX-представлений.
====================================================================
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from django.http import HttpRequest, HttpResponse, JsonResponse

from .exceptions import AppError

logger = logging.getLogger(__name__)

ViewFunc = TypeVar('ViewFunc', bound=Callable[..., HttpResponse])


def handle_ajax_exceptions(view_func: ViewFunc) -> ViewFunc:
    """
    Декоратор для обработки исключений в AJAX views.

    AppError превращается в ответ 400 с сообщением и кодом,
    любое другое исключение логируется и даёт ответ 500.

    Args:
        view_func: Функция представления

    Returns:
        Обёрнутая функция
    """
    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        try:
            return view_func(request, *args, **kwargs)
        except AppError as e:
            return JsonResponse({
                'success': False,
                'error': e.message,
                'code': e.code
            }, status=400)
        except Exception as e:
            log_view_error(view_func.__name__, e, request)
            return JsonResponse({
                'success': False,
                'error': 'Произошла ошибка при обработке запроса'
            }, status=500)
    return wrapper  # type: ignore


def log_view_error(
    view_name: str,
    error: Exception,
    request: Optional[HttpRequest] = None,
    extra: Optional[dict[str, Any]] = None
) -> None:
    """
    Логировать ошибку в view с контекстом.

    Args:
        view_name: Название view
        error: Исключение
        request: HTTP запрос (опционально)
        extra: Дополнительные данные для лога
    """
    log_extra = extra or {}

    if request:
        log_extra.update({
            'view': view_name,
            'path': request.path,
            'method': request.method,
        })

    logger.error(
        f"Error in {view_name}: {error}",
        exc_info=True,
        extra=log_extra
    )
