# =============================================================================
# ФАЙЛ: masking/views/__init__.py
# =============================================================================
# НАЗНАЧЕНИЕ:
#   Инициализационный файл для пакета представлений (views).
#   Экспортирует view-функции для использования в urls.py
#
# СТРУКТУРА ПРЕДСТАВЛЕНИЙ:
#   fields.py - AJAX-форматирование полей с маской
#
# ПРОЕКТ: Legacy Academy - административная панель учебного центра
# =============================================================================

"""
ПРЕДСТАВЛЕНИЯ (VIEWS) - модульная структура
"""

from .fields import field_edit, field_format

__all__ = [
    'field_edit',
    'field_format',
]
