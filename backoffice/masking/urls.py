"""
URL-МАРШРУТЫ ДЛЯ ПРИЛОЖЕНИЯ MASKING
"""

from django.urls import path

from .views import field_edit, field_format

app_name = 'masking'

urlpatterns = [
    # ============== ПОЛЯ С МАСКОЙ (AJAX) ==============
    path('fields/<str:kind>/edit/', field_edit, name='field_edit'),
    path('fields/<str:kind>/format/', field_format, name='field_format'),
]
