"""
Настройка Django для запуска тестов через pytest.

Через manage.py test этот файл не используется.
"""

import os

import django
from django.test.utils import setup_test_environment

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'academy.settings')
django.setup()
setup_test_environment()
