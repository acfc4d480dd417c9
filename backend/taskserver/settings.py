"""
Django settings for the task list service.

Everything is driven by environment variables with development defaults:

- TASKS_FILE: path of the JSON file holding the task collection
- TASKS_PORT: default port for `manage.py runserver`
- TASKS_LOG_LEVEL: level of the console logger
- DJANGO_SECRET_KEY / DJANGO_DEBUG / DJANGO_ALLOWED_HOSTS
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-task-list-service-dev-key')

DEBUG = os.getenv('DJANGO_DEBUG', 'true').lower() == 'true'

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,[::1]').split(',')
    if host.strip()
]

INSTALLED_APPS = [
    'rest_framework',
    'tasks',
]

MIDDLEWARE = []

ROOT_URLCONF = 'taskserver.urls'

WSGI_APPLICATION = 'taskserver.wsgi.application'

# Tasks live in a flat JSON file, no database is used.
DATABASES = {}

USE_TZ = True

# =============================================================================
# Task storage
# =============================================================================

TASKS_FILE = Path(os.getenv('TASKS_FILE', BASE_DIR / 'task.json'))

TASKS_PORT = int(os.getenv('TASKS_PORT', '3000'))

# =============================================================================
# REST framework
# =============================================================================

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PARSER_CLASSES': ['rest_framework.parsers.JSONParser'],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [],
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'tasks.exceptions.task_exception_handler',
}

# =============================================================================
# Logging
# =============================================================================

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'loggers': {
        'tasks': {
            'handlers': ['console'],
            'level': os.getenv('TASKS_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
