"""
Django Settings for FreelanceHub

All environment-dependent values are read with django-environ from the
process environment or a ``.env`` file at the repository root.

Usage:
    DJANGO_SETTINGS_MODULE=freelancehub.settings
"""

from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, ['localhost', '127.0.0.1']),
    MEMBERSHIP_ENFORCE_BIDS=(bool, True),
)
environ.Env.read_env(BASE_DIR / '.env')

# =============================================================================
# CORE
# =============================================================================

DEBUG = env('DEBUG')
SECRET_KEY = env('SECRET_KEY', default='django-insecure-freelancehub-dev-key')
ALLOWED_HOSTS = env('ALLOWED_HOSTS')

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third party
    'rest_framework',
    'django_filters',
    'drf_spectacular',

    # Local apps
    'core',
    'projects',
    'applications',
    'notifications',
    'memberships',
    'dashboard',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
]

ROOT_URLCONF = 'freelancehub.urls'
WSGI_APPLICATION = 'freelancehub.wsgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

# =============================================================================
# DATABASE
# =============================================================================

DATABASES = {
    'default': env.db('DATABASE_URL', default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# =============================================================================
# INTERNATIONALIZATION
# =============================================================================

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# =============================================================================
# STATIC & MEDIA FILES
# =============================================================================

STATIC_URL = '/static/'
STATIC_ROOT = env('STATIC_ROOT', default=str(BASE_DIR / 'staticfiles'))

MEDIA_URL = '/media/'
MEDIA_ROOT = env('MEDIA_ROOT', default=str(BASE_DIR / 'media'))

# Application attachments; never served by a URL route
PRIVATE_MEDIA_ROOT = env('PRIVATE_MEDIA_ROOT', default=str(BASE_DIR / 'private_media'))

# =============================================================================
# REST FRAMEWORK
# =============================================================================

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework.authentication.SessionAuthentication',
        'rest_framework.authentication.BasicAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticatedOrReadOnly',
    ],
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.MultiPartParser',
        'rest_framework.parsers.FormParser',
    ],
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.PageNumberPagination',
    'PAGE_SIZE': 20,
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'EXCEPTION_HANDLER': 'core.exceptions.marketplace_exception_handler',
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'FreelanceHub API',
    'DESCRIPTION': 'Projects, applications, engagement and notifications.',
    'VERSION': '1.0.0',
}

# =============================================================================
# CELERY
# =============================================================================

CELERY_BROKER_URL = env('CELERY_BROKER_URL', default='redis://127.0.0.1:6379/0')
CELERY_RESULT_BACKEND = env('CELERY_RESULT_BACKEND', default='redis://127.0.0.1:6379/1')
CELERY_TASK_ALWAYS_EAGER = env.bool('CELERY_TASK_ALWAYS_EAGER', default=False)

# =============================================================================
# MARKETPLACE
# =============================================================================

# Project feed pagination
FEED_DEFAULT_PAGE_SIZE = env.int('FEED_DEFAULT_PAGE_SIZE', default=10)
FEED_MAX_PAGE_SIZE = env.int('FEED_MAX_PAGE_SIZE', default=100)

# Attachments (relative to MEDIA_ROOT)
PROJECT_UPLOAD_DIR = env('PROJECT_UPLOAD_DIR', default='uploads/projects')
APPLICATION_UPLOAD_DIR = env('APPLICATION_UPLOAD_DIR', default='uploads/applications')
APPLICATION_MAX_ATTACHMENTS = env.int('APPLICATION_MAX_ATTACHMENTS', default=5)
APPLICATION_MAX_ATTACHMENT_SIZE = env.int(
    'APPLICATION_MAX_ATTACHMENT_SIZE', default=5 * 1024 * 1024
)

# Membership bid counter
MEMBERSHIP_ENFORCE_BIDS = env('MEMBERSHIP_ENFORCE_BIDS')

# Outbox dispatcher
OUTBOX_RETRY_GRACE_SECONDS = env.int('OUTBOX_RETRY_GRACE_SECONDS', default=60)

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = env('DJANGO_LOG_LEVEL', default='INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[{asctime}] [{levelname}] {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'level': LOG_LEVEL,
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'core': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'projects': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'applications': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'notifications': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'memberships': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
