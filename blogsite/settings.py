"""
Django settings for Blogsite, a minimal paginated blog.

DATABASE_URL, HOST and PORT are required. A `.env` file in the project
root is loaded first, so local setups can keep them there.
"""

import os
from pathlib import Path

import dj_database_url
from django.core.exceptions import ImproperlyConfigured
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')


def get_env_var(name):
    """Return a required environment variable or abort settings loading."""
    value = os.environ.get(name)
    if not value:
        raise ImproperlyConfigured(f'{name} is not set in .env file')
    return value


def get_int_env_var(name, default, minimum=None):
    """Return an optional integer environment variable, no smaller than minimum."""
    raw = os.environ.get(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ImproperlyConfigured(f'{name} must be an integer, got {raw!r}')
    if minimum is not None and value < minimum:
        raise ImproperlyConfigured(f'{name} must be at least {minimum}, got {value}')
    return value


def get_bool_env_var(name, default=False):
    """Return an optional true/false environment variable."""
    return os.environ.get(name, str(default)).lower() in ('true', '1', 'yes')


SECRET_KEY = os.environ.get(
    'DJANGO_SECRET_KEY',
    'django-insecure-change-me-in-production'
)

# Off unless asked for: the blog's own 404 and 500 pages only render with DEBUG off.
DEBUG = get_bool_env_var('DJANGO_DEBUG')

# ---------------------------------------------------------------------------
# Server binding
# ---------------------------------------------------------------------------
# Used by `manage.py serve`. HOST is always an allowed host.
BIND_HOST = get_env_var('HOST')
try:
    BIND_PORT = int(get_env_var('PORT'))
except ValueError:
    raise ImproperlyConfigured(f"PORT must be an integer, got {os.environ['PORT']!r}")

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')
    if host.strip()
]
if BIND_HOST not in ALLOWED_HOSTS:
    ALLOWED_HOSTS.append(BIND_HOST)

CSRF_TRUSTED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get('CSRF_TRUSTED_ORIGINS', '').split(',')
    if origin.strip()
]

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    # Blogsite apps
    'posts',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

# django-debug-toolbar only in development
if DEBUG:
    INSTALLED_APPS.insert(0, 'debug_toolbar')
    MIDDLEWARE.insert(0, 'debug_toolbar.middleware.DebugToolbarMiddleware')
    INTERNAL_IPS = ['127.0.0.1']

ROOT_URLCONF = 'blogsite.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'blogsite.wsgi.application'

# Database: any URL dj-database-url understands (mysql://, postgres://, sqlite://)
DATABASES = {
    'default': dj_database_url.parse(
        get_env_var('DATABASE_URL'),
        conn_max_age=600,
    )
}

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# Static assets are served verbatim from ./static under /static/.
# WHITENOISE_USE_FINDERS lets WhiteNoise serve them without collectstatic.
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
STATICFILES_DIRS = [BASE_DIR / 'static']
STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage',
    },
}
WHITENOISE_USE_FINDERS = True
# Unhashed names are used until collectstatic has written a manifest.
WHITENOISE_MANIFEST_STRICT = False

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

MESSAGE_STORAGE = 'django.contrib.messages.storage.fallback.FallbackStorage'

# ---------------------------------------------------------------------------
# Blog
# ---------------------------------------------------------------------------
BLOG_POSTS_PER_PAGE = get_int_env_var('BLOG_POSTS_PER_PAGE', 5, minimum=1)
BLOG_MAX_POSTS_PER_PAGE = get_int_env_var('BLOG_MAX_POSTS_PER_PAGE', 100, minimum=1)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
# django.request logs every 404 and every unhandled 500 with its traceback.
# Set django.db.backends to DEBUG to see each SQL query.
LOG_LEVEL = os.environ.get('DJANGO_LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'django.request': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        'django.db.backends': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
        'posts': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
