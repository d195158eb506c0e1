"""
Settings used by the test suite.

Supplies the required environment with an in-memory SQLite database
before loading the real settings.
"""

import os

os.environ.setdefault('DATABASE_URL', 'sqlite://:memory:')
os.environ.setdefault('HOST', '127.0.0.1')
os.environ.setdefault('PORT', '8000')
os.environ['DJANGO_DEBUG'] = 'False'

from blogsite.settings import *  # noqa: E402,F401,F403

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
