"""
Management command: serve

Starts the development server bound to the HOST and PORT environment
variables instead of runserver's 127.0.0.1:8000 default.

Usage:
    python manage.py serve
    python manage.py serve 0.0.0.0:9000   # explicit address still wins
"""

from django.conf import settings
from django.core.management.commands.runserver import Command as RunserverCommand


class Command(RunserverCommand):
    help = 'Starts the web server on the configured HOST:PORT.'

    def handle(self, *args, **options):
        if not options.get('addrport'):
            options['addrport'] = f'{settings.BIND_HOST}:{settings.BIND_PORT}'
        self.stdout.write(f"start server at {options['addrport']}")
        super().handle(*args, **options)
