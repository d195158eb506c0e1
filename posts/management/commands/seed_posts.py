"""
Management command to seed sample blog posts.

Run this on any environment to get a listing with a few pages:
    python manage.py seed_posts
    python manage.py seed_posts --count 30
"""

import logging

from django.core.management.base import BaseCommand, CommandError

from posts.models import Post

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Seed numbered sample posts into the database."""

    help = 'Seeds sample blog posts. Safe to re-run: skips titles that already exist.'

    def add_arguments(self, parser):
        """Register command-line arguments."""
        parser.add_argument(
            '--count',
            type=int,
            default=12,
            help='Number of sample posts to seed (default: 12).',
        )

    def handle(self, *args, **options):
        """Create the sample posts that do not exist yet."""
        count = options['count']
        if count < 1:
            raise CommandError('--count must be at least 1.')

        titles = [f'Sample post {n}' for n in range(1, count + 1)]
        existing = set(Post.objects.filter(title__in=titles).values_list('title', flat=True))

        new_posts = [
            Post(title=title, text=f'This is the body of {title.lower()}.')
            for title in titles
            if title not in existing
        ]
        Post.objects.bulk_create(new_posts)
        logger.info('Seeded %s posts, skipped %s', len(new_posts), len(existing))

        self.stdout.write(self.style.SUCCESS(
            f'Done. Created {len(new_posts)} posts, skipped {len(existing)} existing.'
        ))
