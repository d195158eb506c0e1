"""App configuration for the posts app."""

from django.apps import AppConfig


class PostsConfig(AppConfig):
    """Configuration for the blog posts app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'posts'
    verbose_name = 'Blog Posts'
