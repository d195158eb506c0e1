"""
Models for the blog.

A single entity: Post. Ids are assigned by the database on insert and
never taken from client input.
"""

from django.db import models
from django.urls import reverse


class Post(models.Model):
    """A blog post, listed oldest first."""

    title = models.CharField(max_length=255, blank=True, default='', db_index=True)
    text = models.CharField(max_length=255, blank=True, default='')

    class Meta:
        db_table = 'posts'
        ordering = ['id']

    def __str__(self):
        return self.title or f'Post #{self.pk}'

    def get_absolute_url(self):
        """Return the edit page URL for this post."""
        return reverse('posts:edit', kwargs={'pk': self.pk})
