"""Django admin configuration for the posts app."""

from django.contrib import admin

from .models import Post


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    """Admin for blog posts: id, title and body only."""

    list_display = ('id', 'title', 'text')
    list_display_links = ('id', 'title')
    search_fields = ('title', 'text')
    ordering = ('id',)
    list_per_page = 25
