"""
Views for the blog.

Provides:
- PostListView: paginated listing (GET /) and creation (POST /)
- PostNewView: blank creation form (GET /new)
- PostEditView: edit form (GET /<id>) and update (POST /<id>)
- PostDeleteView: deletion (POST /delete/<id>)
- not_found / server_error: site-wide 404 and 500 handlers

Every handler does at most one store call and one render or redirect.
A verb a view does not implement renders the not-found page, the same as
an unknown path.
"""

import logging

from django.conf import settings
from django.contrib import messages
from django.core.paginator import EmptyPage, Paginator
from django.http import Http404, HttpResponseServerError
from django.shortcuts import get_object_or_404, redirect, render
from django.template import TemplateDoesNotExist, loader
from django.views import View

from .forms import PostForm
from .models import Post

logger = logging.getLogger(__name__)


def parse_positive_int(value, default):
    """Return value as an int >= 1, or default when missing, unparsable or < 1."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def paginate_posts(page, posts_per_page):
    """
    Return (posts, num_pages) for a 1-based page of posts ordered by id.

    num_pages is ceil(total / posts_per_page), so 0 for an empty table.
    A page past the end yields an empty list rather than an error.
    """
    paginator = Paginator(
        Post.objects.order_by('id'),
        posts_per_page,
        allow_empty_first_page=False,
    )
    try:
        posts = list(paginator.page(page).object_list)
    except EmptyPage:
        posts = []
    return posts, paginator.num_pages


class NotFoundFallbackMixin:
    """Treat an unsupported verb on a known path like an unknown path."""

    def http_method_not_allowed(self, request, *args, **kwargs):
        raise Http404(f'{request.method} is not supported on {request.path}')

    # View.options() would otherwise answer 200 with an Allow header
    options = http_method_not_allowed


class PostListView(NotFoundFallbackMixin, View):
    """
    The collection endpoint.

    GET lists one page of posts. Query params:
        page            1-based page number, default 1
        posts_per_page  page size, default settings.BLOG_POSTS_PER_PAGE,
                        capped at settings.BLOG_MAX_POSTS_PER_PAGE
    Invalid values fall back to the defaults.

    POST creates a post from the form body and redirects to the listing.
    """

    def get(self, request):
        page = parse_positive_int(request.GET.get('page'), 1)
        posts_per_page = min(
            parse_positive_int(request.GET.get('posts_per_page'), settings.BLOG_POSTS_PER_PAGE),
            settings.BLOG_MAX_POSTS_PER_PAGE,
        )
        posts, num_pages = paginate_posts(page, posts_per_page)
        logger.debug('Listing page %s of %s (%s per page)', page, num_pages, posts_per_page)

        return render(request, 'posts/index.html', {
            'posts': posts,
            'page': page,
            'posts_per_page': posts_per_page,
            'num_pages': num_pages,
        })

    def post(self, request):
        form = PostForm(request.POST)
        if not form.is_valid():
            return render(request, 'posts/new.html', {'form': form}, status=400)

        post = form.save()
        logger.info('Created post %s', post.pk)
        messages.success(request, 'Post successfully added.')
        return redirect('posts:list')


class PostNewView(NotFoundFallbackMixin, View):
    """Blank form for a new post."""

    def get(self, request):
        return render(request, 'posts/new.html', {'form': PostForm()})


class PostEditView(NotFoundFallbackMixin, View):
    """Edit form and full-replace update for one post; the id comes from the path."""

    def get(self, request, pk):
        post = get_object_or_404(Post, pk=pk)
        return render(request, 'posts/edit.html', {
            'post': post,
            'form': PostForm(instance=post),
        })

    def post(self, request, pk):
        post = get_object_or_404(Post, pk=pk)
        form = PostForm(request.POST, instance=post)
        if not form.is_valid():
            return render(request, 'posts/edit.html', {'post': post, 'form': form}, status=400)

        form.save()
        logger.info('Updated post %s', pk)
        messages.success(request, 'Post successfully updated.')
        return redirect('posts:list')


class PostDeleteView(NotFoundFallbackMixin, View):
    """Delete one post."""

    def post(self, request, pk):
        post = get_object_or_404(Post, pk=pk)
        post.delete()
        logger.info('Deleted post %s', pk)
        messages.success(request, 'Post successfully deleted.')
        return redirect('posts:list')


def not_found(request, exception=None):
    """Render the not-found page, echoing the requested path."""
    return render(request, 'error/404.html', {'uri': request.path}, status=404)


def server_error(request):
    """
    Render a generic internal-error page.

    Rendered without a RequestContext: no context processors, no database.
    """
    try:
        template = loader.get_template('error/500.html')
    except TemplateDoesNotExist:
        return HttpResponseServerError('<h1>Internal Server Error</h1>', content_type='text/html')
    return HttpResponseServerError(template.render())
