"""
Tests for the posts app.

Covers:
- Post model (ordering, defaults, str)
- Listing and pagination (page slicing, num_pages, parameter clamping)
- Create, edit, update and delete flows, including missing ids
- Not-found fallback for unknown paths and unsupported verbs
- Server error page
- Configuration helpers, the seed_posts and serve commands, the admin
"""

import math
import os
from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.exceptions import ImproperlyConfigured
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import Client, RequestFactory, SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from blogsite import settings as blog_settings

from .models import Post
from .views import paginate_posts, parse_positive_int, server_error

User = get_user_model()

# Use plain static files storage in tests; WhiteNoise's manifest storage
# requires `collectstatic` to have been run.
_TEST_STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}


def _make_posts(count):
    """Create `count` numbered posts and return them in id order."""
    return [
        Post.objects.create(title=f'Title {n}', text=f'Text {n}')
        for n in range(1, count + 1)
    ]


# ---------------------------------------------------------------------------
# Model tests
# ---------------------------------------------------------------------------

class PostModelTest(TestCase):
    """Test Post model behaviour."""

    def test_ids_assigned_by_database(self):
        """Each new post gets a fresh, increasing id."""
        first, second = _make_posts(2)
        self.assertIsNotNone(first.pk)
        self.assertGreater(second.pk, first.pk)

    def test_default_ordering_by_id(self):
        """Posts come back in ascending id order."""
        posts = _make_posts(3)
        self.assertEqual(list(Post.objects.all()), posts)

    def test_fields_default_to_empty_string(self):
        """title and text default to '' like the table columns."""
        post = Post.objects.create()
        self.assertEqual(post.title, '')
        self.assertEqual(post.text, '')

    def test_str(self):
        """__str__ returns the title, or a numbered fallback when blank."""
        self.assertEqual(str(Post(title='Hello')), 'Hello')
        post = Post.objects.create()
        self.assertEqual(str(post), f'Post #{post.pk}')

    def test_get_absolute_url(self):
        """get_absolute_url points at the edit page."""
        post = Post.objects.create(title='T')
        self.assertEqual(post.get_absolute_url(), f'/{post.pk}')


# ---------------------------------------------------------------------------
# Pagination helpers
# ---------------------------------------------------------------------------

class ParsePositiveIntTest(SimpleTestCase):
    """Test the query-parameter parser."""

    def test_valid_number(self):
        self.assertEqual(parse_positive_int('3', 1), 3)

    def test_missing_returns_default(self):
        self.assertEqual(parse_positive_int(None, 5), 5)

    def test_unparsable_returns_default(self):
        self.assertEqual(parse_positive_int('abc', 5), 5)
        self.assertEqual(parse_positive_int('2.5', 5), 5)

    def test_zero_and_negative_return_default(self):
        self.assertEqual(parse_positive_int('0', 1), 1)
        self.assertEqual(parse_positive_int('-4', 1), 1)


class PaginatePostsTest(TestCase):
    """Test paginate_posts slicing and page counts."""

    def test_pages_slice_in_id_order(self):
        """Every page holds at most posts_per_page posts, ascending by id."""
        posts = _make_posts(12)
        for per_page in (1, 3, 5, 7, 12, 20):
            num_pages = math.ceil(len(posts) / per_page)
            for page in range(1, num_pages + 1):
                page_posts, reported = paginate_posts(page, per_page)
                self.assertEqual(reported, num_pages)
                self.assertLessEqual(len(page_posts), per_page)
                offset = (page - 1) * per_page
                self.assertEqual(page_posts, posts[offset:offset + per_page])

    def test_empty_table(self):
        """No posts means zero pages and an empty first page."""
        self.assertEqual(paginate_posts(1, 5), ([], 0))

    def test_page_past_end_is_empty(self):
        """A page beyond the last one is empty, not an error."""
        _make_posts(3)
        self.assertEqual(paginate_posts(4, 1), ([], 3))


# ---------------------------------------------------------------------------
# View tests
# ---------------------------------------------------------------------------

@override_settings(STORAGES=_TEST_STORAGES)
class PostListViewTest(TestCase):
    """Test the listing view."""

    def setUp(self):
        """Create sample data and test client."""
        self.client = Client()
        self.posts = _make_posts(12)

    def test_list_ok(self):
        """Listing returns 200 with the index template."""
        response = self.client.get(reverse('posts:list'))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'posts/index.html')

    def test_defaults(self):
        """Default is page 1 with 5 posts per page."""
        response = self.client.get(reverse('posts:list'))
        self.assertEqual(response.context['page'], 1)
        self.assertEqual(response.context['posts_per_page'], 5)
        self.assertEqual(response.context['num_pages'], 3)
        self.assertEqual(response.context['posts'], self.posts[:5])

    def test_explicit_page_and_size(self):
        """page and posts_per_page select the matching slice."""
        response = self.client.get(reverse('posts:list'), {'page': 2, 'posts_per_page': 4})
        self.assertEqual(response.context['posts'], self.posts[4:8])
        self.assertEqual(response.context['num_pages'], 3)

    def test_last_page_is_partial(self):
        """The last page holds the remainder."""
        response = self.client.get(reverse('posts:list'), {'page': 3})
        self.assertEqual(response.context['posts'], self.posts[10:])

    def test_page_zero_clamped_to_one(self):
        """page=0 and negative pages fall back to page 1."""
        for value in ('0', '-1'):
            response = self.client.get(reverse('posts:list'), {'page': value})
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.context['page'], 1)

    def test_unparsable_params_use_defaults(self):
        """Garbage params fall back to defaults without raising an error."""
        response = self.client.get(reverse('posts:list'), {'page': 'x', 'posts_per_page': 'y'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['page'], 1)
        self.assertEqual(response.context['posts_per_page'], 5)

    @override_settings(BLOG_MAX_POSTS_PER_PAGE=10)
    def test_posts_per_page_capped(self):
        """posts_per_page above the configured maximum is clamped."""
        response = self.client.get(reverse('posts:list'), {'posts_per_page': 1000})
        self.assertEqual(response.context['posts_per_page'], 10)
        self.assertEqual(len(response.context['posts']), 10)

    def test_page_past_end_renders_empty(self):
        """A page past the end renders an empty listing."""
        response = self.client.get(reverse('posts:list'), {'page': 99})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['posts'], [])
        self.assertEqual(response.context['page'], 99)

    def test_titles_rendered(self):
        """Post titles appear in the HTML."""
        response = self.client.get(reverse('posts:list'))
        self.assertContains(response, 'Title 1')
        self.assertNotContains(response, 'Title 6')


@override_settings(STORAGES=_TEST_STORAGES)
class PostCreateViewTest(TestCase):
    """Test the new form and creation."""

    def setUp(self):
        self.client = Client()

    def test_new_form_ok(self):
        """GET /new renders a blank form."""
        response = self.client.get(reverse('posts:new'))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'posts/new.html')
        self.assertEqual(response['Content-Type'], 'text/html; charset=utf-8')

    def test_create_redirects_to_list(self):
        """POST / inserts a post and redirects to /."""
        response = self.client.post(reverse('posts:list'), {'title': 'T', 'text': 'X'})
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response['Location'], '/')
        post = Post.objects.get()
        self.assertEqual((post.title, post.text), ('T', 'X'))

    def test_created_post_listed(self):
        """A created post shows up on page 1 with a new id."""
        self.client.post(reverse('posts:list'), {'title': 'T', 'text': 'X'})
        response = self.client.get(reverse('posts:list'))
        listed = [(p.title, p.text) for p in response.context['posts']]
        self.assertIn(('T', 'X'), listed)
        self.assertIsNotNone(response.context['posts'][0].pk)

    def test_supplied_id_ignored(self):
        """An id in the form body never reaches the database."""
        self.client.post(reverse('posts:list'), {'id': 999, 'title': 'T', 'text': 'X'})
        self.assertFalse(Post.objects.filter(pk=999).exists())
        self.assertEqual(Post.objects.count(), 1)

    def test_flash_message_after_create(self):
        """The next page shows a success message."""
        response = self.client.post(
            reverse('posts:list'), {'title': 'T', 'text': 'X'}, follow=True,
        )
        self.assertContains(response, 'Post successfully added.')

    def test_too_long_title_rejected(self):
        """Oversized input re-renders the form with 400 and writes nothing."""
        response = self.client.post(reverse('posts:list'), {'title': 'a' * 256, 'text': 'X'})
        self.assertEqual(response.status_code, 400)
        self.assertTemplateUsed(response, 'posts/new.html')
        self.assertEqual(Post.objects.count(), 0)


@override_settings(STORAGES=_TEST_STORAGES)
class PostEditViewTest(TestCase):
    """Test edit and update."""

    def setUp(self):
        self.client = Client()
        self.posts = _make_posts(3)
        self.post = self.posts[2]

    def test_edit_form_ok(self):
        """GET /<id> renders the edit form for that post."""
        response = self.client.get(reverse('posts:edit', kwargs={'pk': self.post.pk}))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['post'], self.post)
        self.assertContains(response, 'Title 3')

    def test_edit_missing_returns_404(self):
        """GET for an unknown id renders the not-found page."""
        response = self.client.get('/424242')
        self.assertEqual(response.status_code, 404)
        self.assertTemplateUsed(response, 'error/404.html')

    def test_update_keeps_id(self):
        """POST /<id> replaces title and text and keeps the id."""
        url = reverse('posts:edit', kwargs={'pk': self.post.pk})
        response = self.client.post(url, {'title': 'New', 'text': 'Body'})
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response['Location'], '/')

        self.post.refresh_from_db()
        self.assertEqual(self.post.title, 'New')
        self.assertEqual(self.post.text, 'Body')
        self.assertEqual(Post.objects.count(), 3)

    def test_update_id_from_path_not_body(self):
        """An id in the form body cannot redirect the update to another row."""
        other = self.posts[0]
        url = reverse('posts:edit', kwargs={'pk': self.post.pk})
        self.client.post(url, {'id': other.pk, 'title': 'New', 'text': 'Body'})
        other.refresh_from_db()
        self.assertEqual(other.title, 'Title 1')

    def test_update_missing_returns_404(self):
        """Updating an unknown id is a 404 and creates nothing."""
        response = self.client.post('/424242', {'title': 'New', 'text': 'Body'})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(Post.objects.count(), 3)

    def test_update_with_same_values_is_idempotent(self):
        """create -> edit -> update with identical values leaves the listing unchanged."""
        before = self.client.get(reverse('posts:list')).context['posts']
        edit = self.client.get(reverse('posts:edit', kwargs={'pk': self.post.pk}))
        form = edit.context['form']
        self.client.post(
            reverse('posts:edit', kwargs={'pk': self.post.pk}),
            {'title': form.initial['title'], 'text': form.initial['text']},
        )
        after = self.client.get(reverse('posts:list')).context['posts']
        self.assertEqual(
            [(p.pk, p.title, p.text) for p in before],
            [(p.pk, p.title, p.text) for p in after],
        )

    def test_invalid_update_returns_400(self):
        """Oversized text re-renders the edit form and leaves the row alone."""
        url = reverse('posts:edit', kwargs={'pk': self.post.pk})
        response = self.client.post(url, {'title': 'New', 'text': 'x' * 300})
        self.assertEqual(response.status_code, 400)
        self.post.refresh_from_db()
        self.assertEqual(self.post.title, 'Title 3')


@override_settings(STORAGES=_TEST_STORAGES)
class PostDeleteViewTest(TestCase):
    """Test deletion."""

    def setUp(self):
        self.client = Client()
        self.post = Post.objects.create(title='Doomed', text='Soon gone')

    def test_delete_redirects_and_removes(self):
        """POST /delete/<id> removes the row and redirects to /."""
        response = self.client.post(reverse('posts:delete', kwargs={'pk': self.post.pk}))
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response['Location'], '/')
        self.assertFalse(Post.objects.filter(pk=self.post.pk).exists())

    def test_fetch_after_delete_is_404(self):
        """The edit page of a deleted post is a 404."""
        self.client.post(reverse('posts:delete', kwargs={'pk': self.post.pk}))
        response = self.client.get(reverse('posts:edit', kwargs={'pk': self.post.pk}))
        self.assertEqual(response.status_code, 404)

    def test_delete_missing_returns_404(self):
        """Deleting twice is a 404 the second time."""
        url = reverse('posts:delete', kwargs={'pk': self.post.pk})
        self.client.post(url)
        response = self.client.post(url)
        self.assertEqual(response.status_code, 404)

    def test_get_on_delete_is_not_found(self):
        """GET is not a delete verb; the row survives."""
        response = self.client.get(reverse('posts:delete', kwargs={'pk': self.post.pk}))
        self.assertEqual(response.status_code, 404)
        self.assertTrue(Post.objects.filter(pk=self.post.pk).exists())


@override_settings(STORAGES=_TEST_STORAGES)
class NotFoundTest(TestCase):
    """Test the not-found fallback."""

    def setUp(self):
        self.client = Client()

    def test_unknown_path_echoes_uri(self):
        """An unknown path renders the 404 template with the path in it."""
        response = self.client.get('/does-not-exist')
        self.assertEqual(response.status_code, 404)
        self.assertTemplateUsed(response, 'error/404.html')
        self.assertContains(response, '/does-not-exist', status_code=404)

    def test_unsupported_verb_on_known_path(self):
        """A verb a route does not handle renders the same 404 page."""
        response = self.client.put(reverse('posts:list'))
        self.assertEqual(response.status_code, 404)
        self.assertTemplateUsed(response, 'error/404.html')

    def test_options_on_known_paths_is_not_found(self):
        """OPTIONS is not a blog verb on any route."""
        post = Post.objects.create(title='T', text='X')
        for url in (
            reverse('posts:list'),
            reverse('posts:new'),
            reverse('posts:edit', kwargs={'pk': post.pk}),
            reverse('posts:delete', kwargs={'pk': post.pk}),
        ):
            response = self.client.options(url)
            self.assertEqual(response.status_code, 404)
            self.assertTemplateUsed(response, 'error/404.html')
            self.assertContains(response, url, status_code=404)

    def test_post_to_new_is_not_found(self):
        """/new only renders the form; POST there is not a route."""
        response = self.client.post(reverse('posts:new'), {'title': 'T', 'text': 'X'})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(Post.objects.count(), 0)

    def test_non_numeric_id_is_not_found(self):
        """Ids must be integers."""
        response = self.client.get('/abc')
        self.assertEqual(response.status_code, 404)


@override_settings(STORAGES=_TEST_STORAGES)
class ServerErrorTest(TestCase):
    """Test the 500 handler."""

    def test_server_error_page(self):
        """server_error renders a generic page with status 500."""
        request = RequestFactory().get('/')
        response = server_error(request)
        self.assertEqual(response.status_code, 500)
        self.assertIn(b'Internal Server Error', response.content)

    def test_store_error_becomes_500(self):
        """A database failure during listing surfaces as a 500 page."""
        client = Client(raise_request_exception=False)
        with mock.patch('posts.views.paginate_posts', side_effect=RuntimeError('db down')):
            response = client.get(reverse('posts:list'))
        self.assertEqual(response.status_code, 500)
        self.assertIn(b'Internal Server Error', response.content)


# ---------------------------------------------------------------------------
# Configuration and commands
# ---------------------------------------------------------------------------

class ConfigurationTest(SimpleTestCase):
    """Test the environment helpers used by settings."""

    def test_missing_required_variable_aborts(self):
        """A missing required variable raises ImproperlyConfigured."""
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaisesMessage(ImproperlyConfigured, 'DATABASE_URL is not set'):
                blog_settings.get_env_var('DATABASE_URL')

    def test_required_variable_returned(self):
        with mock.patch.dict(os.environ, {'HOST': '0.0.0.0'}):
            self.assertEqual(blog_settings.get_env_var('HOST'), '0.0.0.0')

    def test_int_variable_default(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(blog_settings.get_int_env_var('BLOG_POSTS_PER_PAGE', 5), 5)

    def test_int_variable_invalid(self):
        with mock.patch.dict(os.environ, {'BLOG_POSTS_PER_PAGE': 'many'}):
            with self.assertRaises(ImproperlyConfigured):
                blog_settings.get_int_env_var('BLOG_POSTS_PER_PAGE', 5)

    def test_int_variable_below_minimum(self):
        """Zero or negative page sizes abort settings loading."""
        for raw in ('0', '-3'):
            with mock.patch.dict(os.environ, {'BLOG_MAX_POSTS_PER_PAGE': raw}):
                with self.assertRaisesMessage(ImproperlyConfigured, 'must be at least 1'):
                    blog_settings.get_int_env_var('BLOG_MAX_POSTS_PER_PAGE', 100, minimum=1)

    def test_int_variable_at_minimum(self):
        with mock.patch.dict(os.environ, {'BLOG_POSTS_PER_PAGE': '1'}):
            self.assertEqual(blog_settings.get_int_env_var('BLOG_POSTS_PER_PAGE', 5, minimum=1), 1)

    def test_debug_off_by_default(self):
        """Without DJANGO_DEBUG the site runs with DEBUG off, so its error pages render."""
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertFalse(blog_settings.get_bool_env_var('DJANGO_DEBUG'))

    def test_debug_opt_in(self):
        for raw in ('True', 'true', '1', 'yes'):
            with mock.patch.dict(os.environ, {'DJANGO_DEBUG': raw}):
                self.assertTrue(blog_settings.get_bool_env_var('DJANGO_DEBUG'))
        with mock.patch.dict(os.environ, {'DJANGO_DEBUG': 'False'}):
            self.assertFalse(blog_settings.get_bool_env_var('DJANGO_DEBUG'))

    def test_example_env_keeps_debug_off(self):
        """.env.example ships with debug mode off."""
        example = blog_settings.BASE_DIR / '.env.example'
        lines = example.read_text().splitlines()
        self.assertIn('DJANGO_DEBUG=False', lines)


class SeedPostsCommandTest(TestCase):
    """Test the seed_posts management command."""

    def test_seeds_requested_count(self):
        call_command('seed_posts', count=7, stdout=StringIO())
        self.assertEqual(Post.objects.count(), 7)

    def test_rerun_skips_existing(self):
        """Running twice does not duplicate posts."""
        call_command('seed_posts', count=4, stdout=StringIO())
        out = StringIO()
        call_command('seed_posts', count=6, stdout=out)
        self.assertEqual(Post.objects.count(), 6)
        self.assertIn('Created 2 posts, skipped 4 existing.', out.getvalue())

    def test_invalid_count(self):
        with self.assertRaises(CommandError):
            call_command('seed_posts', count=0, stdout=StringIO())


class ServeCommandTest(SimpleTestCase):
    """Test the serve management command."""

    @override_settings(BIND_HOST='0.0.0.0', BIND_PORT=9000)
    def test_defaults_to_configured_bind(self):
        """Without an address argument, serve binds HOST:PORT from settings."""
        with mock.patch('django.core.management.commands.runserver.Command.handle') as handle:
            call_command('serve', stdout=StringIO())
        self.assertEqual(handle.call_args.kwargs['addrport'], '0.0.0.0:9000')

    @override_settings(BIND_HOST='0.0.0.0', BIND_PORT=9000)
    def test_explicit_address_wins(self):
        with mock.patch('django.core.management.commands.runserver.Command.handle') as handle:
            call_command('serve', '127.0.0.1:7000', stdout=StringIO())
        self.assertEqual(handle.call_args.kwargs['addrport'], '127.0.0.1:7000')


@override_settings(STORAGES=_TEST_STORAGES)
class PostAdminTest(TestCase):
    """Test the admin registration."""

    def setUp(self):
        self.client = Client()
        self.admin = User.objects.create_superuser(
            username='admin', email='admin@example.com', password='testpass123',
        )
        self.client.force_login(self.admin)
        self.post = Post.objects.create(title='Admin visible', text='Body')

    def test_changelist_lists_posts(self):
        response = self.client.get(reverse('admin:posts_post_changelist'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Admin visible')

    def test_search_by_text(self):
        response = self.client.get(reverse('admin:posts_post_changelist'), {'q': 'Body'})
        self.assertContains(response, 'Admin visible')
