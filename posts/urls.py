"""URL configuration for the posts app."""

from django.urls import path

from . import views

app_name = 'posts'

urlpatterns = [
    # Listing (GET) and creation (POST)
    path('', views.PostListView.as_view(), name='list'),
    # Blank creation form
    path('new', views.PostNewView.as_view(), name='new'),
    # Edit form (GET) and update (POST)
    path('<int:pk>', views.PostEditView.as_view(), name='edit'),
    path('delete/<int:pk>', views.PostDeleteView.as_view(), name='delete'),
]
