"""
URL configuration for topman_blog.

Include in your project urls.py:

    path('api/', include('topman_blog.urls')),
"""
from django.urls import path

from . import views

app_name = "topman_blog"

urlpatterns = [
    # Posts
    path("posts", views.PostListView.as_view(), name="post_list"),
    path("posts/search", views.PostSearchView.as_view(), name="post_search"),
    path("posts/<str:id_or_slug>", views.PostDetailView.as_view(), name="post_detail"),

    # Interactions
    path("posts/<int:pk>/comments", views.CommentCreateView.as_view(), name="comment_create"),
    path(
        "posts/<int:pk>/comments/<int:comment_pk>/reactions",
        views.ReactionToggleView.as_view(),
        name="reaction_toggle",
    ),

    # Categories
    path("categories", views.CategoryListView.as_view(), name="category_list"),
    path("categories/<str:id_or_slug>", views.CategoryDetailView.as_view(), name="category_detail"),

    # Accounts
    path("auth/register", views.RegisterView.as_view(), name="register"),
    path("auth/login", views.LoginView.as_view(), name="login"),
    path("auth/me", views.MeView.as_view(), name="me"),
]
