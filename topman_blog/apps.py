"""Django app configuration for topman_blog."""
from django.apps import AppConfig


class TopmanBlogConfig(AppConfig):
    """Configuration for the blog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "topman_blog"
    verbose_name = "Topman Blog"
