"""
Post and Category models for topman_blog.
"""
from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils import timezone

from ..conf import blog_settings


class Category(models.Model):
    """
    Category for organizing posts.

    Shared by many posts; a category with posts cannot be deleted.
    """

    name = models.CharField(
        max_length=blog_settings.CATEGORY_NAME_MAX_LENGTH,
        unique=True,
    )
    slug = models.SlugField(max_length=100, unique=True)
    description = models.CharField(
        max_length=blog_settings.CATEGORY_DESCRIPTION_MAX_LENGTH,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def get_absolute_url(self):
        return reverse("topman_blog:category_detail", kwargs={"id_or_slug": self.slug})

    @property
    def post_count(self):
        """Return count of published posts in this category."""
        return self.posts.filter(is_published=True).count()


def get_upload_path(instance, filename):
    """Generate upload path for featured images."""
    return timezone.now().strftime(blog_settings.FEATURED_IMAGE_UPLOAD_PATH) + filename


class Post(models.Model):
    """
    Blog post / article.

    The slug is derived from the title by the service layer
    (see ``topman_blog.text.slugify_title``) and must be unique per author;
    different authors may share a slug.
    """

    # Content
    title = models.CharField(max_length=blog_settings.TITLE_MAX_LENGTH)
    slug = models.SlugField(max_length=255, blank=True, db_index=True)
    content = models.TextField()
    excerpt = models.CharField(
        max_length=blog_settings.EXCERPT_MAX_LENGTH,
        blank=True,
    )
    featured_image = models.ImageField(upload_to=get_upload_path, blank=True)

    # Author - uses Django's AUTH_USER_MODEL
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_posts",
    )

    # Taxonomy
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="posts",
    )
    tags = models.JSONField(default=list, blank=True)

    # Status
    is_published = models.BooleanField(default=False)

    # Engagement stats
    view_count = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["slug", "author"],
                name="topman_blog_unique_slug_per_author",
            ),
        ]
        indexes = [
            models.Index(fields=["category", "-created_at"], name="topman_blog_post_cat_created"),
            models.Index(fields=["author", "-created_at"], name="topman_blog_post_auth_created"),
        ]

    def __str__(self):
        return self.title

    def get_absolute_url(self):
        if self.slug:
            return reverse("topman_blog:post_detail", kwargs={"id_or_slug": self.slug})
        return reverse("topman_blog:post_detail", kwargs={"id_or_slug": self.pk})

    @property
    def featured_image_url(self):
        """URL of the uploaded image, or the configured placeholder name."""
        if self.featured_image:
            return self.featured_image.url
        return blog_settings.DEFAULT_FEATURED_IMAGE

    def increment_view_count(self):
        """Increment view count atomically and refresh the in-memory value."""
        Post.objects.filter(pk=self.pk).update(view_count=models.F("view_count") + 1)
        self.refresh_from_db(fields=["view_count"])
