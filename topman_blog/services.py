"""
Write-side operations for posts, comments, reactions and categories.

Every mutation goes through these services so that slug generation,
uniqueness and authorization are applied the same way for every caller.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError
from django.utils.text import slugify

from .conf import blog_settings
from .exceptions import Conflict, NotFound, ValidationError
from .models import Category, Comment, Post, Reaction
from .permissions import ensure_admin, ensure_can_modify_post
from .selectors import get_category, get_post_by_id, parse_pk
from .text import slugify_title

logger = logging.getLogger(__name__)

# Wire field name -> model field name
POST_FIELDS = {
    "title": "title",
    "content": "content",
    "excerpt": "excerpt",
    "tags": "tags",
    "isPublished": "is_published",
    "featuredImage": "featured_image",
}


class PostService:
    """Post, comment and reaction writes on behalf of ``user``."""

    def __init__(self, user):
        self.user = user

    def create_post(self, data: dict) -> Post:
        post = Post(author=self.user, category=self._resolve_category(data["category"]))
        self._assign(post, data)
        post.slug = slugify_title(post.title)
        self._ensure_unique_slug(post.slug, post.author_id)

        self._save(post)
        logger.info("Post %s created by user %s (slug=%r)", post.pk, self.user.pk, post.slug)
        return self._reload(post.pk)

    def update_post(self, post_id, data: dict) -> Post:
        post = self._get_post(post_id)
        ensure_can_modify_post(self.user, post, "update")

        if data.get("category"):
            post.category = self._resolve_category(data["category"])
        title_changed = "title" in data and data["title"] != post.title
        self._assign(post, data)
        if title_changed:
            post.slug = slugify_title(post.title)
            self._ensure_unique_slug(post.slug, post.author_id, exclude_pk=post.pk)

        self._save(post)
        logger.info("Post %s updated by user %s", post.pk, self.user.pk)
        return self._reload(post.pk)

    def delete_post(self, post_id) -> None:
        post = self._get_post(post_id)
        ensure_can_modify_post(self.user, post, "delete")
        post.delete()
        logger.info("Post %s deleted by user %s", post_id, self.user.pk)

    def add_comment(self, post_id, content: str) -> Post:
        post = self._get_post(post_id)
        Comment.objects.create(post=post, author=self.user, content=content)
        return self._reload(post.pk)

    def react_to_comment(self, post_id, comment_id, emoji: str):
        """
        Apply the reaction rules to one comment.

        The comment row is locked for the read-modify-write so concurrent
        reactions on the same comment cannot overwrite each other.

        Returns (post, action).
        """
        if emoji not in blog_settings.REACTION_EMOJIS:
            if emoji:
                message = "Emoji must be one of: " + " ".join(blog_settings.REACTION_EMOJIS)
            else:
                message = "Please provide an emoji"
            raise ValidationError(errors=[{"field": "emoji", "message": message}])
        post = self._get_post(post_id)
        with transaction.atomic():
            comment = (
                Comment.objects.select_for_update()
                .filter(post=post, pk=parse_pk(comment_id))
                .first()
            )
            if comment is None:
                raise NotFound("Comment not found")
            _reaction, action = Reaction.toggle(comment, self.user, emoji)
        return self._reload(post.pk), action

    def _assign(self, post, data):
        for wire_name, field_name in POST_FIELDS.items():
            if wire_name not in data or data[wire_name] is None:
                continue
            setattr(post, field_name, data[wire_name])

    def _resolve_category(self, id_or_slug):
        category = get_category(id_or_slug)
        if category is None:
            raise NotFound("Category not found")
        return category

    def _ensure_unique_slug(self, slug, author_id, exclude_pk=None):
        qs = Post.objects.filter(slug=slug, author_id=author_id)
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        if qs.exists():
            logger.warning("Duplicate slug %r for author %s", slug, author_id)
            raise Conflict()

    def _save(self, post):
        try:
            with transaction.atomic():
                post.save()
        except IntegrityError as exc:
            # Lost a race with a concurrent write of the same slug
            raise Conflict() from exc

    def _get_post(self, post_id):
        post = get_post_by_id(post_id)
        if post is None:
            raise NotFound("Post not found")
        return post

    def _reload(self, pk):
        return get_post_by_id(pk)


class CategoryService:
    """Category writes; admin only."""

    def __init__(self, user):
        self.user = user

    def create_category(self, data: dict) -> Category:
        ensure_admin(self.user)
        category = Category(name=data["name"], description=data.get("description") or "")
        category.slug = self._slug_for(category.name)
        self._save(category)
        logger.info("Category %s created by user %s", category.pk, self.user.pk)
        return category

    def update_category(self, id_or_slug, data: dict) -> Category:
        ensure_admin(self.user)
        category = self._get_category(id_or_slug)
        if data.get("name"):
            category.name = data["name"]
            category.slug = self._slug_for(category.name)
        if "description" in data:
            category.description = data["description"] or ""
        self._save(category)
        return category

    def delete_category(self, id_or_slug) -> None:
        ensure_admin(self.user)
        category = self._get_category(id_or_slug)
        try:
            category.delete()
        except ProtectedError as exc:
            raise Conflict("Cannot delete a category that still has posts") from exc
        logger.info("Category %s deleted by user %s", category.name, self.user.pk)

    def _slug_for(self, name):
        slug = slugify(name)
        if not slug:
            raise ValidationError(
                errors=[{"field": "name", "message": "Category name must contain letters or digits"}]
            )
        return slug

    def _save(self, category):
        try:
            with transaction.atomic():
                category.save()
        except IntegrityError as exc:
            raise Conflict("A category with this name already exists") from exc

    def _get_category(self, id_or_slug):
        category = get_category(id_or_slug)
        if category is None:
            raise NotFound("Category not found")
        return category
