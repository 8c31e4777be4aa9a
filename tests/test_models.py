"""
Tests for topman_blog models.
"""
import pytest
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from topman_blog.models import Category, Comment, Post, Reaction

User = get_user_model()


class TestCategory:
    """Tests for Category model."""

    def test_create_category(self, db):
        """Test creating a category."""
        cat = Category.objects.create(name="Politics", slug="politics")
        assert str(cat) == "Politics"
        assert cat.get_absolute_url() == "/api/categories/politics"

    def test_post_count_only_counts_published(self, db, category, post, user):
        """Test category post count property."""
        Post.objects.create(
            title="Draft",
            slug="draft",
            content="Not yet",
            author=user,
            category=category,
        )
        assert category.post_count == 1

    def test_category_with_posts_cannot_be_deleted(self, db, category, post):
        with pytest.raises(ProtectedError):
            category.delete()


class TestPost:
    """Tests for Post model."""

    def test_defaults(self, db, user, category):
        """Test creating a post."""
        post = Post.objects.create(
            title="Hello World",
            slug="hello-world",
            content="My first post!",
            author=user,
            category=category,
        )
        assert post.is_published is False
        assert post.view_count == 0
        assert post.tags == []
        assert post.featured_image_url == "default-post.jpg"

    def test_slug_unique_per_author(self, db, post):
        """Test the (slug, author) constraint."""
        with pytest.raises(IntegrityError), transaction.atomic():
            Post.objects.create(
                title="Test Post",
                slug=post.slug,
                content="Again",
                author=post.author,
                category=post.category,
            )

    def test_same_slug_for_different_authors(self, db, post, other_user):
        twin = Post.objects.create(
            title="Test Post",
            slug=post.slug,
            content="Mine too",
            author=other_user,
            category=post.category,
        )
        assert twin.slug == post.slug

    def test_increment_view_count(self, db, post):
        post.increment_view_count()
        post.increment_view_count()

        assert post.view_count == 2
        post.refresh_from_db()
        assert post.view_count == 2

    def test_newest_first(self, db, post, user, category):
        newer = Post.objects.create(
            title="Newer",
            slug="newer",
            content="Later",
            author=user,
            category=category,
        )
        assert list(Post.objects.all()) == [newer, post]

    def test_delete_cascades_to_comments(self, db, post, comment, user):
        Reaction.objects.create(comment=comment, user=user, emoji="👍")
        post.delete()

        assert Comment.objects.count() == 0
        assert Reaction.objects.count() == 0


class TestComment:
    """Tests for Comment model."""

    def test_create_comment(self, db, post, user):
        """Test creating a comment."""
        comment = Comment.objects.create(post=post, author=user, content="Great post!")
        assert comment.content == "Great post!"
        assert comment.author_display == "testuser"

    def test_anonymous_author(self, db, post):
        comment = Comment.objects.create(post=post, author=None, content="Who am I?")
        assert comment.author_display == "Anonymous"
        assert "Anonymous" in str(comment)

    def test_comments_keep_insertion_order(self, db, post, user):
        first = Comment.objects.create(post=post, author=user, content="one")
        second = Comment.objects.create(post=post, author=user, content="two")
        assert list(post.comments.all()) == [first, second]


class TestReaction:
    """Tests for Reaction model."""

    def test_toggle_reaction_create(self, db, comment, user):
        """Test creating a reaction."""
        reaction, action = Reaction.toggle(comment, user, "👍")

        assert action == "created"
        assert reaction.emoji == "👍"
        assert reaction.reaction_type == "LIKE"
        assert comment.reactions.count() == 1

    def test_toggle_reaction_remove(self, db, comment, user):
        """Test removing a reaction by toggling the same emoji."""
        Reaction.toggle(comment, user, "👍")
        reaction, action = Reaction.toggle(comment, user, "👍")

        assert action == "removed"
        assert reaction is None
        assert comment.reactions.count() == 0

    def test_toggle_reaction_change(self, db, comment, user):
        """Test switching to another emoji."""
        Reaction.toggle(comment, user, "👍")
        reaction, action = Reaction.toggle(comment, user, "❤️")

        assert action == "changed"
        assert reaction.emoji == "❤️"
        assert comment.reactions.count() == 1

    def test_other_users_untouched(self, db, comment, user, other_user):
        Reaction.toggle(comment, other_user, "😂")
        Reaction.toggle(comment, user, "👍")
        Reaction.toggle(comment, user, "👍")

        assert list(comment.reactions.values_list("user_id", "emoji")) == [
            (other_user.pk, "😂"),
        ]

    def test_one_reaction_per_user_constraint(self, db, comment, user):
        Reaction.objects.create(comment=comment, user=user, emoji="👍")
        with pytest.raises(IntegrityError), transaction.atomic():
            Reaction.objects.create(comment=comment, user=user, emoji="😮")
