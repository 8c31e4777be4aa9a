"""
Shared fixtures for topman_blog tests.
"""
import pytest
from django.contrib.auth import get_user_model
from django.test import Client

from topman_blog.models import Category, Comment, Post

User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="testpass123",
    )


@pytest.fixture
def other_user(db):
    """A second, unrelated user."""
    return User.objects.create_user(
        username="other",
        email="other@example.com",
        password="otherpass123",
    )


@pytest.fixture
def staff_user(db):
    """A user with the admin role."""
    return User.objects.create_user(
        username="editor",
        email="editor@example.com",
        password="editorpass123",
        is_staff=True,
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(
        name="Test Category",
        slug="test-category",
    )


@pytest.fixture
def post(db, user, category):
    """Create a test post."""
    return Post.objects.create(
        title="Test Post",
        slug="test-post",
        content="This is a test post body.",
        author=user,
        category=category,
        is_published=True,
    )


@pytest.fixture
def comment(db, post, other_user):
    """A comment on the test post."""
    return Comment.objects.create(post=post, author=other_user, content="Great post!")


@pytest.fixture
def user_client(user):
    """Client logged in as the post author."""
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def other_client(other_user):
    client = Client()
    client.force_login(other_user)
    return client


@pytest.fixture
def staff_client(staff_user):
    client = Client()
    client.force_login(staff_user)
    return client
