"""
Read-side queries for posts and categories.
"""
import math
from dataclasses import dataclass
from typing import Optional

from django.db.models import Prefetch, Q, QuerySet

from .conf import blog_settings
from .models import Category, Comment, Post

# Largest value a BigAutoField primary key can hold
MAX_PK = 2**63 - 1

# page and limit are clamped so the OFFSET stays within a signed 64-bit integer
MAX_PAGE_VALUE = 2**31 - 1


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PostPage:
    posts: list
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)


def _positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number <= 0:
        return default
    return min(number, MAX_PAGE_VALUE)


def parse_pagination(page=None, limit=None) -> Pagination:
    """
    Query-string page/limit.

    Missing or non-positive values fall back to defaults; oversized values
    are clamped to ``MAX_PAGE_VALUE``.
    """
    limit = _positive_int(limit, blog_settings.POSTS_PER_PAGE)
    max_limit = blog_settings.MAX_POSTS_PER_PAGE
    if max_limit:
        limit = min(limit, max_limit)
    return Pagination(page=_positive_int(page, 1), limit=limit)


def get_post_queryset() -> QuerySet:
    """Posts with author, category, comments and reactions loaded. N+1 safe."""
    return Post.objects.select_related("author", "category").prefetch_related(
        Prefetch(
            "comments",
            queryset=Comment.objects.select_related("author").prefetch_related("reactions__user"),
        )
    )


def search_filter(query: str) -> Q:
    """Case-insensitive substring match on title, content or excerpt."""
    return (
        Q(title__icontains=query)
        | Q(content__icontains=query)
        | Q(excerpt__icontains=query)
    )


def build_post_filter(category_slug: Optional[str] = None, query: Optional[str] = None) -> Q:
    """
    Predicate for the post list.

    An unknown category slug adds no condition, so the list is unfiltered.
    """
    predicate = Q()
    if category_slug:
        category = Category.objects.filter(slug=category_slug).first()
        if category is not None:
            predicate &= Q(category=category)
    if query:
        predicate &= search_filter(query)
    return predicate


def list_posts(category_slug=None, query=None, page=None, limit=None) -> PostPage:
    pagination = parse_pagination(page, limit)
    qs = get_post_queryset().filter(build_post_filter(category_slug, query))
    total = qs.count()
    posts = list(qs[pagination.skip:pagination.skip + pagination.limit])
    return PostPage(posts=posts, total=total, page=pagination.page, limit=pagination.limit)


def search_posts(query: str) -> list:
    return list(
        get_post_queryset().filter(search_filter(query))[:blog_settings.SEARCH_RESULTS_LIMIT]
    )
def parse_pk(value) -> Optional[int]:
    """Primary key from a path or body value; None when not a storable id."""
    value = str(value)
    if not value.isdecimal():
        return None
    pk = int(value)
    return pk if pk <= MAX_PK else None


def get_post(id_or_slug) -> Optional[Post]:
    """
    Look up a post by primary key or slug. None if absent.

    Digits are tried as a primary key first; slugs are not unique across
    authors, so the newest match wins.
    """
    qs = get_post_queryset()
    pk = parse_pk(id_or_slug)
    if pk is not None:
        post = qs.filter(pk=pk).first()
        if post is not None:
            return post
    return qs.filter(slug=str(id_or_slug)).first()


def get_post_by_id(post_id) -> Optional[Post]:
    pk = parse_pk(post_id)
    if pk is None:
        return None
    return get_post_queryset().filter(pk=pk).first()


def list_categories() -> QuerySet:
    return Category.objects.all()


def get_category(id_or_slug) -> Optional[Category]:
    pk = parse_pk(id_or_slug)
    if pk is not None:
        category = Category.objects.filter(pk=pk).first()
        if category is not None:
            return category
    return Category.objects.filter(slug=str(id_or_slug)).first()
