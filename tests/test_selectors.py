"""
Tests for post listing, search and lookup.
"""
import pytest

from topman_blog.models import Category, Post
from topman_blog.selectors import (
    MAX_PAGE_VALUE,
    get_category,
    get_post,
    list_posts,
    parse_pagination,
    parse_pk,
    search_posts,
)


@pytest.fixture
def many_posts(db, user, category):
    return [
        Post.objects.create(
            title=f"Post {i}",
            slug=f"post-{i}",
            content="Filler",
            author=user,
            category=category,
        )
        for i in range(25)
    ]


class TestParsePagination:
    def test_defaults(self):
        pagination = parse_pagination()
        assert (pagination.page, pagination.limit, pagination.skip) == (1, 10, 0)

    def test_skip(self):
        assert parse_pagination("3", "10").skip == 20

    @pytest.mark.parametrize("value", ["abc", "0", "-2", ""])
    def test_invalid_values_fall_back(self, value):
        pagination = parse_pagination(value, value)
        assert (pagination.page, pagination.limit) == (1, 10)

    def test_limit_unbounded_by_default(self):
        assert parse_pagination(1, 5000).limit == 5000

    def test_oversized_values_are_clamped(self):
        pagination = parse_pagination("99999999999999999999", "99999999999999999999")
        assert (pagination.page, pagination.limit) == (MAX_PAGE_VALUE, MAX_PAGE_VALUE)

    def test_optional_cap(self, settings):
        settings.TOPMAN_BLOG = {"MAX_POSTS_PER_PAGE": 50}
        assert parse_pagination(1, 5000).limit == 50


class TestListPosts:
    def test_last_page(self, many_posts):
        page = list_posts(page=3, limit=10)

        assert len(page.posts) == 5
        assert page.total == 25
        assert page.pages == 3
        assert page.page == 3

    def test_newest_first(self, many_posts):
        page = list_posts(page=1, limit=3)
        assert [p.title for p in page.posts] == ["Post 24", "Post 23", "Post 22"]

    def test_page_past_end_is_empty(self, many_posts):
        page = list_posts(page=9, limit=10)
        assert page.posts == []
        assert page.pages == 3

    def test_oversized_page_is_empty(self, many_posts):
        page = list_posts(page="99999999999999999999", limit=10)
        assert page.posts == []
        assert page.total == 25

    def test_no_posts(self, db):
        page = list_posts()
        assert (page.total, page.pages) == (0, 0)

    def test_category_filter(self, many_posts, user):
        sport = Category.objects.create(name="Sport", slug="sport")
        match = Post.objects.create(
            title="Derby", slug="derby", content="Goal", author=user, category=sport
        )

        page = list_posts(category_slug="sport")

        assert page.posts == [match]
        assert page.total == 1

    def test_unknown_category_is_ignored(self, many_posts):
        assert list_posts(category_slug="nope").total == 25

    def test_query_filter(self, many_posts):
        page = list_posts(query="post 1")
        assert {p.title for p in page.posts} == {f"Post {i}" for i in [1] + list(range(10, 20))}


class TestSearchPosts:
    def test_case_insensitive_content_match(self, db, user, category):
        lagos = Post.objects.create(
            title="City life",
            slug="city-life",
            content="Weekend markets in Lagos are packed.",
            author=user,
            category=category,
        )
        Post.objects.create(
            title="Abuja",
            slug="abuja",
            content="Quiet streets.",
            excerpt="Capital",
            author=user,
            category=category,
        )

        assert search_posts("lagos") == [lagos]

    def test_matches_title_and_excerpt(self, db, user, category):
        by_title = Post.objects.create(
            title="Jollof wars", slug="jollof-wars", content="x", author=user, category=category
        )
        by_excerpt = Post.objects.create(
            title="Food", slug="food", content="y", excerpt="The JOLLOF debate",
            author=user, category=category,
        )

        assert set(search_posts("jollof")) == {by_title, by_excerpt}

    def test_capped_at_twenty(self, many_posts):
        assert len(search_posts("post")) == 20


class TestLookup:
    def test_get_post_by_pk_and_slug(self, post):
        assert get_post(post.pk) == post
        assert get_post(str(post.pk)) == post
        assert get_post(post.slug) == post

    def test_get_post_missing(self, db):
        assert get_post("missing") is None
        assert get_post("12345") is None

    def test_numeric_slug(self, db, user, category):
        post = Post.objects.create(
            title="2024", slug="2024", content="Year review", author=user, category=category
        )
        assert get_post("2024") == post

    def test_get_category(self, category):
        assert get_category(category.pk) == category
        assert get_category(category.slug) == category
        assert get_category("nothing") is None

    @pytest.mark.parametrize("value", ["²", str(2**70)])
    def test_values_that_are_not_storable_ids(self, post, category, value):
        assert get_post(value) is None
        assert get_category(value) is None

    def test_parse_pk(self):
        assert parse_pk("42") == 42
        assert parse_pk(7) == 7
        assert parse_pk("²") is None
        assert parse_pk("-1") is None
        assert parse_pk(str(2**64)) is None
