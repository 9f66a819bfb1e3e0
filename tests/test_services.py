from datetime import datetime, timezone as dt_timezone
from unittest import mock

import pytest
from django.db import DatabaseError

from blog import post_types
from blog.models import Category, Post, PostStatus, Tag
from site_counts.block import HOUR_CLAUSES
from site_counts.services import (
    ABSENT,
    ContentTypeDescriptor,
    ContentTypeDirectory,
    CurrentPost,
    DateClause,
    FilterQuery,
    ObjectCache,
    PostQueryService,
)


def at(hour, minute=0):
    return datetime(2024, 5, 1, hour, minute, tzinfo=dt_timezone.utc)


@pytest.fixture
def foo():
    return Tag.objects.create(name="foo")


@pytest.fixture
def baz():
    return Category.objects.create(name="baz")


@pytest.fixture
def make_post(foo, baz):
    def _make(title, hour=12, status=PostStatus.PUBLISH, post_type="post", tagged=True, categorized=True):
        post = Post.objects.create(
            title=title, status=status, post_type=post_type, published_at=at(hour),
        )
        if tagged:
            post.tags.add(foo)
        if categorized:
            post.categories.add(baz)
        return post
    return _make


def _query(**kwargs):
    kwargs.setdefault("date_query", HOUR_CLAUSES)
    kwargs.setdefault("tag", "foo")
    kwargs.setdefault("category_name", "baz")
    kwargs.setdefault("posts_per_page", 6)
    return FilterQuery(**kwargs)


# ── content types ─────────────────────────────────────────────────────────────

@pytest.mark.django_db
def test_count_published_per_type():
    Post.objects.create(title="a", status=PostStatus.PUBLISH)
    Post.objects.create(title="b", status=PostStatus.PUBLISH)
    Post.objects.create(title="c", status=PostStatus.DRAFT)
    Post.objects.create(title="d", status=PostStatus.PUBLISH, post_type="page")

    directory = ContentTypeDirectory()

    assert directory.count_published("post") == 2
    assert directory.count_published("page") == 1
    assert directory.describe() == [
        ContentTypeDescriptor("post", "Posts", 2),
        ContentTypeDescriptor("page", "Pages", 1),
    ]


@pytest.mark.django_db
def test_private_post_types_are_not_listed():
    post_types.register_post_type("revision", "Revisions", public=False)
    try:
        names = [t.name for t in ContentTypeDirectory().list_public_content_types()]
    finally:
        post_types.unregister_post_type("revision")

    assert names == ["post", "page"]


# ── query ─────────────────────────────────────────────────────────────────────

@pytest.mark.django_db
def test_query_filters_by_tag_and_category(make_post):
    match = make_post("match")
    make_post("no tag", tagged=False)
    make_post("no category", categorized=False)

    result = PostQueryService().query(_query())

    assert not result.is_error
    assert result.found_posts == 1
    assert [p.id for p in result.posts] == [match.id]


@pytest.mark.django_db
def test_query_hour_clauses(make_post):
    early = make_post("early", hour=8)
    nine = make_post("nine", hour=9)
    noon = make_post("noon", hour=12)
    five = make_post("five", hour=17)
    late = make_post("late", hour=18)

    result = PostQueryService().query(_query())
    ids = {p.id for p in result.posts}

    assert ids == {nine.id, noon.id, five.id}
    assert early.id not in ids and late.id not in ids


@pytest.mark.django_db
def test_single_hour_clause_is_independent(make_post):
    make_post("early", hour=8)
    make_post("late", hour=18)

    only_lower = PostQueryService().query(_query(date_query=(DateClause(9, ">="),)))
    only_upper = PostQueryService().query(_query(date_query=(DateClause(17, "<="),)))

    assert [p.title for p in only_lower.posts] == ["late"]
    assert [p.title for p in only_upper.posts] == ["early"]


@pytest.mark.django_db
def test_query_any_status_excludes_trash_and_auto_draft(make_post):
    make_post("published")
    make_post("draft", status=PostStatus.DRAFT)
    make_post("private", status=PostStatus.PRIVATE)
    make_post("trash", status=PostStatus.TRASH)
    make_post("auto", status=PostStatus.AUTO_DRAFT)

    result = PostQueryService().query(_query())

    assert {p.title for p in result.posts} == {"published", "draft", "private"}


@pytest.mark.django_db
def test_query_post_types(make_post):
    post_types.register_post_type("product", "Products")
    try:
        make_post("post")
        make_post("page", post_type="page")
        make_post("product", post_type="product")

        result = PostQueryService().query(_query())
    finally:
        post_types.unregister_post_type("product")

    assert {p.title for p in result.posts} == {"post", "page"}


@pytest.mark.django_db
def test_query_page_size_and_found_count(make_post):
    for i in range(8):
        make_post(f"post {i}")

    result = PostQueryService().query(_query())

    assert result.found_posts == 8
    assert len(result.posts) == 6


@pytest.mark.django_db
def test_query_without_matches(make_post):
    make_post("other", tagged=False)

    result = PostQueryService().query(_query())

    assert result.found_posts == 0
    assert result.posts == []
    assert not result.is_error


@pytest.mark.django_db
def test_query_database_error_is_reported(make_post):
    make_post("match")

    with mock.patch("django.db.models.query.QuerySet.count", side_effect=DatabaseError("boom")):
        result = PostQueryService().query(_query())

    assert result.is_error
    assert result.posts == []


@pytest.mark.parametrize(
    "compare, expected",
    [("=", {12}), (">", {17}), (">=", {12, 17}), ("<", {8}), ("<=", {8, 12}), ("!=", {8, 17})],
)
@pytest.mark.django_db
def test_date_clause_operators(make_post, compare, expected):
    for hour in (8, 12, 17):
        make_post(f"h{hour}", hour=hour)

    result = PostQueryService().query(_query(date_query=(DateClause(12, compare),)))

    assert {p.published_at.hour for p in result.posts} == expected


def test_date_clause_rejects_unknown_operator():
    with pytest.raises(ValueError):
        DateClause(9, "~").as_q()


# ── cache ─────────────────────────────────────────────────────────────────────

def test_object_cache_miss_returns_absent(object_cache):
    assert object_cache.get("filtered_posts", "site_counts") is ABSENT


def test_object_cache_roundtrip_with_groups(object_cache):
    object_cache.set("filtered_posts", [1, 2], "site_counts", 300)

    assert object_cache.get("filtered_posts", "site_counts") == [1, 2]
    assert object_cache.get("filtered_posts", "other") is ABSENT
    assert object_cache.get("filtered_posts") is ABSENT


def test_object_cache_stores_falsy_values(object_cache):
    object_cache.set("empty", [], "site_counts", 300)

    assert object_cache.get("empty", "site_counts") == []


def test_object_cache_ttl_is_passed_to_backend():
    backend = mock.Mock()
    cache = ObjectCache(backend=backend)

    cache.set("k", "v", "g", 300)
    cache.set("k", "v", "g")

    assert backend.set.call_args_list == [
        mock.call("g:k", "v", timeout=300),
        mock.call("g:k", "v", timeout=None),
    ]


def test_object_cache_delete(object_cache):
    object_cache.set("k", 1, "g", 60)

    assert object_cache.delete("k", "g") is True
    assert object_cache.get("k", "g") is ABSENT


# ── context ───────────────────────────────────────────────────────────────────

def test_current_post_from_context():
    post = Post(pk=15, title="x")

    assert CurrentPost.from_context({"post": post}).current_post_id() == 15
    assert CurrentPost.from_context({"object": post}).current_post_id() == 15
    assert CurrentPost.from_context({}).current_post_id() is None
