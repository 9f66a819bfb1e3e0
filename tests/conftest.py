from collections import namedtuple

import pytest
from django.core.cache import caches

from blog.post_types import PostType
from site_counts.block import Block
from site_counts.services import ABSENT, ObjectCache, QueryResult

Item = namedtuple("Item", ["id"])


class FakeDirectory:
    def __init__(self, types=()):
        # [(slug, label, published_count), ...]
        self.types = list(types)

    def list_public_content_types(self):
        return [PostType(slug, label) for slug, label, _ in self.types]

    def count_published(self, slug):
        return next(count for s, _, count in self.types if s == slug)


class FakeQueryService:
    def __init__(self, result=None):
        self.result = result or QueryResult()
        self.calls = []

    def query(self, query):
        self.calls.append(query)
        return self.result


class SpyCache:
    """Dict-backed object cache that records every write."""

    def __init__(self):
        self.store = {}
        self.sets = []

    def get(self, key, group=""):
        return self.store.get((group, key), ABSENT)

    def set(self, key, value, group="", expire=0):
        self.sets.append((group, key, value, expire))
        self.store[(group, key)] = value
        return True

    def delete(self, key, group=""):
        return self.store.pop((group, key), None) is not None


@pytest.fixture(autouse=True)
def _clear_caches():
    caches["default"].clear()
    yield
    caches["default"].clear()


@pytest.fixture
def directory():
    return FakeDirectory([("post", "Posts", 3), ("page", "Pages", 1)])


@pytest.fixture
def query_service():
    return FakeQueryService()


@pytest.fixture
def spy_cache():
    return SpyCache()


@pytest.fixture
def make_block(directory, query_service, spy_cache):
    def _make(**kwargs):
        kwargs.setdefault("directory", directory)
        kwargs.setdefault("query_service", query_service)
        kwargs.setdefault("cache", spy_cache)
        return Block(**kwargs)
    return _make


@pytest.fixture
def object_cache():
    return ObjectCache(alias="default")
