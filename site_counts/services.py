# site_counts/services.py
"""
Host services the block talks to.

Everything here is a thin adapter over Django: the post-type registry and
the ORM for counts and queries, the cache framework for the object cache.
The block receives instances of these classes, so tests can swap in fakes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

import django_filters
from django.core.cache import caches
from django.db import DatabaseError
from django.db.models import Q

from blog import post_types
from blog.models import Post

logger = logging.getLogger(__name__)

# get() returns this when nothing is stored under the key
ABSENT = False

_MISSING = object()


# ──────────────────────────────────────────────────────────────────────────────
# Content types
# ──────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ContentTypeDescriptor:
    slug: str
    label: str
    published_count: int


class ContentTypeDirectory:
    def list_public_content_types(self) -> List[post_types.PostType]:
        return post_types.get_post_types(public=True)

    def count_published(self, slug: str) -> int:
        return Post.objects.published().of_type(slug).count()

    def describe(self) -> List[ContentTypeDescriptor]:
        return [
            ContentTypeDescriptor(t.name, t.label, self.count_published(t.name))
            for t in self.list_public_content_types()
        ]


# ──────────────────────────────────────────────────────────────────────────────
# Query
# ──────────────────────────────────────────────────────────────────────────────
_COMPARE_LOOKUPS = {
    "=": "exact",
    ">": "gt",
    ">=": "gte",
    "<": "lt",
    "<=": "lte",
}


@dataclass(frozen=True)
class DateClause:
    """One `hour <compare> value` predicate on the publish date."""

    hour: int
    compare: str = "="
    column: str = "published_at"

    def as_q(self) -> Q:
        if self.compare == "!=":
            return ~Q(**{f"{self.column}__hour": self.hour})
        try:
            lookup = _COMPARE_LOOKUPS[self.compare]
        except KeyError:
            raise ValueError(f"Unsupported compare operator: {self.compare!r}")
        return Q(**{f"{self.column}__hour__{lookup}": self.hour})


@dataclass(frozen=True)
class FilterQuery:
    post_types: Tuple[str, ...] = ("post", "page")
    post_status: str = "any"
    date_query: Tuple[DateClause, ...] = ()
    tag: str = ""
    category_name: str = ""
    posts_per_page: int = 10

    def as_filter_data(self) -> dict:
        return {
            "post_type": ",".join(self.post_types),
            "post_status": self.post_status,
            "tag": self.tag,
            "category_name": self.category_name,
        }


@dataclass
class QueryResult:
    found_posts: int = 0
    posts: List[Any] = field(default_factory=list)
    is_error: bool = False


class CharInFilter(django_filters.BaseInFilter, django_filters.CharFilter):
    pass


class PostFilter(django_filters.FilterSet):
    post_type = CharInFilter(field_name="post_type", lookup_expr="in")
    post_status = django_filters.CharFilter(method="filter_status")
    tag = django_filters.CharFilter(field_name="tags__slug")
    category_name = django_filters.CharFilter(field_name="categories__slug")

    class Meta:
        model = Post
        fields = ["post_type", "post_status", "tag", "category_name"]

    def filter_status(self, queryset, name, value):
        v = (value or "").strip()
        if v == "any":
            return queryset.any_status()
        return queryset.filter(status__in=[s.strip() for s in v.split(",") if s.strip()])


class PostQueryService:
    def query(self, query: FilterQuery) -> QueryResult:
        filterset = PostFilter(data=query.as_filter_data(), queryset=Post.objects.all())
        if not filterset.is_valid():
            logger.warning("Post query rejected: %s", filterset.errors.as_json())
            return QueryResult(is_error=True)

        qs = filterset.qs
        # каждое условие по часу накладывается отдельным filter()
        for clause in query.date_query:
            qs = qs.filter(clause.as_q())
        qs = qs.distinct()

        try:
            found = qs.count()
            if not found:
                return QueryResult(found_posts=0)
            if query.posts_per_page >= 0:
                qs = qs[: query.posts_per_page]
            posts = list(qs)
        except DatabaseError:
            logger.warning("Post query failed", exc_info=True)
            return QueryResult(is_error=True)

        return QueryResult(found_posts=found, posts=posts)


# ──────────────────────────────────────────────────────────────────────────────
# Object cache
# ──────────────────────────────────────────────────────────────────────────────
class ObjectCache:
    """
    Grouped key/value cache over a Django cache backend.

    `get` returns ``ABSENT`` (False) for a miss, so a stored False and a
    miss look the same to callers.
    """

    def __init__(self, alias: str = "default", backend=None):
        self.alias = alias
        self._backend = backend

    @property
    def backend(self):
        if self._backend is not None:
            return self._backend
        return caches[self.alias]

    @staticmethod
    def make_key(key: str, group: str = "") -> str:
        return f"{group}:{key}" if group else key

    def get(self, key: str, group: str = "") -> Any:
        value = self.backend.get(self.make_key(key, group), _MISSING)
        return ABSENT if value is _MISSING else value

    def set(self, key: str, value: Any, group: str = "", expire: int = 0) -> bool:
        # expire=0 means "no expiry"
        self.backend.set(self.make_key(key, group), value, timeout=expire or None)
        return True

    def delete(self, key: str, group: str = "") -> bool:
        return bool(self.backend.delete(self.make_key(key, group)))


# ──────────────────────────────────────────────────────────────────────────────
# Current context
# ──────────────────────────────────────────────────────────────────────────────
class CurrentPost:
    def __init__(self, post_id: Optional[int] = None):
        self.post_id = post_id

    def current_post_id(self) -> Optional[int]:
        return self.post_id

    @classmethod
    def from_context(cls, context: Mapping[str, Any]) -> "CurrentPost":
        post = context.get("post") or context.get("object")
        return cls(getattr(post, "pk", None))
