# site_counts/block.py
"""
The Site Counts dynamic block.

Renders published counts for every public post type, the current post id
and a short cached list of posts with a given tag and category.
"""
from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from django.conf import settings
from django.utils.html import format_html, format_html_join
from django.utils.safestring import mark_safe

from . import registry
from .services import (
    ABSENT,
    ContentTypeDirectory,
    CurrentPost,
    DateClause,
    FilterQuery,
    ObjectCache,
    PostQueryService,
)

logger = logging.getLogger(__name__)

BLOCK_DIR = Path(__file__).resolve().parent
BLOCK_NAME = registry.load_block_metadata(BLOCK_DIR)["name"]

CACHE_GROUP = "site_counts"
CACHE_KEY = "filtered_posts"

# два независимых условия по часу публикации, а не единое окно 9-17
HOUR_CLAUSES = (
    DateClause(hour=9, compare=">="),
    DateClause(hour=17, compare="<="),
)

_OCTETS_RE = re.compile(r"%[a-fA-F0-9]{2}")
_CLASS_RE = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_html_class(value: Any) -> Optional[str]:
    """
    Reduce a value to a single safe CSS class name.
    Non-strings and values with nothing left after cleaning give None.
    """
    if not isinstance(value, str):
        return None
    cleaned = _CLASS_RE.sub("", _OCTETS_RE.sub("", value))
    return cleaned or None


@dataclass(frozen=True)
class BlockAttributes:
    class_name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "class_name", sanitize_html_class(self.class_name))

    @classmethod
    def coerce(cls, attributes: Any) -> "BlockAttributes":
        if isinstance(attributes, BlockAttributes):
            return attributes
        if not isinstance(attributes, Mapping):
            return cls()
        return cls(class_name=attributes.get("className"))


class Block:
    def __init__(
        self,
        directory: Optional[ContentTypeDirectory] = None,
        query_service: Optional[PostQueryService] = None,
        cache: Optional[ObjectCache] = None,
        current_post: Optional[CurrentPost] = None,
        *,
        cache_ttl: int = 5 * 60,
        posts_per_page: int = 6,
        tag: str = "foo",
        category_name: str = "baz",
        parameterized_cache_key: bool = False,
        heading_shows_count: bool = False,
    ):
        self.directory = directory or ContentTypeDirectory()
        self.query_service = query_service or PostQueryService()
        self.cache = cache or ObjectCache()
        self.current_post = current_post or CurrentPost()
        self.cache_ttl = cache_ttl
        self.posts_per_page = posts_per_page
        self.tag = tag
        self.category_name = category_name
        self.parameterized_cache_key = parameterized_cache_key
        self.heading_shows_count = heading_shows_count

    @classmethod
    def default(cls, current_post: Optional[CurrentPost] = None) -> "Block":
        """Block wired to Django services and SITE_COUNTS_* settings."""
        return cls(
            ContentTypeDirectory(),
            PostQueryService(),
            ObjectCache(alias=getattr(settings, "SITE_COUNTS_CACHE_ALIAS", "default")),
            current_post,
            cache_ttl=getattr(settings, "SITE_COUNTS_CACHE_TTL", 5 * 60),
            posts_per_page=getattr(settings, "SITE_COUNTS_POSTS_PER_PAGE", 6),
            tag=getattr(settings, "SITE_COUNTS_DEFAULT_TAG", "foo"),
            category_name=getattr(settings, "SITE_COUNTS_DEFAULT_CATEGORY", "baz"),
            parameterized_cache_key=getattr(settings, "SITE_COUNTS_PARAMETERIZED_CACHE_KEY", False),
            heading_shows_count=getattr(settings, "SITE_COUNTS_HEADING_SHOWS_COUNT", False),
        )

    # ── registration ─────────────────────────────────────────────────────────
    def init(self) -> registry.BlockType:
        return registry.register_block_type_from_metadata(BLOCK_DIR, self.render_callback)

    # ── rendering ────────────────────────────────────────────────────────────
    def render_callback(
        self,
        attributes: Mapping[str, Any],
        content: str = "",
        block: Optional[registry.BlockInstance] = None,
    ) -> str:
        """Entry point for the block pipeline (registry.render_block)."""
        post_id = block.context.get("postId") if block is not None else None
        if post_id is None:
            post_id = self.current_post.current_post_id()
        return self.render(attributes, post_id)

    def render(self, attributes: Any, current_post_id: Optional[int]) -> str:
        attrs = BlockAttributes.coerce(attributes)

        parts = [
            format_html("<div class='{}'>", attrs.class_name) if attrs.class_name else "<div >",
            "<h2>Post Counts</h2>",
            "<ul>",
        ]
        for post_type in self.directory.list_public_content_types():
            count = self.directory.count_published(post_type.name)
            parts.append(format_html("<li>There are {} {}.</li>", count, post_type.label))
        parts.append("</ul>")

        parts.append(format_html(
            "<p>The current post ID is {}.</p>",
            "" if current_post_id is None else current_post_id,
        ))
        parts.append(self.get_filtered_posts(current_post_id, self.tag, self.category_name))
        parts.append("</div>")

        return mark_safe("".join(parts))

    # ── filtered list ────────────────────────────────────────────────────────
    def cache_key(self, post_id: Optional[int], tag: str, category_name: str) -> str:
        if not self.parameterized_cache_key:
            return CACHE_KEY
        digest = hashlib.md5(f"{tag}|{category_name}|{post_id}".encode("utf-8")).hexdigest()[:12]
        return f"{CACHE_KEY}:{digest}"

    def build_query(self, tag: str, category_name: str) -> FilterQuery:
        # на одну запись больше, чем нужно: текущая может оказаться в выборке
        return FilterQuery(
            post_types=("post", "page"),
            post_status="any",
            date_query=HOUR_CLAUSES,
            tag=tag,
            category_name=category_name,
            posts_per_page=self.posts_per_page,
        )

    def get_filtered_posts(
        self,
        post_id: Optional[int],
        tag: str = "foo",
        category_name: str = "baz",
    ) -> str:
        """
        Posts with the given tag and category, without `post_id`.

        The list is cached for `cache_ttl` seconds. Unless
        `parameterized_cache_key` is on, the key ignores the arguments, so a
        warm cache answers every call with whatever was stored first.
        """
        key = self.cache_key(post_id, tag, category_name)
        cached = self.cache.get(key, CACHE_GROUP)

        if cached is ABSENT:
            logger.debug("Filtered posts cache miss: %s", key)
            result = self.query_service.query(self.build_query(tag, category_name))

            if result.found_posts and not result.is_error:
                filtered = [p for p in result.posts if p.id != post_id]
                self.cache.set(key, filtered, CACHE_GROUP, self.cache_ttl)
                cached = self.cache.get(key, CACHE_GROUP)
        else:
            logger.debug("Filtered posts cache hit: %s", key)

        if not cached:
            return ""

        heading_value = len(cached) if self.heading_shows_count else cached
        markup = format_html(
            "<h2>{} posts with the tag of {} and the category of {}</h2>",
            heading_value, tag, category_name,
        )
        items = format_html_join("", "<li>{}</li>", ((p.id,) for p in cached))
        return mark_safe(f"{markup}<ul>{items}</ul>")
