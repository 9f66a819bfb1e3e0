# blog/post_types.py
"""
Реестр типов контента (post, page, ...).

Block-виджеты и админка берут отсюда список публичных типов и их подписи,
поэтому порядок регистрации сохраняется.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class PostType:
    name: str
    label: str
    public: bool = True


_registry: Dict[str, PostType] = {}


def register_post_type(name: str, label: str, public: bool = True) -> PostType:
    post_type = PostType(name=name, label=label, public=public)
    _registry[name] = post_type
    return post_type


def unregister_post_type(name: str) -> None:
    _registry.pop(name, None)


def get_post_type(name: str) -> Optional[PostType]:
    return _registry.get(name)


def get_post_types(public: Optional[bool] = None) -> List[PostType]:
    types = list(_registry.values())
    if public is None:
        return types
    return [t for t in types if t.public == public]


def choices() -> list[tuple[str, str]]:
    return [(t.name, t.label) for t in _registry.values()]


register_post_type("post", "Posts")
register_post_type("page", "Pages")
