# site_counts/registry.py
"""
Registry of dynamic blocks.

A block type is declared by a `block.json` manifest (name, title, attribute
schema) plus a Python render callback. Rendering goes through
:func:`render_block`, which checks the incoming attributes against the
manifest schema before calling the callback.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .exceptions import BlockRegistrationError, BlockTypeNotFound

logger = logging.getLogger(__name__)

METADATA_FILENAME = "block.json"

RenderCallback = Callable[[Dict[str, Any], str, "BlockInstance"], str]

_SCHEMA_TYPES = {
    "string": (str,),
    "boolean": (bool,),
    "integer": (int,),
    "number": (int, float),
    "array": (list, tuple),
    "object": (dict,),
    "null": (type(None),),
}


@dataclass
class BlockType:
    name: str
    render_callback: RenderCallback
    attributes: Dict[str, dict] = field(default_factory=dict)
    title: str = ""
    category: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def prepare_attributes(self, attributes: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Drop unknown keys and values of the wrong type, then apply defaults."""
        raw = attributes if isinstance(attributes, Mapping) else {}
        prepared: Dict[str, Any] = {}
        for key, schema in self.attributes.items():
            if key in raw and _matches(raw[key], schema.get("type")):
                prepared[key] = raw[key]
            elif "default" in schema:
                prepared[key] = schema["default"]
        return prepared


@dataclass
class BlockInstance:
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    context: Dict[str, Any] = field(default_factory=dict)


_registry: Dict[str, BlockType] = {}


def _matches(value: Any, type_name: Union[str, list, None]) -> bool:
    if not type_name:
        return True
    names = type_name if isinstance(type_name, list) else [type_name]
    for name in names:
        types = _SCHEMA_TYPES.get(name, ())
        # bool is an int subclass, but not a valid "integer"/"number"
        if isinstance(value, bool) and name in ("integer", "number"):
            continue
        if isinstance(value, types):
            return True
    return False


def load_block_metadata(path: Union[str, Path]) -> Dict[str, Any]:
    p = Path(path)
    if p.is_dir():
        p = p / METADATA_FILENAME
    try:
        with p.open(encoding="utf-8") as fh:
            metadata = json.load(fh)
    except (OSError, ValueError) as e:
        raise BlockRegistrationError(f"Cannot read block metadata from {p}: {e}") from e
    if not isinstance(metadata, dict) or not metadata.get("name"):
        raise BlockRegistrationError(f"Block metadata in {p} has no name")
    return metadata


def register_block_type(
    name: str,
    render_callback: RenderCallback,
    attributes: Optional[Dict[str, dict]] = None,
    **metadata: Any,
) -> BlockType:
    if "/" not in name:
        raise BlockRegistrationError(f"Block name {name!r} must be namespaced (namespace/name)")
    if name in _registry:
        raise BlockRegistrationError(f"Block type {name!r} is already registered")
    block_type = BlockType(
        name=name,
        render_callback=render_callback,
        attributes=dict(attributes or {}),
        title=metadata.get("title", ""),
        category=metadata.get("category", ""),
        metadata=metadata,
    )
    _registry[name] = block_type
    logger.debug("Registered block type %s", name)
    return block_type


def register_block_type_from_metadata(path: Union[str, Path], render_callback: RenderCallback) -> BlockType:
    metadata = load_block_metadata(path)
    name = metadata.pop("name")
    attributes = metadata.pop("attributes", {})
    return register_block_type(name, render_callback, attributes, **metadata)


def unregister_block_type(name: str) -> Optional[BlockType]:
    return _registry.pop(name, None)


def is_registered(name: str) -> bool:
    return name in _registry


def get_block_type(name: str) -> BlockType:
    try:
        return _registry[name]
    except KeyError:
        raise BlockTypeNotFound(name) from None


def render_block(
    name: str,
    attributes: Optional[Mapping[str, Any]] = None,
    content: str = "",
    context: Optional[Mapping[str, Any]] = None,
) -> str:
    block_type = get_block_type(name)
    prepared = block_type.prepare_attributes(attributes)
    instance = BlockInstance(name=name, attributes=prepared, context=dict(context or {}))
    return block_type.render_callback(prepared, content, instance)
