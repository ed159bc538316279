"""
Bidirectional transform between nested JSON documents and flat catalogs.

flatten() turns a parsed JSON value into {key path: text}. unflatten() goes
the other way by inserting every entry into a small tagged tree
(ObjectNode | ArrayNode | LeafNode) and then converting that tree to plain
dict/list/str values.

Known limitations:
- non-string primitives (numbers, booleans, null) are flattened to their JSON
  text and come back as strings;
- empty objects/arrays produce no keys and therefore disappear on rewrite;
- field names containing "." or "name[digits]" are ambiguous (see keypath);
- an array element followed by later items cannot be removed by dropping its
  key: unflatten() refills the gap with "" (see is_array_slot_held).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Union

from locale_table.core.keypath import KeyPath, Step, join_field, join_index

FlatCatalog = dict[str, str]
JsonValue = Any


@dataclass
class ObjectNode:
    children: dict[str, Node] = field(default_factory=dict)


@dataclass
class ArrayNode:
    items: list[Node] = field(default_factory=list)


@dataclass
class LeafNode:
    value: str


Node = Union[ObjectNode, ArrayNode, LeafNode]


def to_text(value: JsonValue) -> str:
    """Render a JSON primitive the way it is spelled in JSON source."""
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def flatten(doc: JsonValue, prefix: str = "") -> FlatCatalog:
    """
    Flatten a nested JSON value into a mapping of key path -> text.

    Objects contribute "prefix.field" paths, arrays "prefix[i]" paths.
    A bare primitive is recorded under ``prefix`` itself (the empty key for a
    top-level string document).
    """
    result: FlatCatalog = {}
    if isinstance(doc, dict):
        for name, value in doc.items():
            result.update(flatten(value, join_field(prefix, str(name))))
    elif isinstance(doc, list):
        for index, item in enumerate(doc):
            child = join_index(prefix, index)
            if isinstance(item, (dict, list)):
                result.update(flatten(item, child))
            else:
                result[child] = to_text(item)
    else:
        result[prefix] = to_text(doc)
    return result


def _placeholder(final: bool) -> Node:
    return LeafNode("") if final else ObjectNode()


def _insert(node: Node | None, steps: list[Step], value: str) -> Node:
    """
    Place ``value`` at ``steps`` below ``node`` and return the (possibly new) node.

    A node whose shape does not match the next step is replaced by a fresh
    container, so the last key processed for a given prefix wins.
    """
    if not steps:
        return LeafNode(value)

    step, rest = steps[0], steps[1:]
    if isinstance(step, int):
        if not isinstance(node, ArrayNode):
            node = ArrayNode()
        while len(node.items) <= step:
            node.items.append(_placeholder(final=not rest))
        node.items[step] = _insert(node.items[step], rest, value)
        return node

    if not isinstance(node, ObjectNode):
        node = ObjectNode()
    node.children[step] = _insert(node.children.get(step), rest, value)
    return node


def build_tree(flat: FlatCatalog) -> Node:
    """Insert every entry of ``flat`` (in iteration order) into a tagged tree."""
    root: Node = ObjectNode()
    for key, value in flat.items():
        root = _insert(root, KeyPath.parse(key).steps(), value)
    return root


def to_json(node: Node) -> JsonValue:
    if isinstance(node, ObjectNode):
        return {name: to_json(child) for name, child in node.children.items()}
    if isinstance(node, ArrayNode):
        return [to_json(item) for item in node.items]
    return node.value


def unflatten(flat: FlatCatalog) -> JsonValue:
    """Rebuild a nested JSON document from a flat catalog."""
    return to_json(build_tree(flat))


def is_array_slot_held(flat: FlatCatalog, key: str) -> bool:
    """
    True when ``key`` is an array element and ``flat`` has a later item of
    the same array.

    Arrays have no gaps, so removing such an element on its own is undone by
    unflatten(), which puts a "" placeholder back at its index.
    """
    steps = KeyPath.parse(key).steps()
    if not steps or not isinstance(steps[-1], int):
        return False
    parent, index = steps[:-1], steps[-1]
    depth = len(parent)
    for other in flat:
        other_steps = KeyPath.parse(other).steps()
        if len(other_steps) <= depth or other_steps[:depth] != parent:
            continue
        step = other_steps[depth]
        if isinstance(step, int) and step > index:
            return True
    return False
