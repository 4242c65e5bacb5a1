"""
Conversion of Tree-sitter expression nodes into immutable style views.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ...tree_sitter_support import Node, TreeSitterDocument
from .nodes import CallNode, Callee, EmptyMarker, ListNode, ObjectNode, OtherNode, Property, StyleNode

_LEGACY_OCTAL = re.compile(r"^0\d")


def significant_children(node: Node) -> List[Node]:
    """Named children without comments."""
    return [c for c in node.named_children if c.type != "comment"]


def number_key(text: str) -> Optional[str]:
    """
    Property key of a numeric literal, as JavaScript would stringify it.

    Only integral values are canonicalised; anything else returns None so
    the property is treated as non-literal.
    """
    raw = text.replace("_", "").lower()
    if raw.endswith("n"):
        raw = raw[:-1]
    if _LEGACY_OCTAL.match(raw):
        return None
    try:
        if raw.startswith(("0x", "0o", "0b")):
            return str(int(raw, 0))
        value = float(raw)
    except ValueError:
        return None
    if not value.is_integer() or abs(value) >= 1e21:
        return None
    return str(int(value))


def property_key(key: Optional[Node], doc: TreeSitterDocument) -> Optional[str]:
    """Statically known key of a property name node, or None."""
    if key is None:
        return None
    if key.type in ("property_identifier", "identifier"):
        return doc.get_node_text(key)
    if key.type == "string":
        if doc.get_children_by_type(key, "escape_sequence"):
            return None
        return doc.get_node_text(key)[1:-1]
    if key.type == "number":
        return number_key(doc.get_node_text(key))
    # computed_property_name, private_property_identifier
    return None


def snapshot_property(node: Node, doc: TreeSitterDocument) -> Property:
    start, end = doc.get_node_range(node)
    if node.type == "pair":
        key = property_key(node.child_by_field_name("key"), doc)
    elif node.type == "method_definition":
        key = property_key(node.child_by_field_name("name"), doc)
    elif node.type == "shorthand_property_identifier":
        key = doc.get_node_text(node)
    else:
        # spread_element and anything unexpected
        key = None
    return Property(start, end, key)


def list_items(node: Node, doc: TreeSitterDocument) -> Tuple[StyleNode, ...]:
    """
    Elements of an array literal in order, holes included.

    A comma right after `[` or after another comma marks an elided slot;
    it becomes a zero-width EmptyMarker at the comma.
    """
    items: List[StyleNode] = []
    previous = "["
    for child in node.children:
        if child.type == "comment":
            continue
        if child.type == ",":
            if previous in ("[", ","):
                pos = doc.byte_to_char_position(child.start_byte)
                items.append(EmptyMarker(pos, pos))
        elif child.is_named:
            items.append(snapshot(child, doc))
        previous = child.type
    return tuple(items)


def _plain_call_parts(node: Node) -> Optional[tuple[Node, Node]]:
    callee = node.child_by_field_name("function")
    arguments = node.child_by_field_name("arguments")
    if callee is None or arguments is None:
        return None
    if callee.type != "identifier" or arguments.type != "arguments":
        return None
    # css?.(a) and css<T>(a) carry tokens a flattening would strand
    if node.child_by_field_name("type_arguments") is not None:
        return None
    if any(c.type in ("optional_chain", "?.") for c in node.children):
        return None
    return callee, arguments


def snapshot(node: Node, doc: TreeSitterDocument) -> StyleNode:
    """Immutable view of an expression node."""
    start, end = doc.get_node_range(node)

    if node.type == "jsx_expression":
        inner = significant_children(node)
        if not inner:
            return EmptyMarker(start, end)
        return snapshot(inner[0], doc)

    if node.type == "array":
        return ListNode(start, end, list_items(node, doc))

    if node.type == "call_expression":
        parts = _plain_call_parts(node)
        if parts is not None:
            callee, arguments = parts
            c_start, c_end = doc.get_node_range(callee)
            items = tuple(snapshot(c, doc) for c in significant_children(arguments))
            return CallNode(start, end, Callee(doc.get_node_text(callee), c_start, c_end), items)

    if node.type == "object":
        props = tuple(snapshot_property(c, doc) for c in significant_children(node))
        return ObjectNode(start, end, props)

    return OtherNode(start, end, node.type)
