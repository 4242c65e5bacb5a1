"""
Shape classification of style views.
"""

from __future__ import annotations

import enum
from typing import Collection

from .nodes import CallNode, EmptyMarker, ListNode, ObjectNode, StyleNode


class Shape(enum.Enum):
    EMPTY_MARKER = "empty_marker"
    LIST = "list"
    CALL = "call"
    OBJECT = "object"
    OTHER = "other"


def classify(node: StyleNode) -> Shape:
    """Shape of a view; anything unrecognized is OTHER and never simplified."""
    if isinstance(node, EmptyMarker):
        return Shape.EMPTY_MARKER
    if isinstance(node, ListNode):
        return Shape.LIST
    if isinstance(node, CallNode):
        return Shape.CALL
    if isinstance(node, ObjectNode):
        return Shape.OBJECT
    return Shape.OTHER


def children_count(node: StyleNode) -> int:
    if isinstance(node, (ListNode, CallNode)):
        return len(node.items)
    if isinstance(node, ObjectNode):
        return len(node.properties)
    return 0


def is_singleton(node: StyleNode) -> bool:
    """A list with exactly one element or a call with exactly one argument."""
    return isinstance(node, (ListNode, CallNode)) and len(node.items) == 1


def is_composition_call(node: StyleNode, functions: Collection[str]) -> bool:
    """Call of one of the designated style-composition functions."""
    return isinstance(node, CallNode) and node.callee_name in functions


def is_empty_container(node: StyleNode, functions: Collection[str]) -> bool:
    """
    Cascade identity: an empty marker, an empty list or object,
    or a composition call without arguments.
    """
    shape = classify(node)
    if shape is Shape.EMPTY_MARKER:
        return True
    if shape is Shape.CALL and not is_composition_call(node, functions):
        return False
    if shape in (Shape.LIST, Shape.CALL, Shape.OBJECT):
        return children_count(node) == 0
    return False


def is_hole(node: StyleNode) -> bool:
    """Elided array slot, as in `[, a]`."""
    return isinstance(node, EmptyMarker)


def is_spread(node: StyleNode) -> bool:
    return classify(node) is Shape.OTHER and getattr(node, "kind", "") == "spread_element"
