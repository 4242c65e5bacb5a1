"""
Style-list simplification: walks fragments left to right and reports
each simplification with its planned fix.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Collection, Optional, Sequence, Union

from ...tokens import Span
from .classify import classify, is_composition_call, is_empty_container, is_hole, is_singleton, is_spread
from .conflicts import can_merge
from .nodes import CallNode, ListNode, ObjectNode, StyleNode
from .planner import EditPlanner

logger = logging.getLogger(__name__)

# (message_id, start, end, *, data=..., fix=...)
Reporter = Callable[..., Any]


class StyleListSimplifier:
    """
    One instance per document. Holds the designated composition function
    names and reports through the host's report callback.
    """

    def __init__(self, planner: EditPlanner, report: Reporter, functions: Collection[str]):
        self.planner = planner
        self.report = report
        self.functions = frozenset(functions)

    # -------- entry points --------

    def simplify_attribute(self, attribute: Span, attribute_name: str, value: StyleNode) -> None:
        """A designated attribute whose value is a wrapped expression."""
        data = {"attribute": attribute_name}

        if is_empty_container(value, self.functions):
            self.report(
                "removeEmptyAttribute", attribute.start, attribute.end,
                data=data, fix=self.planner.remove_attribute(attribute),
            )
        elif isinstance(value, ListNode):
            if is_singleton(value):
                # `style={...a}` would not parse
                if not is_spread(value.items[0]) and not is_hole(value.items[0]):
                    self._flatten(value)
            else:
                self.simplify(value.items)
        elif isinstance(value, CallNode) and is_composition_call(value, self.functions):
            if is_singleton(value) and not is_spread(value.items[0]):
                self._flatten(value)
            else:
                self.report(
                    "replaceCallWithList", value.start, value.end,
                    data={**data, "function": value.callee_name},
                    fix=self.planner.replace_call_with_list(value),
                )

    def simplify_call(self, call: StyleNode) -> None:
        """Any call of a designated composition function."""
        if isinstance(call, CallNode) and is_composition_call(call, self.functions):
            self.simplify(call.items)

    # -------- list pass --------

    def simplify(self, items: Sequence[StyleNode]) -> None:
        """
        Single left-to-right pass with one item of lookahead.

        A merged pair consumes both items, so a run of three mergeable
        objects needs a second pass to collapse completely. Holes are
        items too: objects on either side of one are never adjacent.
        """
        i = 0
        while i < len(items):
            node = items[i]
            next_node: Optional[StyleNode] = items[i + 1] if i + 1 < len(items) else None

            if isinstance(node, ListNode):
                self._simplify_nested(node)
            elif isinstance(node, CallNode):
                if is_composition_call(node, self.functions):
                    self._simplify_nested(node)
            elif isinstance(node, ObjectNode):
                if not node.properties:
                    self._remove_fragment(node, "object")
                elif (
                    isinstance(next_node, ObjectNode)
                    and next_node.properties
                    and can_merge(node.properties, next_node.properties)
                ):
                    self.report(
                        "combineAdjacentObjects", node.start, next_node.end,
                        fix=self.planner.merge_objects(node, next_node),
                    )
                    i += 2
                    continue
            else:
                logger.debug("Leaving %s fragment at %d untouched", classify(node).value, node.start)

            i += 1

    def _simplify_nested(self, node: Union[ListNode, CallNode]) -> None:
        """A list or composition call sitting inside another style list."""
        if not node.items:
            kind = "array" if isinstance(node, ListNode) else f"{node.callee_name} call"
            self._remove_fragment(node, kind)
        elif is_singleton(node) and not is_hole(node.items[0]):
            self._flatten(node)

    # -------- reports --------

    def _flatten(self, node: Union[ListNode, CallNode]) -> None:
        if isinstance(node, ListNode):
            self.report("flattenList", node.start, node.end, fix=self.planner.flatten_list(node))
        else:
            self.report(
                "flattenCall", node.start, node.end,
                data={"function": node.callee_name},
                fix=self.planner.flatten_call(node),
            )

    def _remove_fragment(self, node: StyleNode, kind: str) -> None:
        self.report(
            "removeEmptyFragment", node.start, node.end,
            data={"kind": kind},
            fix=self.planner.remove_fragment(node),
        )
