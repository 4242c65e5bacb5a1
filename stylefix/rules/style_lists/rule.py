"""
simple-style-lists: simplify style props and style-composition calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from ...config.typed import load_typed
from ...tree_sitter_support import Node
from ..base import Rule, RuleContext, RuleMeta, VisitorMap
from .locator import Region
from .planner import EditPlanner
from .simplifier import StyleListSimplifier
from .snapshot import snapshot


@dataclass
class StyleListOptions:
    attributes: List[str] = field(default_factory=lambda: ["css"])
    """JSX attribute names whose values are style expressions."""
    functions: List[str] = field(default_factory=lambda: ["css"])
    """Names of style-composition functions."""


class SimpleStyleListsRule(Rule):

    meta = RuleMeta(
        name="simple-style-lists",
        description="Style lists should not contain empty, single-element or mergeable fragments.",
        default_severity="warn",
        fixable=True,
        messages={
            "removeEmptyAttribute": "This {attribute} prop is empty and can be removed.",
            "replaceCallWithList": "Use arrays instead of the {function} function in {attribute} props.",
            "flattenList": "This array can be flattened.",
            "flattenCall": "This {function} call can be flattened.",
            "removeEmptyFragment": "This {kind} is empty and can be removed.",
            "combineAdjacentObjects": "These objects can be combined into one.",
        },
        docs_url="https://github.com/stylefix/stylefix/blob/main/docs/rules/simple-style-lists.md",
    )

    @classmethod
    def default_options(cls) -> StyleListOptions:
        return StyleListOptions()

    @classmethod
    def load_options(cls, raw: Mapping[str, Any]) -> StyleListOptions:
        return load_typed(StyleListOptions, dict(raw), path=f"rules.{cls.meta.name}")

    def create(self, context: RuleContext) -> VisitorMap:
        options: StyleListOptions = context.options
        attributes = frozenset(options.attributes)
        functions = frozenset(options.functions)
        doc = context.doc
        simplifier = StyleListSimplifier(
            EditPlanner(context.tokens, doc.text),
            context.report,
            functions,
        )

        def on_attribute(node: Node) -> None:
            name = node.named_children[0] if node.named_children else None
            if name is None or name.type != "property_identifier":
                return
            attribute_name = doc.get_node_text(name)
            if attribute_name not in attributes:
                return
            value = doc.get_children_by_type(node, "jsx_expression")
            if not value:
                return
            simplifier.simplify_attribute(Region(*doc.get_node_range(node)), attribute_name, snapshot(value[0], doc))

        def on_call(node: Node) -> None:
            callee = node.child_by_field_name("function")
            if callee is None or callee.type != "identifier" or doc.get_node_text(callee) not in functions:
                return
            simplifier.simplify_call(snapshot(node, doc))

        return {
            "jsx_attribute": on_attribute,
            "call_expression": on_call,
        }
