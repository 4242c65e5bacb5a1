"""
Snapshots of expression nodes, shape classification and the merge check.
"""

import pytest

from stylefix.rules.style_lists import Shape, can_merge, classify, is_singleton
from stylefix.rules.style_lists.classify import children_count, is_composition_call, is_empty_container, is_spread
from stylefix.rules.style_lists.nodes import (
    CallNode,
    Callee,
    EmptyMarker,
    ListNode,
    ObjectNode,
    OtherNode,
    Property,
)
from stylefix.rules.style_lists.snapshot import number_key, snapshot
from stylefix.tree_sitter_support import TreeSitterDocument

PREFIX = "const x = "


def view(expr: str):
    doc = TreeSitterDocument(f"{PREFIX}{expr};\n", "tsx")
    declarator = doc.root_node.named_children[0].named_children[0]
    return snapshot(declarator.child_by_field_name("value"), doc)


def keys(props):
    return [p.key for p in props]


class TestSnapshot:

    def test_list_items(self):
        node = view("[a, {b: 1}, ...c]")
        assert isinstance(node, ListNode)
        assert (node.start, node.end) == (len(PREFIX), len(PREFIX) + len("[a, {b: 1}, ...c]"))
        a, obj, spread = node.items
        assert isinstance(a, OtherNode) and a.kind == "identifier"
        assert isinstance(obj, ObjectNode) and keys(obj.properties) == ["b"]
        assert is_spread(spread)

    def test_comments_are_not_items(self):
        node = view("[/* first */ a, // second\n b]")
        assert len(node.items) == 2

    def test_holes_are_kept_as_items(self):
        node = view("[, x]")
        hole, x = node.items
        assert hole == EmptyMarker(len(PREFIX) + 1, len(PREFIX) + 1)
        assert isinstance(x, OtherNode)
        assert [type(i) for i in view("[x, , y]").items] == [OtherNode, EmptyMarker, OtherNode]
        assert len(view("[x,]").items) == 1
        assert view("[,]").items == (EmptyMarker(len(PREFIX) + 1, len(PREFIX) + 1),)

    def test_plain_call(self):
        node = view("compose(a, b)")
        assert isinstance(node, CallNode)
        assert node.callee == Callee("compose", len(PREFIX), len(PREFIX) + len("compose"))
        assert len(node.items) == 2

    @pytest.mark.parametrize("expr", ["styles.compose(a)", "compose?.(a)", "compose`a`", "make()(a)"])
    def test_other_calls(self, expr):
        node = view(expr)
        assert isinstance(node, OtherNode)
        assert node.kind == "call_expression"

    def test_object_keys(self):
        node = view("{a: 1, 'b': 2, 3: x, [k]: y, ...z, m() {}, s, 'q\\n': 0, 1.5: w}")
        assert isinstance(node, ObjectNode)
        assert keys(node.properties) == ["a", "b", "3", None, None, "m", "s", None, None]

    def test_parenthesized_value_is_other(self):
        assert classify(view("({a: 1})")) is Shape.OTHER

    @pytest.mark.parametrize("text, expected", [
        ("0", "0"),
        ("1", "1"),
        ("1.0", "1"),
        ("1e3", "1000"),
        ("0x10", "16"),
        ("0o17", "15"),
        ("0b101", "5"),
        ("1_000", "1000"),
        ("10n", "10"),
        ("1.5", None),
        ("0.5", None),
        ("010", None),
        ("1e21", None),
    ])
    def test_number_key(self, text, expected):
        assert number_key(text) == expected


class TestClassify:

    compose = CallNode(0, 9, Callee("compose", 0, 7), ())

    def test_shapes(self):
        assert classify(EmptyMarker(0, 2)) is Shape.EMPTY_MARKER
        assert classify(ListNode(0, 2)) is Shape.LIST
        assert classify(self.compose) is Shape.CALL
        assert classify(ObjectNode(0, 2)) is Shape.OBJECT
        assert classify(OtherNode(0, 1, "identifier")) is Shape.OTHER

    def test_singleton(self):
        item = OtherNode(1, 2, "identifier")
        assert is_singleton(ListNode(0, 3, (item,)))
        assert not is_singleton(ListNode(0, 2))
        assert not is_singleton(ObjectNode(0, 5, (Property(1, 4, "a"),)))
        assert children_count(ObjectNode(0, 5, (Property(1, 4, "a"),))) == 1

    def test_empty_containers(self):
        functions = {"compose"}
        assert is_empty_container(EmptyMarker(0, 2), functions)
        assert is_empty_container(ListNode(0, 2), functions)
        assert is_empty_container(ObjectNode(0, 2), functions)
        assert is_empty_container(self.compose, functions)
        # a call of anything else may return styles
        assert not is_empty_container(self.compose, {"css"})
        assert not is_empty_container(OtherNode(0, 1, "identifier"), functions)

    def test_composition_call(self):
        assert is_composition_call(self.compose, ["compose"])
        assert not is_composition_call(self.compose, ["css"])
        assert not is_composition_call(ListNode(0, 2), ["compose"])


def props(*names):
    return tuple(Property(0, 0, n) for n in names)


class TestCanMerge:

    def test_disjoint_literal_keys(self):
        assert can_merge(props("color"), props("background", "margin"))

    def test_shared_key(self):
        assert not can_merge(props("color", "margin"), props("margin"))

    @pytest.mark.parametrize("a, b", [
        (props(None), props("b")),
        (props("a"), props(None)),
        (props("a", None), props("b")),
    ])
    def test_non_literal_entries(self, a, b):
        assert not can_merge(a, b)
        assert not can_merge(b, a)

    def test_empty_sides(self):
        assert can_merge((), props("a"))
        assert can_merge((), ())
