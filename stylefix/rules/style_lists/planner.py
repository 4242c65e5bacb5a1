"""
Fix recipes for style-list simplifications.

Every recipe touches only delimiter and separator tokens owned by the node
it is called for, so fixes planned in the same pass never overlap. A token
that cannot be found (unusual formatting, error recovery) drops just the
sub-edit that depends on it.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ...tokens import Span, Token
from ..base import FixOperation, Fixer
from .locator import Region, TokenQuery, closing, comma_after, opening, trailing_comma
from .nodes import CallNode, ListNode, ObjectNode, StyleNode

Operations = Tuple[FixOperation, ...]


def _ordered(ops: List[FixOperation]) -> Operations:
    return tuple(sorted(ops, key=lambda op: (op.start, op.end)))


def _remove_if(ops: List[FixOperation], token: Optional[Token]) -> None:
    if token is not None:
        ops.append(Fixer.remove(token))


class EditPlanner:
    """Turns a detected simplification into fix operations."""

    def __init__(self, tokens: TokenQuery, text: str):
        self.tokens = tokens
        self.text = text

    def _skip_whitespace(self, pos: int) -> int:
        while pos < len(self.text) and self.text[pos].isspace():
            pos += 1
        return pos

    def remove_attribute(self, attribute: Span) -> Operations:
        """Drop a whole attribute together with the whitespace in front of it."""
        start = attribute.start
        previous = self.tokens.token_before(attribute)
        if previous is not None:
            gap = self.text[previous.end:attribute.start]
            if gap and gap.isspace():
                start = previous.end
        return (Fixer.remove_range(start, attribute.end),)

    def remove_fragment(self, node: StyleNode) -> Operations:
        """Drop an empty fragment from a list, with the separator after it."""
        end = node.end
        comma = comma_after(self.tokens, node)
        if comma is not None:
            end = self._skip_whitespace(comma.end)
        return (Fixer.remove_range(node.start, end),)

    def flatten_list(self, node: ListNode) -> Operations:
        """Remove the brackets around a single-element list."""
        ops: List[FixOperation] = []
        open_bracket = opening(self.tokens, node, "[")
        close_bracket = closing(self.tokens, node, "]")
        _remove_if(ops, open_bracket)
        _remove_if(ops, close_bracket)
        _remove_if(ops, trailing_comma(self.tokens, node.items, close_bracket))
        return _ordered(ops)

    def flatten_call(self, node: CallNode) -> Operations:
        """Remove the callee and parentheses around a single argument."""
        ops: List[FixOperation] = []
        if node.callee is not None:
            ops.append(Fixer.remove(node.callee))
            open_paren = opening(self.tokens, Region(node.callee.end, node.end), "(")
            _remove_if(ops, open_paren)
        close_paren = closing(self.tokens, node, ")")
        _remove_if(ops, close_paren)
        _remove_if(ops, trailing_comma(self.tokens, node.items, close_paren))
        return _ordered(ops)

    def replace_call_with_list(self, node: CallNode) -> Operations:
        """Turn `fn(a, b)` into `[a, b]`."""
        ops: List[FixOperation] = []
        if node.callee is not None:
            ops.append(Fixer.remove(node.callee))
            open_paren = opening(self.tokens, Region(node.callee.end, node.end), "(")
            if open_paren is not None:
                ops.append(Fixer.replace_text(open_paren, "["))
        close_paren = closing(self.tokens, node, ")")
        if close_paren is not None:
            ops.append(Fixer.replace_text(close_paren, "]"))
        return _ordered(ops)

    def merge_objects(self, first: ObjectNode, second: ObjectNode) -> Operations:
        """Join two adjacent objects: A's properties followed by B's, in one pair of braces."""
        ops: List[FixOperation] = []
        close_brace = closing(self.tokens, first, "}")
        comma = trailing_comma(self.tokens, first.properties, close_brace)
        _remove_if(ops, comma)
        if close_brace is not None:
            start = close_brace.start
            anchor = comma.end if comma is not None else (first.properties[-1].end if first.properties else start)
            if self._is_inline_gap(anchor, close_brace.start):
                start = anchor
            ops.append(Fixer.remove_range(start, close_brace.end))

        open_brace = opening(self.tokens, second, "{")
        if open_brace is not None:
            end = open_brace.end
            if second.properties and self._is_inline_gap(open_brace.end, second.properties[0].start):
                end = second.properties[0].start
            ops.append(Fixer.remove_range(open_brace.start, end))
        return _ordered(ops)

    def _is_inline_gap(self, start: int, end: int) -> bool:
        """Non-empty run of spaces and tabs only."""
        gap = self.text[start:end]
        return bool(gap) and not gap.strip(" \t")
