"""
Token stream over a Tree-sitter document.

Tree-sitter has no separate token list, so the stream is built from the
leaves of the concrete syntax tree. String, number and regex nodes are kept
as single tokens; comments and zero-width nodes inserted by error recovery
are left out.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from .tree_sitter_support import Node, TreeSitterDocument

__all__ = [
    "Span",
    "Token",
    "TokenPredicate",
    "TokenStore",
    "build_tokens",
]

# Nodes emitted as one token without descending into their children
ATOMIC_TYPES = {"string", "number", "regex"}

LITERAL_LEAVES = {"true", "false", "null", "undefined"}

TEMPLATE_PARENTS = {"template_string", "template_substitution"}


class Span(Protocol):
    """Anything that covers a character range of the document."""
    start: int
    end: int


@dataclass(frozen=True)
class Token:
    """A single lexical token; offsets are character positions."""
    kind: str  # punctuator | keyword | identifier | literal | template | jsx_text | other
    value: str
    start: int
    end: int

    def is_punctuator(self, value: str) -> bool:
        return self.kind == "punctuator" and self.value == value


TokenPredicate = Callable[[Token], bool]


def _token_kind(node: Node, value: str) -> str:
    parent = node.parent
    if parent is not None and parent.type in TEMPLATE_PARENTS:
        # '`', '${', the closing '}' and raw template text
        if parent.type == "template_string" or value in ("${", "}"):
            return "template"
    if node.type in ATOMIC_TYPES or node.type in LITERAL_LEAVES:
        return "literal"
    if node.type == "jsx_text":
        return "jsx_text"
    if not node.is_named:
        if value and (value[0].isalpha() or value[0] in "_$"):
            return "keyword"
        return "punctuator"
    if node.type.endswith("identifier") or node.type == "this":
        return "identifier"
    return "other"


def build_tokens(doc: TreeSitterDocument) -> List[Token]:
    """Collect document tokens in source order."""
    tokens: List[Token] = []
    stack: List[Node] = [doc.root_node]
    while stack:
        node = stack.pop()
        if node.type in ("comment", "hash_bang_line") or node.is_missing:
            continue
        if node.child_count == 0 or node.type in ATOMIC_TYPES:
            if node.end_byte == node.start_byte:
                continue
            start, end = doc.get_node_range(node)
            value = doc.text[start:end]
            tokens.append(Token(_token_kind(node, value), value, start, end))
            continue
        # Reverse so that the leftmost child is processed first
        stack.extend(reversed(node.children))
    return tokens


class TokenStore:
    """
    Nearest-token queries over a sorted token list.

    Every query accepts an optional predicate and returns the nearest token
    satisfying it, or None when there is none within range.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self._starts = [t.start for t in tokens]
        self._ends = [t.end for t in tokens]

    @classmethod
    def from_document(cls, doc: TreeSitterDocument) -> TokenStore:
        return cls(build_tokens(doc))

    def __len__(self) -> int:
        return len(self.tokens)

    def token_after(self, span: Span, predicate: Optional[TokenPredicate] = None) -> Optional[Token]:
        """First token starting at or after the end of span."""
        for i in range(bisect_left(self._starts, span.end), len(self.tokens)):
            token = self.tokens[i]
            if predicate is None or predicate(token):
                return token
        return None

    def token_before(self, span: Span, predicate: Optional[TokenPredicate] = None) -> Optional[Token]:
        """Last token ending at or before the start of span."""
        for i in range(bisect_right(self._ends, span.start) - 1, -1, -1):
            token = self.tokens[i]
            if predicate is None or predicate(token):
                return token
        return None

    def first_token(self, span: Span, predicate: Optional[TokenPredicate] = None) -> Optional[Token]:
        """First token inside span."""
        for i in range(bisect_left(self._starts, span.start), len(self.tokens)):
            token = self.tokens[i]
            if token.end > span.end:
                break
            if predicate is None or predicate(token):
                return token
        return None

    def last_token(self, span: Span, predicate: Optional[TokenPredicate] = None) -> Optional[Token]:
        """Last token inside span."""
        for i in range(bisect_right(self._ends, span.end) - 1, -1, -1):
            token = self.tokens[i]
            if token.start < span.start:
                break
            if predicate is None or predicate(token):
                return token
        return None

    def first_token_between(
        self,
        left: Span,
        right: Span,
        predicate: Optional[TokenPredicate] = None,
    ) -> Optional[Token]:
        """First token located strictly between two spans."""
        for i in range(bisect_left(self._starts, left.end), len(self.tokens)):
            token = self.tokens[i]
            if token.end > right.start:
                break
            if predicate is None or predicate(token):
                return token
        return None
