"""
Tree-sitter infrastructure for linted sources.
Provides grammar selection, tree traversal and offset utilities.
"""

from __future__ import annotations

from bisect import bisect_right
from functools import lru_cache
from typing import Iterator, List, Optional, Tuple

from tree_sitter import Tree, Node, Parser, Language

# Extensions parsed with the plain TypeScript grammar (no JSX).
TS_ONLY_EXTENSIONS = {"ts", "mts", "cts"}


@lru_cache(maxsize=None)
def _language(grammar: str) -> Language:
    import tree_sitter_typescript as tsts
    # TS and TSX are two different grammars in one package
    if grammar == "typescript":
        return Language(tsts.language_typescript())
    return Language(tsts.language_tsx())


def grammar_for_ext(ext: str) -> str:
    """Grammar name for a file extension (with or without the leading dot)."""
    return "typescript" if ext.lstrip(".").lower() in TS_ONLY_EXTENSIONS else "tsx"


class TreeSitterDocument:
    """
    Wrapper for a Tree-sitter parsed JavaScript/TypeScript document.
    """

    def __init__(self, text: str, ext: str):
        self.text = text
        self.ext = ext.lstrip(".").lower()
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode('utf-8')
        self._ascii = len(self._text_bytes) == len(text)
        self._line_starts: Optional[List[int]] = None
        self._parse()

    def get_language(self) -> Language:
        """
        Get Language instance for this document's extension.

        Returns:
            Language instance
        """
        return _language(grammar_for_ext(self.ext))

    def get_parser(self) -> Parser:
        """
        Get parser for the language.

        Returns:
            Parser instance
        """
        return Parser(self.get_language())

    def _parse(self):
        """Parse the document with Tree-sitter."""
        parser = self.get_parser()
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        """Get the root node of the parsed tree."""
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def walk_tree(self, start_node: Optional[Node] = None) -> Iterator[Node]:
        """
        Walk the tree using TreeCursor for efficient traversal.

        Args:
            start_node: Node to start from (default: root)

        Yields:
            Node objects in depth-first order
        """
        if start_node is None:
            start_node = self.root_node

        cursor = start_node.walk()
        visited_children = False

        while True:
            if not visited_children:
                yield cursor.node

                if not cursor.goto_first_child():
                    visited_children = True
            elif cursor.goto_next_sibling():
                visited_children = False
            elif not cursor.goto_parent():
                break
            else:
                visited_children = True

    def get_node_text(self, node: Node) -> str:
        """Get text content for a node."""
        return self._text_bytes[node.start_byte:node.end_byte].decode('utf-8')

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """Get char range for a node."""
        start_char = self.byte_to_char_position(node.start_byte)
        end_char = self.byte_to_char_position(node.end_byte)
        return start_char, end_char

    def byte_to_char_position(self, byte_pos: int) -> int:
        """
        Correctly convert byte position to character position in Unicode text.
        Guarantees that if position points to the middle of a multi-byte character,
        returns position before that character.
        """
        if byte_pos <= 0:
            return 0
        if byte_pos >= len(self._text_bytes):
            # If position is beyond text, return text length in characters
            return len(self.text)
        if self._ascii:
            return byte_pos

        # Search for longest valid slice
        # (UTF-8 guarantees maximum 4 bytes per character)
        start = max(0, byte_pos - 4)
        for end in range(byte_pos, start - 1, -1):
            try:
                decoded = self._text_bytes[:end].decode('utf-8')
                return len(decoded)
            except UnicodeDecodeError:
                continue
        # If couldn't decode any slice, return 0
        return 0

    def position_of(self, char_offset: int) -> Tuple[int, int]:
        """1-based (line, column) for a character offset."""
        if self._line_starts is None:
            starts = [0]
            for i, ch in enumerate(self.text):
                if ch == "\n":
                    starts.append(i + 1)
            self._line_starts = starts

        line_idx = bisect_right(self._line_starts, char_offset) - 1
        return line_idx + 1, char_offset - self._line_starts[line_idx] + 1

    @staticmethod
    def get_children_by_type(node: Node, node_type: str) -> List[Node]:
        """
        Get direct children of a specific type.

        Args:
            node: Parent node
            node_type: Type to filter by

        Returns:
            List of child nodes of the specified type
        """
        return [child for child in node.children if child.type == node_type]

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors."""
        if not self.tree:
            return True
        return self.root_node.has_error

    def get_errors(self) -> List[Node]:
        """Get all error and missing nodes in the tree."""
        return [n for n in self.walk_tree() if n.type == "ERROR" or n.is_missing]
