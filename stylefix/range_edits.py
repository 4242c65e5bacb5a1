"""
Range-based text editing for applying fixes.
Edits are collected against the original text and applied in one go,
so offsets never shift while fixes are being gathered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextRange:
    """Represents a range in text by character positions."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: start_char ({self.start_char}) > end_char ({self.end_char})")

    @property
    def length(self) -> int:
        return self.end_char - self.start_char

    @property
    def is_empty(self) -> bool:
        return self.start_char == self.end_char

    def overlaps(self, other: TextRange) -> bool:
        """
        Check if this range overlaps with another.

        Touching ranges do not overlap. A zero-width range (an insertion point)
        overlaps a wider range only when it lies strictly inside it, and another
        insertion point only at the same position.
        """
        if self.is_empty and other.is_empty:
            return self.start_char == other.start_char
        if self.is_empty:
            return other.start_char < self.start_char < other.end_char
        if other.is_empty:
            return self.start_char < other.start_char < self.end_char
        return self.start_char < other.end_char and other.start_char < self.end_char

    def contains(self, other: TextRange) -> bool:
        """Check if this range completely contains another."""
        return self.start_char <= other.start_char and other.end_char <= self.end_char


@dataclass(frozen=True)
class Edit:
    """Represents a single text edit operation using character positions."""
    range: TextRange
    replacement: str
    type: Optional[str] = None  # Fix owner (rule/message) for statistics


def ranges_overlap(ranges: Iterable[TextRange]) -> bool:
    """True if any two of the given ranges overlap."""
    seen: List[TextRange] = []
    for r in ranges:
        if any(r.overlaps(s) for s in seen):
            return True
        seen.append(r)
    return False


class RangeEditor:
    """
    Unicode-safe range-based text editor that works with character positions.

    Fixes are accepted as whole units: a fix is rejected when any of its edits
    overlaps an edit that was accepted earlier (first wins). Rejected fixes are
    expected to be retried on the next pass over the rewritten text.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.edits: List[Edit] = []

    def add_fix(self, operations: Iterable[Tuple[int, int, str]], edit_type: Optional[str] = None) -> bool:
        """
        Add all edits of one fix, or none of them.

        Args:
            operations: (start_char, end_char, replacement) triples
            edit_type: Type for statistics tracking

        Returns:
            True if the fix was accepted
        """
        candidate = [Edit(TextRange(start, end), text, edit_type) for start, end, text in operations]
        for edit in candidate:
            for existing in self.edits:
                if edit.range.overlaps(existing.range):
                    logger.debug(
                        "Skipping fix %s: %s overlaps accepted edit %s",
                        edit_type, edit.range, existing.range,
                    )
                    return False
        self.edits.extend(candidate)
        return True

    def add_deletion(self, start_char: int, end_char: int, edit_type: Optional[str] = None) -> bool:
        """Add a deletion operation (empty replacement)."""
        return self.add_fix([(start_char, end_char, "")], edit_type)

    def add_replacement(self, start_char: int, end_char: int, replacement: str, edit_type: Optional[str] = None) -> bool:
        """Add a replacement operation."""
        return self.add_fix([(start_char, end_char, replacement)], edit_type)

    def add_insertion(self, position_char: int, content: str, edit_type: Optional[str] = None) -> bool:
        """Add an insertion at the specified character position."""
        return self.add_fix([(position_char, position_char, content)], edit_type)

    def validate_edits(self) -> List[str]:
        """
        Validate that all edits are within bounds.
        Overlap conflicts are filtered at add_fix stage.
        """
        errors = []

        for i, edit in enumerate(self.edits):
            if edit.range.start_char < 0:
                errors.append(f"Edit {i}: start_char ({edit.range.start_char}) is negative")
            if edit.range.end_char > len(self.original_text):
                errors.append(f"Edit {i}: end_char ({edit.range.end_char}) exceeds text length ({len(self.original_text)})")

        return errors

    def apply_edits(self) -> Tuple[str, Dict[str, Any]]:
        """
        Apply all edits and return the modified text and statistics.

        Returns:
            Tuple of (modified_text, statistics)
        """
        validation_errors = self.validate_edits()
        if validation_errors:
            raise ValueError(f"Edit validation failed: {'; '.join(validation_errors)}")

        if not self.edits:
            return self.original_text, {"edits_applied": 0, "bytes_removed": 0, "bytes_added": 0, "bytes_saved": 0}

        # Sort all edits by position (reverse order for safe application).
        # Insertions go after a replacement that ends at the same point.
        sorted_edits = sorted(
            self.edits,
            key=lambda e: (e.range.start_char, e.range.end_char),
            reverse=True,
        )

        parts: List[str] = []
        cursor = len(self.original_text)
        stats = {
            "edits_applied": len(self.edits),
            "bytes_removed": 0,
            "bytes_added": 0,
        }

        # Assemble from end to beginning
        for edit in sorted_edits:
            original_chunk = self.original_text[edit.range.start_char:edit.range.end_char]
            parts.append(self.original_text[edit.range.end_char:cursor])
            parts.append(edit.replacement)
            cursor = edit.range.start_char

            stats["bytes_removed"] += len(original_chunk.encode('utf-8'))
            stats["bytes_added"] += len(edit.replacement.encode('utf-8'))

        parts.append(self.original_text[:cursor])
        result_text = "".join(reversed(parts))

        stats["bytes_saved"] = stats["bytes_removed"] - stats["bytes_added"]
        return result_text, stats
