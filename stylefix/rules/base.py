"""
Rule framework: rule descriptors, the per-file rule context,
diagnostics and the fix operations they carry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple

from ..range_edits import TextRange, ranges_overlap
from ..tokens import Span, TokenStore
from ..tree_sitter_support import Node, TreeSitterDocument
from ..types import Severity

# host node type -> callback
VisitorMap = Dict[str, Callable[[Node], None]]


@dataclass(frozen=True)
class RuleMeta:
    """Static description of a rule."""
    name: str
    description: str
    default_severity: Severity
    fixable: bool
    messages: Mapping[str, str]
    """Message catalog: message id -> template with {placeholders}."""
    docs_url: str = ""

    def render(self, message_id: str, data: Optional[Mapping[str, Any]] = None) -> str:
        template = self.messages[message_id]
        return template.format(**data) if data else template


@dataclass(frozen=True)
class FixOperation:
    """Replace text[start:end] with text. start == end is an insertion, text == "" a deletion."""
    start: int
    end: int
    text: str

    @property
    def range(self) -> TextRange:
        return TextRange(self.start, self.end)


@dataclass(frozen=True)
class Fix:
    """Ordered, pairwise disjoint edits realizing one simplification."""
    operations: Tuple[FixOperation, ...]

    def __post_init__(self):
        if ranges_overlap(op.range for op in self.operations):
            raise ValueError(f"Fix operations overlap: {self.operations}")

    def __bool__(self) -> bool:
        return bool(self.operations)


class Fixer:
    """Builds fix operations for spans (nodes, fragments or tokens)."""

    @staticmethod
    def remove(span: Span) -> FixOperation:
        return FixOperation(span.start, span.end, "")

    @staticmethod
    def remove_range(start: int, end: int) -> FixOperation:
        return FixOperation(start, end, "")

    @staticmethod
    def replace_text(span: Span, text: str) -> FixOperation:
        return FixOperation(span.start, span.end, text)


@dataclass(frozen=True)
class Diagnostic:
    rule: str
    message_id: str
    message: str
    severity: Severity
    start: int
    end: int
    line: int
    column: int
    end_line: int
    end_column: int
    fix: Optional[Fix] = None
    fatal: bool = False


@dataclass
class RuleContext:
    """
    Everything a rule sees while visiting one document.
    Diagnostics are collected here; fixes are never applied during traversal.
    """
    rule: Rule
    severity: Severity
    options: Any
    doc: TreeSitterDocument
    tokens: TokenStore
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def report(
        self,
        message_id: str,
        start: int,
        end: int,
        *,
        data: Optional[Mapping[str, Any]] = None,
        fix: Sequence[FixOperation] = (),
    ) -> Diagnostic:
        meta = self.rule.meta
        line, column = self.doc.position_of(start)
        end_line, end_column = self.doc.position_of(end)
        diagnostic = Diagnostic(
            rule=meta.name,
            message_id=message_id,
            message=meta.render(message_id, data),
            severity=self.severity,
            start=start,
            end=end,
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
            fix=Fix(tuple(fix)) if fix and meta.fixable else None,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic


class Rule(ABC):
    """Base class for lint rules."""

    meta: ClassVar[RuleMeta]

    @classmethod
    def default_options(cls) -> Any:
        return None

    @classmethod
    def load_options(cls, raw: Mapping[str, Any]) -> Any:
        """Build typed options from the raw configuration mapping."""
        return cls.default_options()

    @abstractmethod
    def create(self, context: RuleContext) -> VisitorMap:
        """Return the visitor map for one document."""
        ...
