"""
Immutable views of style-list expressions.

Each variant is a snapshot of one host expression node, reduced to what the
simplifier needs: its character span, its ordered children and, for objects,
the statically known property keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class StyleNode:
    """Base class for all expression views."""
    start: int
    end: int


@dataclass(frozen=True)
class EmptyMarker(StyleNode):
    """An expression slot with no value: `style={}` or the hole in `[, a]`."""
    pass


@dataclass(frozen=True)
class ListNode(StyleNode):
    """Array literal `[a, b]`."""
    items: Tuple[StyleNode, ...] = ()


@dataclass(frozen=True)
class Callee:
    name: str
    start: int
    end: int


@dataclass(frozen=True)
class CallNode(StyleNode):
    """Plain call `name(a, b)` with an identifier callee."""
    callee: Optional[Callee] = None
    items: Tuple[StyleNode, ...] = ()

    @property
    def callee_name(self) -> Optional[str]:
        return self.callee.name if self.callee else None


@dataclass(frozen=True)
class Property:
    """
    Object literal entry.

    key is None for non-literal entries (computed keys, spreads), whose
    key set cannot be known statically.
    """
    start: int
    end: int
    key: Optional[str]

    @property
    def is_literal(self) -> bool:
        return self.key is not None


@dataclass(frozen=True)
class ObjectNode(StyleNode):
    """Object literal `{a: 1}`."""
    properties: Tuple[Property, ...] = ()


@dataclass(frozen=True)
class OtherNode(StyleNode):
    """Any expression the simplifier leaves alone (conditionals, identifiers, spreads...)."""
    kind: str = ""
