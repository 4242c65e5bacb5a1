"""
Merge safety check for adjacent object fragments.
"""

from __future__ import annotations

from typing import Sequence

from .nodes import Property


def all_literal(props: Sequence[Property]) -> bool:
    return all(p.is_literal for p in props)


def can_merge(props_a: Sequence[Property], props_b: Sequence[Property]) -> bool:
    """
    True only when merging B's properties after A's provably keeps every value.

    Any computed key or spread on either side makes the key set unknowable,
    and any shared key could change which fragment wins, so both answer False.
    """
    if not all_literal(props_a) or not all_literal(props_b):
        return False

    keys_a = {p.key for p in props_a}
    return not any(p.key in keys_a for p in props_b)
