from .classify import Shape, classify, is_singleton
from .conflicts import can_merge
from .rule import SimpleStyleListsRule, StyleListOptions

__all__ = ["Shape", "classify", "is_singleton", "can_merge", "SimpleStyleListsRule", "StyleListOptions"]
