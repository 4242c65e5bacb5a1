from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Dict, List, Type

from ..errors import UnknownRuleError
from .base import Rule

__all__ = [
    "register_lazy",
    "get_rule",
    "list_rules",
]


@dataclass(frozen=True)
class _LazySpec:
    module: str
    class_name: str


# Lazy specs: rule name -> where the class lives
_LAZY_BY_NAME: Dict[str, _LazySpec] = {}

# Resolved classes by rule name
_CLASS_BY_NAME: Dict[str, Type[Rule]] = {}


def register_lazy(*, name: str, module: str, class_name: str) -> None:
    """
    Register a rule "by strings" without importing its module.
    """
    _LAZY_BY_NAME[name] = _LazySpec(module=module, class_name=class_name)


def _load_rule_from_spec(name: str, spec: _LazySpec) -> Type[Rule]:
    # Both relative (".style_lists") and absolute module names are supported.
    mod = importlib.import_module(spec.module, package=__package__)
    cls = getattr(mod, spec.class_name, None)
    if cls is None:
        raise RuntimeError(f"Rule class '{spec.class_name}' not found in {spec.module}")
    if not issubclass(cls, Rule):
        raise TypeError(f"{spec.module}.{spec.class_name} is not a subclass of Rule")
    if cls.meta.name != name:
        raise RuntimeError(f"Rule registered as '{name}' declares name '{cls.meta.name}'")

    _CLASS_BY_NAME[name] = cls
    return cls


def get_rule(name: str) -> Type[Rule]:
    """
    Return the rule CLASS registered under name. Nothing is instantiated.
    """
    cls = _CLASS_BY_NAME.get(name)
    if cls:
        return cls
    spec = _LAZY_BY_NAME.get(name)
    if spec is None:
        raise UnknownRuleError(name, list_rules())
    return _load_rule_from_spec(name, spec)


def list_rules() -> List[str]:
    """Names of all registered rules, sorted."""
    return sorted(_LAZY_BY_NAME)
