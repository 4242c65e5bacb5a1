from .base import Diagnostic, Fix, FixOperation, Fixer, Rule, RuleContext, RuleMeta
from .registry import get_rule, list_rules, register_lazy

register_lazy(name="simple-style-lists", module=".style_lists.rule", class_name="SimpleStyleListsRule")

__all__ = [
    "Diagnostic",
    "Fix",
    "FixOperation",
    "Fixer",
    "Rule",
    "RuleContext",
    "RuleMeta",
    "get_rule",
    "list_rules",
    "register_lazy",
]
