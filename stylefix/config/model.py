from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..types import Severity

DEFAULT_EXTENSIONS = [".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".mts", ".cts"]


@dataclass
class Config:
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    """File extensions picked up when walking directories."""
    exclude: List[str] = field(default_factory=list)
    """Extra gitwildmatch patterns, relative to the working directory."""
    max_fix_passes: int = 10
    rules: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    """rule name -> {severity: ..., <rule options>...}"""


@dataclass(frozen=True)
class RuleSettings:
    """A rule resolved against configuration: effective severity and typed options."""
    name: str
    severity: Severity
    options: Any
