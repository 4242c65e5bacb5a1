from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal

# ---- Aliases for clarity ----
Severity = Literal["off", "warn", "error"]
OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunOptions:
    fix: bool = False
    output_format: OutputFormat = "text"
    # rule name -> severity override from the command line
    severity_overrides: Dict[str, Severity] = field(default_factory=dict)
