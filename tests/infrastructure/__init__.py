"""
Shared test infrastructure for stylefix.

Modules:
- file_utils: creating files and directories
- rule_utils: linting and fixing snippets with a configured linter
- golden_utils: comparing fixed output with reference files
"""

from .file_utils import write
from .rule_utils import (
    STYLE_RULE,
    fix_all,
    fix_once,
    jsx,
    lint,
    make_config,
    make_linter,
    message_ids,
)
from .golden_utils import assert_golden_match, read_golden

__all__ = [
    "write",
    "STYLE_RULE",
    "fix_all",
    "fix_once",
    "jsx",
    "lint",
    "make_config",
    "make_linter",
    "message_ids",
    "assert_golden_match",
    "read_golden",
]
