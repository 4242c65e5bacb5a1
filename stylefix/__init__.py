"""
stylefix: an autofixing linter that simplifies style lists
(`css={[...]}` props and `css(...)` composition calls) in JSX/TSX sources.
"""

from .engine import FixResult, Linter, run_check
from .version import tool_version

__all__ = ["FixResult", "Linter", "run_check", "tool_version"]
