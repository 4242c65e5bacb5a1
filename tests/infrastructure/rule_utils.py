"""
Helpers for running the style-list rule over snippets.

Most tests use the `style` attribute and the `compose` function, so the
defaults here configure those names instead of the built-in `css`.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from stylefix.config import Config
from stylefix.engine import Linter
from stylefix.rules import Diagnostic

STYLE_RULE = "simple-style-lists"


def make_config(
    attributes: Sequence[str] = ("style",),
    functions: Sequence[str] = ("compose",),
    *,
    max_fix_passes: int = 10,
) -> Config:
    return Config(
        max_fix_passes=max_fix_passes,
        rules={STYLE_RULE: {"attributes": list(attributes), "functions": list(functions)}},
    )


def make_linter(
    attributes: Sequence[str] = ("style",),
    functions: Sequence[str] = ("compose",),
    *,
    max_fix_passes: int = 10,
) -> Linter:
    return Linter(make_config(attributes, functions, max_fix_passes=max_fix_passes))


def jsx(value: str) -> str:
    """A one-line module with a `style` prop holding value."""
    return f"const el = <div style={{{value}}} />;\n"


def lint(code: str, ext: str = "tsx", **kwargs) -> List[Diagnostic]:
    return make_linter(**kwargs).lint_text(code, ext)


def fix_once(code: str, ext: str = "tsx", **kwargs) -> str:
    """Output of a single fix pass."""
    return make_linter(max_fix_passes=1, **kwargs).fix_text(code, ext).output


def fix_all(code: str, ext: str = "tsx", **kwargs) -> str:
    """Output once fixing has converged."""
    return make_linter(**kwargs).fix_text(code, ext).output


def message_ids(diagnostics: Iterable[Diagnostic]) -> List[str]:
    return [d.message_id for d in diagnostics]
