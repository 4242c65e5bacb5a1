"""
Lint engine: one traversal per document dispatching nodes to rule
visitors, and the multi-pass fix loop on top of it.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .config import Config, RuleSettings, load_config, resolve_rules
from .fs import build_ignore_spec, iter_files, read_text, write_text
from .range_edits import RangeEditor
from .rules import Diagnostic, RuleContext, get_rule
from .tokens import TokenStore
from .tree_sitter_support import Node, TreeSitterDocument
from .types import Severity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixResult:
    output: str
    passes: int
    fixes_applied: int
    remaining: List[Diagnostic]

    def changed(self, original: str) -> bool:
        return self.output != original


@dataclass
class FileResult:
    path: Path
    diagnostics: List[Diagnostic] = field(default_factory=list)
    fixes_applied: int = 0
    output: Optional[str] = None  # fixed text, when fixing changed anything


@dataclass
class RunResult:
    files: List[FileResult] = field(default_factory=list)

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.files for d in f.diagnostics if d.severity == severity)

    @property
    def has_errors(self) -> bool:
        return self.count("error") > 0


def _fatal(doc: TreeSitterDocument, message: str, start: int = 0, end: int = 0) -> Diagnostic:
    line, column = doc.position_of(start)
    end_line, end_column = doc.position_of(end)
    return Diagnostic(
        rule="",
        message_id="fatal",
        message=message,
        severity="error",
        start=start,
        end=end,
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
        fatal=True,
    )


def _apply_fixes(text: str, fixes: Iterable[Diagnostic]) -> Tuple[str, Dict[str, Any], List[Diagnostic]]:
    """
    Apply whole fixes in order. A fix overlapping one accepted before it
    is skipped; the accepted diagnostics are returned with the new text.
    """
    editor = RangeEditor(text)
    accepted: List[Diagnostic] = []
    for d in fixes:
        ops = [(op.start, op.end, op.text) for op in d.fix.operations]
        if editor.add_fix(ops, edit_type=f"{d.rule}/{d.message_id}"):
            accepted.append(d)
    output, stats = editor.apply_edits()
    return output, stats, accepted


def _drop_breaking_fixes(text: str, ext: str, fixes: List[Diagnostic]) -> List[Diagnostic]:
    """Keep each fix only if the text still parses with it and every fix kept before it."""
    kept: List[Diagnostic] = []
    for d in fixes:
        candidate, _, _ = _apply_fixes(text, [*kept, d])
        if TreeSitterDocument(candidate, ext).has_error():
            logger.warning(
                "Dropping %s fix at %d:%d: it produces unparsable code",
                d.rule, d.line, d.column,
            )
        else:
            kept.append(d)
    return kept


class Linter:
    """Runs the enabled rules over documents."""

    def __init__(self, config: Optional[Config] = None, overrides: Optional[Mapping[str, Severity]] = None):
        self.config = config or Config()
        self.settings: List[RuleSettings] = [
            s for s in resolve_rules(self.config, overrides) if s.severity != "off"
        ]

    # -------- single document --------

    def lint_text(self, text: str, ext: str) -> List[Diagnostic]:
        """All diagnostics for one document, sorted by position."""
        doc = TreeSitterDocument(text, ext)
        if doc.has_error():
            errors = doc.get_errors()
            start, end = doc.get_node_range(errors[0]) if errors else (0, 0)
            logger.debug("Parse error at offset %d, rules skipped", start)
            return [_fatal(doc, "Parsing error: invalid syntax", start, end)]

        tokens = TokenStore.from_document(doc)
        contexts: List[RuleContext] = []
        dispatch: Dict[str, List[Callable[[Node], None]]] = defaultdict(list)
        for s in self.settings:
            rule = get_rule(s.name)()
            ctx = RuleContext(rule=rule, severity=s.severity, options=s.options, doc=doc, tokens=tokens)
            for node_type, callback in rule.create(ctx).items():
                dispatch[node_type].append(callback)
            contexts.append(ctx)

        for node in doc.walk_tree():
            for callback in dispatch.get(node.type, ()):
                callback(node)

        diagnostics = [d for ctx in contexts for d in ctx.diagnostics]
        return sorted(diagnostics, key=lambda d: (d.start, d.end))

    def fix_text(self, text: str, ext: str) -> FixResult:
        """
        Apply fixes until nothing more applies or the pass limit is hit.

        Each pass applies whole fixes in position order; a fix overlapping
        one accepted earlier in the same pass waits for the next pass. Fixes
        that would leave the document unparsable are dropped from the pass.
        """
        output = text
        passes = 0
        applied = 0
        diagnostics = self.lint_text(output, ext)

        while passes < self.config.max_fix_passes:
            fixable = [d for d in diagnostics if d.fix]
            if not fixable:
                break

            candidate, stats, accepted = _apply_fixes(output, fixable)
            if not accepted:
                break

            if TreeSitterDocument(candidate, ext).has_error():
                accepted = _drop_breaking_fixes(output, ext, accepted)
                if not accepted:
                    logger.warning("Fixes produced unparsable code; keeping the previous text")
                    break
                candidate, stats, accepted = _apply_fixes(output, accepted)

            passes += 1
            applied += len(accepted)
            logger.debug(
                "Fix pass %d: %d fix(es), %d edit(s), %d byte(s) saved",
                passes, len(accepted), stats["edits_applied"], stats["bytes_saved"],
            )
            output = candidate
            diagnostics = self.lint_text(output, ext)

        return FixResult(output=output, passes=passes, fixes_applied=applied, remaining=diagnostics)

    # -------- files --------

    def lint_file(self, path: Path, *, fix: bool = False) -> FileResult:
        ext = path.suffix.lstrip(".")
        try:
            text = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s: %s", path, e)
            doc = TreeSitterDocument("", ext)
            return FileResult(path=path, diagnostics=[_fatal(doc, f"Cannot read file: {e}")])

        logger.debug("Linting %s", path)
        if not fix:
            return FileResult(path=path, diagnostics=self.lint_text(text, ext))

        result = self.fix_text(text, ext)
        file_result = FileResult(path=path, diagnostics=result.remaining, fixes_applied=result.fixes_applied)
        if result.changed(text):
            write_text(path, result.output)
            file_result.output = result.output
        return file_result

    def lint_paths(self, root: Path, paths: Iterable[Path], *, fix: bool = False) -> RunResult:
        spec = build_ignore_spec(root, self.config.exclude)
        run = RunResult()
        for path in iter_files(root, paths, extensions=self.config.extensions, spec=spec):
            run.files.append(self.lint_file(path, fix=fix))
        return run


def run_check(
    paths: Iterable[Path],
    *,
    root: Optional[Path] = None,
    config_path: Optional[Path] = None,
    fix: bool = False,
    overrides: Optional[Mapping[str, Severity]] = None,
) -> RunResult:
    """Main entry for the CLI: load configuration, lint (and fix) the given paths."""
    root = root or Path.cwd()
    config = load_config(root, config_path)
    return Linter(config, overrides).lint_paths(root, paths, fix=fix)
