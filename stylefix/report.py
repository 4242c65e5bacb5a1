"""
Report schema (pydantic) and the plain-text formatter.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .engine import FileResult, RunResult
from .rules import Diagnostic
from .version import tool_version

FORMAT_VERSION = 1


class FixOperationM(BaseModel):
    start: int
    end: int
    text: str


class MessageM(BaseModel):
    ruleId: Optional[str] = None
    messageId: str
    message: str
    severity: Literal["warn", "error"]
    fatal: bool = False
    line: int
    column: int
    endLine: int
    endColumn: int
    fix: Optional[List[FixOperationM]] = None


class FileReportM(BaseModel):
    path: str
    messages: List[MessageM] = Field(default_factory=list)
    errorCount: int = 0
    warningCount: int = 0
    fixesApplied: int = 0
    output: Optional[str] = None


class RunReportM(BaseModel):
    formatVersion: int = FORMAT_VERSION
    toolVersion: str
    files: List[FileReportM] = Field(default_factory=list)
    errorCount: int = 0
    warningCount: int = 0
    fixesApplied: int = 0


def message_model(d: Diagnostic) -> MessageM:
    return MessageM(
        ruleId=d.rule or None,
        messageId=d.message_id,
        message=d.message,
        severity=d.severity,
        fatal=d.fatal,
        line=d.line,
        column=d.column,
        endLine=d.end_line,
        endColumn=d.end_column,
        fix=[FixOperationM(start=op.start, end=op.end, text=op.text) for op in d.fix.operations] if d.fix else None,
    )


def _display_path(path: Path, root: Optional[Path]) -> str:
    if root is not None:
        try:
            return path.resolve().relative_to(root.resolve()).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def file_model(result: FileResult, root: Optional[Path] = None) -> FileReportM:
    messages = [message_model(d) for d in result.diagnostics]
    return FileReportM(
        path=_display_path(result.path, root),
        messages=messages,
        errorCount=sum(1 for m in messages if m.severity == "error"),
        warningCount=sum(1 for m in messages if m.severity == "warn"),
        fixesApplied=result.fixes_applied,
        output=result.output,
    )


def build_report(run: RunResult, root: Optional[Path] = None) -> RunReportM:
    files = [file_model(f, root) for f in run.files]
    return RunReportM(
        toolVersion=tool_version(),
        files=files,
        errorCount=sum(f.errorCount for f in files),
        warningCount=sum(f.warningCount for f in files),
        fixesApplied=sum(f.fixesApplied for f in files),
    )


def format_text(report: RunReportM) -> str:
    """`path:line:column: severity message [rule]` per message plus a summary line."""
    lines: List[str] = []
    for f in report.files:
        for m in f.messages:
            rule = f" [{m.ruleId}]" if m.ruleId else ""
            severity = "error" if m.severity == "error" else "warning"
            lines.append(f"{f.path}:{m.line}:{m.column}: {severity} {m.message}{rule}")

    problems = report.errorCount + report.warningCount
    summary = f"{problems} problem(s) ({report.errorCount} error(s), {report.warningCount} warning(s))"
    if report.fixesApplied:
        summary += f", {report.fixesApplied} fix(es) applied"
    lines.append(summary)
    return "\n".join(lines) + "\n"
