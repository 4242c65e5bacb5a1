from pathlib import Path

from stylefix.engine import FileResult, RunResult
from stylefix.report import RunReportM, build_report, format_text
from tests.infrastructure import jsx, make_linter


def lint_result(path: str, code: str, **kwargs) -> FileResult:
    return FileResult(path=Path(path), diagnostics=make_linter(**kwargs).lint_text(code, "tsx"))


def test_build_report_counts(tmp_path):
    run = RunResult(files=[
        lint_result(str(tmp_path / "a.tsx"), jsx("[x]")),
        lint_result(str(tmp_path / "b.tsx"), "const el = <div style={[} />;\n"),
        lint_result(str(tmp_path / "c.tsx"), jsx("[a, b]")),
    ])
    report = build_report(run, tmp_path)

    assert [f.path for f in report.files] == ["a.tsx", "b.tsx", "c.tsx"]
    assert (report.errorCount, report.warningCount, report.fixesApplied) == (1, 1, 0)

    fatal = report.files[1].messages[0]
    assert fatal.fatal
    assert fatal.ruleId is None
    assert fatal.fix is None


def test_paths_outside_root_are_kept(tmp_path):
    run = RunResult(files=[lint_result("/elsewhere/a.tsx", jsx("[x]"))])
    assert build_report(run, tmp_path / "project").files[0].path == "/elsewhere/a.tsx"


def test_report_round_trips_through_json():
    run = RunResult(files=[lint_result("a.tsx", jsx("compose(a, b)"))])
    report = build_report(run)
    parsed = RunReportM.model_validate_json(report.model_dump_json())
    assert parsed == report
    assert [op.text for op in parsed.files[0].messages[0].fix] == ["", "[", "]"]


def test_format_text():
    run = RunResult(files=[
        lint_result("a.tsx", jsx("[x]")),
        lint_result("b.tsx", "const el = <div style={[} />;\n"),
    ])
    run.files[0].fixes_applied = 2
    first, second, summary = format_text(build_report(run)).splitlines()
    assert first == "a.tsx:1:24: warning This array can be flattened. [simple-style-lists]"
    assert second.startswith("b.tsx:1:")
    assert second.endswith(": error Parsing error: invalid syntax")
    assert summary == "2 problem(s) (1 error(s), 1 warning(s)), 2 fix(es) applied"
