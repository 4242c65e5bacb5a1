from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import StylefixUserError
from .jsonic import dumps as jdumps
from .log import setup_logging_once
from .types import RunOptions, Severity
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stylefix",
        description="Simplify style lists in JSX/TSX sources",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_check = sub.add_parser("check", help="lint files and directories")
    sp_check.add_argument("paths", nargs="*", default=["."], help="files or directories (default: .)")
    sp_check.add_argument("--fix", action="store_true", help="apply fixes in place")
    sp_check.add_argument("--format", choices=["text", "json"], default="text", help="output format")
    sp_check.add_argument("--config", metavar="FILE", help="config file (default: ./.stylefix.yaml)")
    sp_check.add_argument(
        "--rule",
        action="append",
        metavar="NAME=SEVERITY",
        help="override a rule severity: off, warn or error (can be repeated)",
    )

    sp_list = sub.add_parser("list", help="list entities (JSON)")
    sp_list.add_argument("what", choices=["rules"], help="what to list")

    sp_fix = sub.add_parser("fix-text", help="fix source read from stdin, write it to stdout")
    sp_fix.add_argument("--ext", default="tsx", help="extension that selects the grammar (default: tsx)")
    sp_fix.add_argument("--config", metavar="FILE", help="config file (default: ./.stylefix.yaml)")

    return p


def _parse_rule_overrides(specs: Optional[List[str]]) -> Dict[str, Severity]:
    """Parses 'name=severity' pairs into a dict; severities are checked when rules resolve."""
    result: Dict[str, Severity] = {}
    for spec in specs or []:
        if "=" not in spec:
            raise StylefixUserError(f"Invalid rule override '{spec}'. Expected 'name=severity'")
        name, severity = (s.strip() for s in spec.split("=", 1))
        result[name] = severity  # type: ignore[assignment]
    return result


def _opts(ns: argparse.Namespace) -> RunOptions:
    return RunOptions(
        fix=bool(ns.fix),
        output_format=ns.format,
        severity_overrides=_parse_rule_overrides(ns.rule),
    )


def _list_rules() -> Dict[str, Any]:
    from .rules import get_rule, list_rules
    rules = []
    for name in list_rules():
        meta = get_rule(name).meta
        rules.append({
            "name": meta.name,
            "description": meta.description,
            "defaultSeverity": meta.default_severity,
            "fixable": meta.fixable,
            "docsUrl": meta.docs_url,
            "messages": dict(meta.messages),
        })
    return {"rules": rules}


def main(argv: list[str] | None = None) -> int:
    setup_logging_once()
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "check":
            from .engine import run_check
            from .report import build_report, format_text

            options = _opts(ns)
            root = Path.cwd()
            run = run_check(
                [Path(p) for p in ns.paths],
                root=root,
                config_path=Path(ns.config) if ns.config else None,
                fix=options.fix,
                overrides=options.severity_overrides,
            )
            report = build_report(run, root)
            if options.output_format == "json":
                sys.stdout.write(jdumps(report.model_dump(mode="json")) + "\n")
            else:
                sys.stdout.write(format_text(report))
            return 1 if run.has_errors else 0

        if ns.cmd == "list":
            sys.stdout.write(jdumps(_list_rules()) + "\n")
            return 0

        if ns.cmd == "fix-text":
            from .config import load_config
            from .engine import Linter

            config = load_config(Path.cwd(), Path(ns.config) if ns.config else None)
            source = sys.stdin.read()
            result = Linter(config).fix_text(source, ns.ext)
            sys.stdout.write(result.output)
            return 1 if any(d.severity == "error" for d in result.remaining) else 0

    except StylefixUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
