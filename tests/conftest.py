import textwrap
from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    # debug logging is opt-in and must not leak into captured output
    monkeypatch.delenv("STYLEFIX_DEBUG", raising=False)


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Small project: config with style/compose names, sources, an ignored build dir."""
    root = tmp_path
    write(
        root / ".stylefix.yaml",
        textwrap.dedent("""
        exclude:
          - "legacy/**"
        rules:
          simple-style-lists:
            attributes: [style]
            functions: [compose]
        """).strip() + "\n",
    )
    write(root / ".gitignore", "build/\n")
    write(root / "src" / "App.tsx", "export const App = () => <div style={[base]} />;\n")
    write(root / "src" / "clean.ts", "export const clean = compose(a, b);\n")
    write(root / "src" / "notes.md", "# not source\n")
    write(root / "build" / "App.tsx", "export const App = () => <div style={[base]} />;\n")
    write(root / "legacy" / "old.jsx", "export const Old = () => <div style={[]} />;\n")
    return root
