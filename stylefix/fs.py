from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

import pathspec

from .errors import StylefixUserError

logger = logging.getLogger(__name__)

# Never entered while walking directories
SKIP_DIRS = {".git", "node_modules"}


def read_text(path: Path) -> str:
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, text: str) -> None:
    tmp = path.with_name(path.name + ".stylefix-tmp")
    with tmp.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    tmp.replace(path)


def build_ignore_spec(root: Path, extra: Sequence[str] = ()) -> Optional[pathspec.PathSpec]:
    """
    PathSpec from the root .gitignore plus configured exclude patterns.
    Returns None when there is nothing to ignore.
    """
    lines: List[str] = []
    gitignore = root / ".gitignore"
    if gitignore.is_file():
        for ln in gitignore.read_text(encoding="utf-8", errors="ignore").splitlines():
            ln = ln.strip()
            if ln and not ln.startswith("#"):
                lines.append(ln)
    lines.extend(extra)
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def _rel_posix(path: Path, root: Path) -> Optional[str]:
    try:
        return path.resolve().relative_to(root).as_posix()
    except ValueError:
        # outside the root: ignore patterns do not apply
        return None


def iter_files(
    root: Path,
    paths: Iterable[Path],
    *,
    extensions: Iterable[str],
    spec: Optional[pathspec.PathSpec],
) -> Iterator[Path]:
    """
    Files to lint under the given paths, in a stable order.

    Explicit file arguments are always yielded; directories are walked
    recursively with extension filtering and ignore patterns applied.
    """
    root = root.resolve()
    exts = {e.lower() if e.startswith(".") else f".{e.lower()}" for e in extensions}
    seen = set()

    for target in paths:
        if not target.exists():
            raise StylefixUserError(f"No such file or directory: {target}")
        if target.is_file():
            if target.resolve() not in seen:
                seen.add(target.resolve())
                yield target
            continue

        for dirpath, dirnames, filenames in os.walk(target):
            keep: List[str] = []
            for d in sorted(dirnames):
                if d in SKIP_DIRS:
                    continue
                rel_dir = _rel_posix(Path(dirpath, d), root)
                # .gitignore can hide a branch completely
                if spec and rel_dir is not None and spec.match_file(rel_dir + "/"):
                    logger.debug("Pruned ignored directory %s", rel_dir)
                    continue
                keep.append(d)
            dirnames[:] = keep

            for fn in sorted(filenames):
                p = Path(dirpath, fn)
                if p.suffix.lower() not in exts:
                    continue
                rel = _rel_posix(p, root)
                if spec and rel is not None and spec.match_file(rel):
                    continue
                if p.resolve() not in seen:
                    seen.add(p.resolve())
                    yield p
