"""Selection of the non-source files that belong in the distribution directory."""

import os
from pathlib import Path

from pyvider.telemetry import logger

from ..models import IGNORE_RULE_FILENAME
from .ignore import walk

IGNORED_FILES = frozenset(
    {
        ".DS_Store",
        ".npmrc",
        "npm-debug.log",
        "config.gypi",
        ".gitignore",
        "package.json",
        "package-lock.json",
    }
)
IGNORED_PREFIXES = (".git/", ".hg/", "node_modules/")
AUTO_INCLUDE_FILES = frozenset({"README", "LICENSE", "LICENCE", "CHANGELOG"})


def should_include_file(entry: str, out_dir: str) -> bool:
    return (
        not entry.startswith(IGNORED_PREFIXES)
        and (out_dir == "" or not entry.startswith(out_dir))
        and entry not in IGNORED_FILES
    )


def _relative_out_dir(root: Path, out_dir: str | os.PathLike[str] | None) -> str:
    if not out_dir:
        return ""
    out_path = Path(out_dir)
    if out_path.is_absolute():
        try:
            return out_path.resolve().relative_to(root.resolve()).as_posix()
        except ValueError:
            return ""
    return out_path.as_posix() if out_path.parts else ""


def select_files(
    project_root: str | os.PathLike[str],
    out_dir: str | os.PathLike[str] | None = None,
) -> list[str]:
    """
    Gets the files to copy into the distribution directory.

    The list holds files not excluded by `.npmignore` (only when that file
    exists) and always README, LICEN[CS]E and CHANGELOG from the top level
    of the project, whatever their extension. Paths are relative to
    `project_root`, use `/` separators, and are sorted.
    """
    root = Path(project_root)
    files: set[str] = set()
    stripped_out_dir = _relative_out_dir(root, out_dir)
    if stripped_out_dir == ".":
        stripped_out_dir = ""

    if (root / IGNORE_RULE_FILENAME).exists():
        prune = frozenset(prefix.rstrip("/") for prefix in IGNORED_PREFIXES)
        for entry in walk(root, IGNORE_RULE_FILENAME, prune=prune):
            if should_include_file(entry, stripped_out_dir):
                files.add(entry)

    for path in root.iterdir():
        if not path.is_file():
            continue
        if path.stem.upper() in AUTO_INCLUDE_FILES:
            files.add(path.name)

    logger.debug(
        "Selected files for distribution",
        root=str(root),
        out_dir=stripped_out_dir,
        count=len(files),
    )
    return sorted(files)
