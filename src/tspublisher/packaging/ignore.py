"""Directory walking that honors `.npmignore`-style rule files."""

from collections.abc import Iterator
import fnmatch
import os
from pathlib import Path
from typing import Self

from attrs import define


@define(frozen=True, slots=True)
class IgnoreRule:
    """A single parsed line of an ignore file."""

    base: tuple[str, ...]
    segments: tuple[str, ...]
    negated: bool = False
    dir_only: bool = False
    anchored: bool = False

    @classmethod
    def parse(cls, line: str, base: tuple[str, ...] = ()) -> Self | None:
        line = line.rstrip("\r\n")
        if not line.strip() or line.startswith("#"):
            return None
        line = line.rstrip()

        negated = line.startswith("!")
        if negated:
            line = line[1:]
        if line.startswith("\\"):
            line = line[1:]

        dir_only = line.endswith("/")
        line = line.rstrip("/")
        anchored = "/" in line
        line = line.lstrip("/")
        if not line:
            return None

        return cls(
            base=base,
            segments=tuple(line.split("/")),
            negated=negated,
            dir_only=dir_only,
            anchored=anchored,
        )

    def matches(self, parts: tuple[str, ...], is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        if parts[: len(self.base)] != self.base:
            return False
        relative = parts[len(self.base):]
        if not relative:
            return False
        if self.anchored:
            return _match_segments(self.segments, relative)
        return fnmatch.fnmatchcase(relative[-1], self.segments[0])


def _match_segments(pattern: tuple[str, ...], parts: tuple[str, ...]) -> bool:
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))
    if not parts:
        return False
    return fnmatch.fnmatchcase(parts[0], head) and _match_segments(rest, parts[1:])


def read_rules(ignore_file: Path, base: tuple[str, ...] = ()) -> list[IgnoreRule]:
    rules = []
    for line in ignore_file.read_text(encoding="utf-8").splitlines():
        rule = IgnoreRule.parse(line, base)
        if rule is not None:
            rules.append(rule)
    return rules


def is_ignored(rules: list[IgnoreRule], parts: tuple[str, ...], is_dir: bool) -> bool:
    """Applies rules in order; the last matching rule decides."""
    ignored = False
    for rule in rules:
        if rule.matches(parts, is_dir):
            ignored = not rule.negated
    return ignored


def walk(
    root: Path,
    ignore_filename: str,
    prune: frozenset[str] = frozenset(),
) -> Iterator[str]:
    """
    Yields the POSIX paths, relative to `root`, of every file not excluded by
    the `ignore_filename` files found along the way.

    Each directory may carry its own ignore file, whose rules apply to that
    directory and everything below it, after the rules inherited from its
    ancestors. Ignored directories are not descended into. Top-level
    directories named in `prune` are skipped without being listed.
    """

    def _walk(directory: Path, parts: tuple[str, ...], rules: list[IgnoreRule]) -> Iterator[str]:
        local_ignore = directory / ignore_filename
        if local_ignore.is_file():
            rules = rules + read_rules(local_ignore, parts)

        with os.scandir(directory) as entries:
            children = sorted(entries, key=lambda entry: entry.name)

        for entry in children:
            child_parts = parts + (entry.name,)
            is_dir = entry.is_dir(follow_symlinks=False)
            if is_dir and not parts and entry.name in prune:
                continue
            if is_ignored(rules, child_parts, is_dir):
                continue
            if is_dir:
                yield from _walk(Path(entry.path), child_parts, rules)
            elif entry.is_file():
                yield "/".join(child_parts)

    yield from _walk(root, (), [])
