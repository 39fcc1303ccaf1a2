"""
The executable units of a publish run.

Every command is an immutable attrs class; `describe` narrates a command to
the console and `execute` runs it, returning an exit status where 0 means
success.
"""

import asyncio
from collections.abc import Iterable
from pathlib import Path
import shutil
from typing import assert_never

import click
from attrs import define, field

from pyvider.telemetry import logger

from .exceptions import CommandConstructionError, CopyError
from .models import PACKAGE_MANAGER


def _check_copyable(src: Path, file: str) -> None:
    if not (src / file).is_file():
        raise CommandConstructionError("Can only copy files")


@define(frozen=True, slots=True)
class ExecCommand:
    cwd: Path = field(converter=Path)
    program: str
    args: tuple[str, ...] = field(default=(), converter=tuple)

    def __str__(self) -> str:
        return " ".join((self.program, *self.args))


@define(frozen=True, slots=True)
class ScriptCommand:
    cwd: Path = field(converter=Path)
    script: str
    args: tuple[str, ...] = field(default=(), converter=tuple)

    def as_exec(self) -> ExecCommand:
        return ExecCommand(self.cwd, PACKAGE_MANAGER, ("run", self.script, *self.args))

    def __str__(self) -> str:
        return str(self.as_exec())


@define(frozen=True, slots=True)
class CopyCommand:
    src: Path = field(converter=Path)
    dest: Path = field(converter=Path)
    file: str

    def __attrs_post_init__(self) -> None:
        _check_copyable(self.src, self.file)

    def __str__(self) -> str:
        return f"copy {self.src / self.file} -> {self.dest / self.file}"


@define(frozen=True, slots=True)
class BulkCopyCommand:
    src: Path = field(converter=Path)
    dest: Path = field(converter=Path)
    files: tuple[str, ...] = field(converter=tuple)

    def __attrs_post_init__(self) -> None:
        for file in self.files:
            _check_copyable(self.src, file)

    def __str__(self) -> str:
        return f"copy {len(self.files)} file(s) {self.src} -> {self.dest}"


@define(frozen=True, slots=True)
class CleanCommand:
    target: Path = field(converter=Path)

    def __str__(self) -> str:
        return f"remove {self.target}"


Command = ExecCommand | ScriptCommand | CopyCommand | BulkCopyCommand | CleanCommand


def _echo_copy(src: Path, dest: Path, file: str, color: bool | None) -> None:
    click.echo(f"   {click.style(str(src / file), fg='cyan')}", color=color)
    click.echo(f"   -> {click.style(str(dest / file), fg='green')}", color=color)


def describe(command: Command, *, color: bool | None = None) -> None:
    """Prints a short description of what `command` is about to do."""
    match command:
        case ExecCommand() | ScriptCommand():
            click.echo("> ExecCommand", color=color)
            click.echo(f">   {click.style(str(command), fg='cyan')}", color=color)
        case CopyCommand(src=src, dest=dest, file=file):
            click.echo("> CopyCommand", color=color)
            _echo_copy(src, dest, file, color)
        case BulkCopyCommand(src=src, dest=dest, files=files):
            click.echo("> BulkCopyCommand", color=color)
            for file in files:
                _echo_copy(src, dest, file, color)
        case CleanCommand(target=target):
            click.echo("> CleanCommand", color=color)
            click.echo(f"   {click.style(str(target), fg='yellow')}", color=color)
        case _:
            assert_never(command)


def _copy_file(src: Path, dest: Path, file: str) -> None:
    target = dest / file
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src / file, target)


async def _run_process(command: ExecCommand) -> int:
    logger.info(f"Running command: {command}", cwd=str(command.cwd))
    process = await asyncio.create_subprocess_exec(
        command.program, *command.args, cwd=command.cwd
    )
    return await process.wait()


async def _copy_all(src: Path, dest: Path, files: Iterable[str]) -> int:
    files = list(files)
    results = await asyncio.gather(
        *(asyncio.to_thread(_copy_file, src, dest, file) for file in files),
        return_exceptions=True,
    )
    failures = {
        file: result
        for file, result in zip(files, results)
        if isinstance(result, BaseException)
    }
    if failures:
        raise CopyError(failures) from next(iter(failures.values()))
    return 0


async def execute(command: Command) -> int:
    """
    Runs `command` to completion and returns its exit status.

    Processes that cannot be started raise `OSError`; copy failures raise
    the underlying I/O error, or `CopyError` for a bulk copy.
    """
    match command:
        case ExecCommand():
            return await _run_process(command)
        case ScriptCommand():
            return await _run_process(command.as_exec())
        case CopyCommand(src=src, dest=dest, file=file):
            await asyncio.to_thread(_copy_file, src, dest, file)
            return 0
        case BulkCopyCommand(src=src, dest=dest, files=files):
            return await _copy_all(src, dest, files)
        case CleanCommand(target=target):
            if target.exists():
                await asyncio.to_thread(shutil.rmtree, target)
            return 0
        case _:
            assert_never(command)
