"""Decides which commands make up a publish run for a project."""

import os
from pathlib import Path
from typing import Any

from pyvider.telemetry import logger

from .commands import BulkCopyCommand, Command, ExecCommand, ScriptCommand
from .models import COMPILER_PACKAGE, LOCAL_COMPILER_BIN, PublisherConfig
from .packaging.selector import select_files

LINT_SCRIPTS = ("lint", "tslint", "eslint", "tslint:check", "eslint:check")
BUILD_SCRIPTS = ("build", "build_all", "compile")
TEST_SCRIPTS = ("test",)


def _find_script(scripts: dict[str, Any], candidates: tuple[str, ...]) -> str | None:
    for name in candidates:
        if scripts.get(name):
            return name
    return None


def _declares(manifest: dict[str, Any], section: str, package: str) -> bool:
    deps = manifest.get(section)
    return isinstance(deps, dict) and bool(deps.get(package))


def plan(
    cwd: str | os.PathLike[str],
    out_dir: str | os.PathLike[str],
    manifest: dict[str, Any],
    config: PublisherConfig,
    checks: bool | None = True,
) -> list[Command]:
    """
    Builds the ordered list of commands for one publish run.

    Explicit `config.steps` are used as-is, each one running the package
    script of that name if the manifest has it and the step as a program
    otherwise. Without steps, one lint script (skipped when `checks` is
    False), one build script, and the test script (skipped when `checks` is
    False) are picked from the manifest, falling back to the locally
    installed TypeScript compiler when no build script exists. When the
    output directory is not `cwd`, a copy of the selected non-source files
    closes the list.
    """
    cwd = Path(cwd)
    out_dir = cwd / out_dir
    commands: list[Command] = []
    scripts = manifest.get("scripts")
    if not isinstance(scripts, dict):
        scripts = {}

    if config.steps is not None:
        for step in config.steps:
            if scripts.get(step):
                commands.append(ScriptCommand(cwd, step))
            else:
                commands.append(ExecCommand(cwd, step))
    else:
        build_step_found = False

        if checks is not False:
            lint = _find_script(scripts, LINT_SCRIPTS)
            if lint:
                commands.append(ScriptCommand(cwd, lint))

        build = _find_script(scripts, BUILD_SCRIPTS)
        if build:
            commands.append(ScriptCommand(cwd, build))
            build_step_found = True

        if checks is not False:
            test = _find_script(scripts, TEST_SCRIPTS)
            if test:
                commands.append(ScriptCommand(cwd, test))

        if not build_step_found:
            if _declares(manifest, "devDependencies", COMPILER_PACKAGE) or _declares(
                manifest, "dependencies", COMPILER_PACKAGE
            ):
                commands.append(ExecCommand(cwd, LOCAL_COMPILER_BIN))
            else:
                logger.warning(
                    "No build script or TypeScript dependency found, nothing will be compiled.",
                    cwd=str(cwd),
                )

    if out_dir.resolve() != cwd.resolve():
        files = select_files(cwd, out_dir)
        if files:
            commands.append(BulkCopyCommand(cwd, out_dir, files))

    logger.debug("Planned commands", count=len(commands))
    return commands
